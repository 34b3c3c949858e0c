import json

import pytest

from downloader.errors import TransportError
from downloader.file_handler import FileHandler


class FakeClient:
    """Stands in for HttpClient; responses are keyed by URL."""

    def __init__(self):
        self.pages = {}
        self.api_responses = []
        self.files = {}
        self.calls = []
        self.closed = False

    def fetch_html(self, url, user_agent=None):
        self.calls.append(('html', url))
        page = self.pages.get(url.split('?')[0])
        if page is None or isinstance(page, Exception):
            raise page or TransportError(url, "404 Not Found", status_code=404)
        return page

    def fetch_json(self, url, params=None, user_agent=None):
        self.calls.append(('json', params.get('url') if params else url))
        response = self.api_responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def fetch_bytes(self, url, referer=None):
        self.calls.append(('bytes', url, referer))
        data = self.files.get(url, b'media:' + url.encode())
        if isinstance(data, Exception):
            raise data
        return data

    def close(self):
        self.closed = True

    def count(self, kind):
        return sum(1 for call in self.calls if call[0] == kind)


def build_page(item_struct=None, raw=None):
    """Post page HTML with the rehydration data element."""
    if raw is None:
        data = {
            "__DEFAULT_SCOPE__": {
                "webapp.video-detail": {
                    "itemInfo": {"itemStruct": item_struct},
                },
            },
        }
        raw = json.dumps(data)
    return (
        '<html><head><title>TikTok</title></head><body>'
        f'<script id="__UNIVERSAL_DATA_FOR_REHYDRATION__" type="application/json">{raw}</script>'
        '</body></html>'
    )


def build_item(video=None, author=None, **overrides):
    item = {
        "id": "7300000000000000001",
        "desc": "a caption #fyp",
        "createTime": "1700000000",
        "author": author if author is not None else {"uniqueId": "alice", "nickname": "Alice"},
        "video": video if video is not None else {
            "playAddr": "https://cdn.example.com/play.mp4",
            "bitrateInfo": [
                {"PlayAddr": {"UrlList": ["https://cdn.example.com/best.mp4", "https://cdn.example.com/alt.mp4"]}},
            ],
        },
    }
    item.update(overrides)
    return item


def api_video(play_addr=None, **overrides):
    result = {
        "type": "video",
        "id": "7300000000000000001",
        "createTime": 1700000000,
        "author": {"username": "alice"},
        "video": {"playAddr": play_addr if play_addr is not None else ["https://api.example.com/v0.mp4", "https://api.example.com/v1.mp4"]},
    }
    result.update(overrides)
    return {"status": "success", "result": result}


def api_images(images=None, **overrides):
    result = {
        "type": "image",
        "id": "7300000000000000002",
        "createTime": 1700000000,
        "author": {"username": "bob"},
        "images": images if images is not None else [
            "https://img.example.com/1.jpg",
            "https://img.example.com/2.jpg",
            "https://img.example.com/3.jpg",
        ],
    }
    result.update(overrides)
    return {"status": "success", "result": result}


@pytest.fixture
def client():
    return FakeClient()


@pytest.fixture
def file_handler(tmp_path):
    return FileHandler(str(tmp_path / "videos"), str(tmp_path / "images"))


@pytest.fixture
def utc(monkeypatch):
    """Pin local time to UTC so date-based file names are stable."""
    import time
    monkeypatch.setenv("TZ", "UTC")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
