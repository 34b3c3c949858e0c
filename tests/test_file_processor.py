import os

import pytest
from conftest import api_images, api_video, build_item, build_page

from downloader.errors import TransportError
from downloader.file_processor import Processor
from downloader.media_downloader import MediaDownloader
from downloader.tiktok_api import FallbackResolver

VIDEO_URL = "https://www.tiktok.com/@alice/video/7300000000000000001"
PHOTO_URL = "https://www.tiktok.com/@bob/photo/7300000000000000002"


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def processor(client, file_handler, sleeps):
    return Processor(
        client,
        FallbackResolver(client),
        MediaDownloader(client, file_handler),
        file_handler,
        delay=2.0,
        sleep=sleeps.append,
    )


def test_video_from_page_data_skips_the_api(client, processor, utc):
    client.pages[VIDEO_URL] = build_page(build_item())

    summary = processor.process_urls([VIDEO_URL])

    assert summary.downloaded == 1
    assert summary.results[0].files == ["alice_video_14112023_7300000000000000001.mp4"]
    assert client.count('json') == 0
    # Page requests carry the default web query parameters
    assert client.calls[0][1].startswith(VIDEO_URL + "?")
    assert client.calls[-1] == ('bytes', "https://cdn.example.com/best.mp4", VIDEO_URL)


def test_video_without_url_falls_back_to_api_once(client, processor, capsys):
    client.pages[VIDEO_URL] = build_page(build_item(video={"playAddr": ""}))
    client.api_responses.append(api_video())

    summary = processor.process_urls([VIDEO_URL])

    assert summary.downloaded == 1
    assert client.count('json') == 1
    assert client.calls[-1][1] == "https://api.example.com/v0.mp4"
    assert "Using API as backup" in capsys.readouterr().out


def test_page_fetch_failure_falls_back_to_api(client, processor):
    client.pages[VIDEO_URL] = TransportError(VIDEO_URL, "timed out")
    client.api_responses.append(api_video())

    summary = processor.process_urls([VIDEO_URL])

    assert summary.downloaded == 1
    assert client.count('json') == 1


def test_failed_fallback_is_not_retried(client, processor):
    client.pages[VIDEO_URL] = "<html></html>"
    client.api_responses.append({"status": "error"})

    summary = processor.process_urls([VIDEO_URL])

    assert summary.downloaded == 0
    assert summary.results[0].status == "skipped"
    assert "non-success status" in summary.results[0].reason
    assert client.count('json') == 1
    assert client.count('bytes') == 0


def test_photo_goes_straight_to_api(client, processor, file_handler):
    client.api_responses.append(api_images())

    summary = processor.process_urls([PHOTO_URL])

    assert summary.downloaded == 1
    assert len(summary.results[0].files) == 3
    assert client.count('html') == 0
    assert len(os.listdir(file_handler.image_dir)) == 3


def test_photo_with_failed_image_is_reported_once(client, processor, file_handler):
    client.api_responses.append(api_images())
    client.files["https://img.example.com/2.jpg"] = TransportError("https://img.example.com/2.jpg", "403")

    summary = processor.process_urls([PHOTO_URL])

    assert summary.downloaded == 0
    assert len(summary.results) == 1
    assert len(os.listdir(file_handler.image_dir)) == 1


def test_invalid_url_does_not_stop_the_batch(client, processor, sleeps):
    urls = [
        "https://www.tiktok.com/@a/video/1",
        "https://example.com/not-tiktok",
        "https://www.tiktok.com/@c/video/3",
        "https://www.tiktok.com/@d/video/4",
    ]
    for url in urls:
        client.pages[url] = build_page(build_item(id=url.rsplit('/', 1)[1]))

    summary = processor.process_urls(urls)

    assert summary.downloaded == 3
    assert [result.status for result in summary.results] == ["downloaded", "skipped", "downloaded", "downloaded"]
    assert summary.results[1].reason == "invalid url"
    assert client.count('html') == 3
    # No pause before the first post, none for the invalid one
    assert sleeps == [2.0, 2.0]


def test_unexpected_errors_propagate(client, processor):
    class Boom(Exception):
        pass

    client.pages[VIDEO_URL] = Boom("unexpected")
    with pytest.raises(Boom):
        processor.process_urls([VIDEO_URL])


def test_process_file_logs_skipped_urls(client, processor, tmp_path):
    links = tmp_path / "links.txt"
    links.write_text(f"{VIDEO_URL}\nnot a url\n")
    client.pages[VIDEO_URL] = build_page(build_item())

    summary, error_log = processor.process_file(str(links))
    processor.process_file(str(links))

    assert summary.downloaded == 1
    assert os.path.basename(error_log) == "[error log] links.txt"
    with open(error_log) as f:
        assert f.read() == "not a url (invalid url)\n"


def test_bad_timestamp_skips_only_that_post(client, processor, file_handler):
    second_url = "https://www.tiktok.com/@bob/photo/7300000000000000003"
    client.api_responses.append(api_images(createTime=10**20))
    client.api_responses.append(api_images(id="7300000000000000003"))

    summary = processor.process_urls([PHOTO_URL, second_url])

    assert [result.status for result in summary.results] == ["skipped", "downloaded"]
    assert len(os.listdir(file_handler.image_dir)) == 3
    # Nothing is fetched for the skipped post
    assert all(call[2] == second_url for call in client.calls if call[0] == 'bytes')


def test_bad_page_timestamp_falls_back_to_api(client, processor):
    client.pages[VIDEO_URL] = build_page(build_item(createTime=10**20))
    client.api_responses.append(api_video())

    summary = processor.process_urls([VIDEO_URL])

    assert summary.downloaded == 1
    assert client.count('json') == 1
