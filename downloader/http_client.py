"""HTTP access to TikTok pages, the fallback API and media CDNs."""

import requests
from typing import Dict, Optional

from . import config
from .errors import TransportError


class HttpClient:
    """
    Thin wrapper around a requests.Session.

    One session is shared by every request of a run so that cookies set by
    the post page are sent along with the media downloads that follow it.
    Every failure (connection error, timeout, non-2xx status) is raised as
    TransportError.
    """

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = None):
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT

    def _get(self, url: str, headers: Optional[Dict] = None, params: Optional[Dict] = None):
        try:
            response = self.session.get(
                url,
                headers=headers,
                params=params,
                timeout=self.timeout,
                allow_redirects=True
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            raise TransportError(url, str(e), status_code=status_code) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(url, str(e)) from e
        return response

    def fetch_html(self, url: str, user_agent: str = None) -> str:
        """Fetch a post page as text using browser-like headers."""
        headers = dict(config.DEFAULT_HEADERS)
        if user_agent:
            headers['user-agent'] = user_agent
        return self._get(url, headers=headers).text

    def fetch_json(self, url: str, params: Optional[Dict] = None, user_agent: str = None):
        """
        Fetch and decode a JSON document.

        Raises:
            TransportError: On network failure or if the body is not JSON
        """
        headers = {'user-agent': user_agent or config.USER_AGENT}
        response = self._get(url, headers=headers, params=params)
        try:
            return response.json()
        except ValueError as e:
            raise TransportError(url, f"invalid JSON response: {e}", status_code=response.status_code) from e

    def fetch_bytes(self, url: str, referer: str = None) -> bytes:
        """Download a media file, sending the post page as referer."""
        headers = {'user-agent': config.USER_AGENT}
        if referer:
            headers['referer'] = referer
        return self._get(url, headers=headers).content

    def close(self):
        self.session.close()
