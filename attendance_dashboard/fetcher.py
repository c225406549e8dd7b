import logging
import threading
import time

import requests

from attendance_dashboard.constants import SHEET_URL, CACHE_BUST_PARAM, REQUEST_TIMEOUT
from attendance_dashboard.exceptions import FetchError

logger = logging.getLogger(__name__)


class SheetFetcher:
    def __init__(self, url=SHEET_URL, timeout=REQUEST_TIMEOUT, http=None):
        self.url = url
        self.timeout = timeout
        # anything with requests.get(url, timeout=...)
        self.http = http or requests

    def build_url(self, now=None):
        stamp = int((now if now is not None else time.time()) * 1000)
        separator = "&" if "?" in self.url else "?"
        return f"{self.url}{separator}{CACHE_BUST_PARAM}={stamp}"

    def fetch(self):
        url = self.build_url()
        try:
            response = self.http.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise FetchError(f"Network error: {e}") from e

        logger.debug("Sheet response: status=%s bytes=%d", response.status_code, len(response.content))
        if not response.ok:
            raise FetchError(f"Network error: HTTP {response.status_code}", response.status_code)
        return response.text


class BackgroundFetcher:
    """Runs each fetch on its own daemon thread and posts the outcome back.

    ``post(callback, *args)`` must hand the call over to the UI thread,
    e.g. ``lambda cb, *a: root.after(0, cb, *a)``.
    """

    def __init__(self, fetcher, post):
        self.fetcher = fetcher
        self.post = post

    def submit(self, seq, on_success, on_failure):
        thread = threading.Thread(
            target=self._worker,
            args=(seq, on_success, on_failure),
            daemon=True
        )
        thread.start()
        return thread

    def _worker(self, seq, on_success, on_failure):
        try:
            text = self.fetcher.fetch()
        except FetchError as e:
            self.post(on_failure, seq, e)
            return
        except Exception as e:
            logger.exception("Unexpected error while fetching the sheet")
            self.post(on_failure, seq, FetchError(str(e)))
            return
        self.post(on_success, seq, text)
