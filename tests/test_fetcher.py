import itertools
import threading

import pytest
import requests

from attendance_dashboard.exceptions import FetchError
from attendance_dashboard.fetcher import SheetFetcher, BackgroundFetcher


class FakeResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text
        self.content = text.encode("utf-8")

    @property
    def ok(self):
        return self.status_code < 400


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.urls = []

    def get(self, url, timeout=None):
        self.urls.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response


def test_build_url_appends_timestamp():
    fetcher = SheetFetcher(url="https://example.com/pub?output=csv", http=FakeSession())

    assert fetcher.build_url(now=1.5) == "https://example.com/pub?output=csv&t=1500"


def test_build_url_without_query():
    fetcher = SheetFetcher(url="https://example.com/sheet.csv", http=FakeSession())

    assert fetcher.build_url(now=2) == "https://example.com/sheet.csv?t=2000"


def test_fetch_returns_body():
    session = FakeSession(FakeResponse(200, "UID,Name\nA1,Alice"))
    fetcher = SheetFetcher(url="https://example.com/pub?output=csv", timeout=7, http=session)

    assert fetcher.fetch() == "UID,Name\nA1,Alice"
    url, timeout = session.urls[0]
    assert url.startswith("https://example.com/pub?output=csv&t=")
    assert timeout == 7


def test_urls_differ_between_calls(monkeypatch):
    stamps = itertools.count(100)
    monkeypatch.setattr("attendance_dashboard.fetcher.time.time", lambda: next(stamps))
    session = FakeSession(FakeResponse(200, "x"))
    fetcher = SheetFetcher(url="https://example.com/pub?output=csv", http=session)

    fetcher.fetch()
    fetcher.fetch()

    assert session.urls[0][0] != session.urls[1][0]


def test_http_error_status_raises():
    fetcher = SheetFetcher(http=FakeSession(FakeResponse(404, "missing")))

    with pytest.raises(FetchError) as excinfo:
        fetcher.fetch()

    assert excinfo.value.status_code == 404


def test_transport_error_raises():
    fetcher = SheetFetcher(http=FakeSession(error=requests.ConnectionError("down")))

    with pytest.raises(FetchError):
        fetcher.fetch()


class StubFetcher:
    def __init__(self, result):
        self.result = result

    def fetch(self):
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


def _run(fetcher):
    outcomes = []
    done = threading.Event()

    def post(callback, *args):
        callback(*args)
        done.set()

    runner = BackgroundFetcher(fetcher, post)
    runner.submit(
        3,
        lambda seq, text: outcomes.append(("ok", seq, text)),
        lambda seq, error: outcomes.append(("fail", seq, error))
    ).join(timeout=5)
    assert done.is_set()
    return outcomes


def test_background_fetch_posts_success():
    assert _run(StubFetcher("body")) == [("ok", 3, "body")]


def test_background_fetch_posts_failure():
    error = FetchError("Network error")

    assert _run(StubFetcher(error)) == [("fail", 3, error)]


def test_background_fetch_turns_unexpected_errors_into_failures():
    outcomes = _run(StubFetcher(ValueError("bad body")))

    assert len(outcomes) == 1
    kind, seq, error = outcomes[0]
    assert (kind, seq) == ("fail", 3)
    assert isinstance(error, FetchError)
    assert "bad body" in str(error)


def test_each_fetch_is_a_plain_requests_get(monkeypatch):
    calls = []

    def fake_get(url, timeout=None):
        calls.append(url)
        return FakeResponse(200, "body")

    monkeypatch.setattr("attendance_dashboard.fetcher.requests.get", fake_get)
    fetcher = SheetFetcher(url="https://example.com/pub?output=csv")

    assert fetcher.fetch() == "body"
    assert fetcher.fetch() == "body"
    assert len(calls) == 2
