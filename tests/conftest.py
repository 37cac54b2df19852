"""Fixtures for Getty lookup tests."""

from __future__ import annotations

import json
import threading
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from getty_lookup.data.getty import get_person_lookup_uri, get_place_lookup_uri

FIXTURES_DIR = Path(__file__).parent / "fixtures"

QUERY = "jones"
QUERY_NO_RESULTS = "ldfjk"
QUERY_TIMEOUT = "chartrand"
QUERY_ERROR = "cuff"
QUERY_NO_DESCRIPTION = "blash"


def load_fixture(name: str) -> dict:
    return json.loads((FIXTURES_DIR / name).read_text(encoding="utf-8"))


def make_response(status_code: int = 200, payload: dict | None = None) -> MagicMock:
    """Stand-in for ``requests.Response``."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.ok = 200 <= status_code < 300
    if payload is None:
        resp.json.side_effect = ValueError("No JSON object could be decoded")
    else:
        resp.json.return_value = payload
    return resp


@pytest.fixture()
def release():
    """Unblocks stalled requests once the test is over."""
    event = threading.Event()
    yield event
    event.set()


@pytest.fixture()
def getty_session(release):
    """Session answering the URIs built for each test query."""
    routes = {}
    for uri_builder in (get_person_lookup_uri, get_place_lookup_uri):
        routes[uri_builder(QUERY)] = make_response(200, load_fixture("results.json"))
        routes[uri_builder(QUERY_NO_RESULTS)] = make_response(200, load_fixture("no_results.json"))
        routes[uri_builder(QUERY_ERROR)] = make_response(500)
        routes[uri_builder(QUERY_NO_DESCRIPTION)] = make_response(
            200, load_fixture("results_without_description.json")
        )
        routes[uri_builder(QUERY_TIMEOUT)] = None

    def route(method, url, **kwargs):
        if url not in routes:
            raise AssertionError(f"Unexpected request: {method} {url}")
        if routes[url] is None:
            release.wait(5)
            return make_response(200, load_fixture("results.json"))
        return routes[url]

    session = MagicMock()
    session.request.side_effect = route
    return session
