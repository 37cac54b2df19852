"""HTTP fetching with a hard timeout for Getty lookups."""

import logging
import threading
from collections.abc import Mapping
from concurrent.futures import Future, wait
from typing import Any

import requests

from getty_lookup.config import REQUEST_TIMEOUT, USER_AGENT

logger = logging.getLogger(__name__)


class GettyLookupError(RuntimeError):
    """Base class for errors raised by Getty lookups."""


class GettyTimeoutError(GettyLookupError):
    """Raised when the Getty call does not settle within the timeout."""

    def __init__(self, timeout: float):
        super().__init__(f"Call to Getty timed out after {timeout}s")
        self.timeout = timeout


class GettyHTTPError(GettyLookupError):
    """Raised when Getty answers with a non-success HTTP status."""

    def __init__(self, status_code: int):
        super().__init__(
            "Something wrong with the call to Getty, possibly a problem with "
            f"the network or the server. HTTP error: {status_code}"
        )
        self.status_code = status_code


def _get_session() -> requests.Session:
    """Configured HTTP session."""
    s = requests.Session()
    s.headers.update({"User-Agent": USER_AGENT})
    return s


def _request_into(
    future: Future,
    session: requests.Session,
    method: str,
    url: str,
    options: dict[str, Any],
    close_session: bool,
) -> None:
    """Send the request and settle `future` with its outcome."""
    if not future.set_running_or_notify_cancel():
        return
    try:
        try:
            response = session.request(method, url, **options)
        finally:
            if close_session:
                session.close()
    except BaseException as exc:
        future.set_exception(exc)
    else:
        future.set_result(response)


def fetch_with_timeout(
    url: str,
    config: Mapping[str, Any] | None = None,
    timeout: float = REQUEST_TIMEOUT,
    session: requests.Session | None = None,
) -> requests.Response:
    """Issue an HTTP request and give up once `timeout` seconds have passed.

    The request runs on a worker thread and is raced against the timeout.
    Whichever settles first wins: a late response is never looked at, and a
    transport failure that arrives in time is re-raised unchanged.

    Args:
        url: Fully encoded request URL.
        config: Options passed through to ``requests`` (``method``,
            ``headers``, ``cookies``, ...). Not inspected.
        timeout: Seconds to wait before failing.
        session: Session to send the request with. A fresh one is created per
            call when omitted and closed once the request finishes.

    Returns:
        The ``requests.Response``, whatever its status code.

    Raises:
        GettyTimeoutError: If the request has not settled within `timeout`.
    """
    options = dict(config or {})
    method = options.pop("method", "GET").upper()
    # Bounds how long an abandoned worker thread can block on the socket
    options.setdefault("timeout", timeout)

    own_session = session is None
    if own_session:
        session = _get_session()

    logger.debug("%s %s (timeout %ss)", method, url, timeout)

    future: Future = Future()
    # Daemon: an abandoned request must not hold the interpreter open at exit
    worker = threading.Thread(
        target=_request_into,
        args=(future, session, method, url, options, own_session),
        name="getty-fetch",
        daemon=True,
    )
    worker.start()

    done, _ = wait([future], timeout=timeout)
    if not done:
        logger.warning("Getty call timed out after %ss: %s", timeout, url)
        raise GettyTimeoutError(timeout)
    return future.result()
