"""
Unit tests for the in-memory auth rate limiter.
"""
import time

import pytest
from fastapi import HTTPException
from starlette.requests import Request

from app.core import rate_limit
from app.core.rate_limit import check_rate_limit, get_client_ip, rate_limit_store


def make_request(peer="10.0.0.1", forwarded=None):
    headers = []
    if forwarded:
        headers.append((b"x-forwarded-for", forwarded.encode()))
    return Request({
        "type": "http",
        "method": "POST",
        "path": "/auth/login",
        "headers": headers,
        "client": (peer, 50000),
    })


def test_forwarded_header_ignored_from_untrusted_peer(monkeypatch):
    monkeypatch.setattr(rate_limit, "TRUSTED_PROXIES", set())

    assert get_client_ip(make_request(forwarded="1.2.3.4")) == "10.0.0.1"


def test_forwarded_header_used_behind_trusted_proxy(monkeypatch):
    monkeypatch.setattr(rate_limit, "TRUSTED_PROXIES", {"10.0.0.1"})

    assert get_client_ip(make_request(forwarded="1.2.3.4, 10.0.0.1")) == "1.2.3.4"


def test_spoofed_forwarded_header_does_not_reset_limit(monkeypatch):
    monkeypatch.setattr(rate_limit, "TRUSTED_PROXIES", set())

    for i in range(3):
        check_rate_limit(make_request(forwarded=f"1.1.1.{i}"), "login", max_requests=3, window_seconds=60)

    with pytest.raises(HTTPException) as exc:
        check_rate_limit(make_request(forwarded="9.9.9.9"), "login", max_requests=3, window_seconds=60)

    assert exc.value.status_code == 429


def test_scopes_are_counted_separately():
    check_rate_limit(make_request(), "login", max_requests=1, window_seconds=60)

    check_rate_limit(make_request(), "register", max_requests=1, window_seconds=60)

    with pytest.raises(HTTPException):
        check_rate_limit(make_request(), "login", max_requests=1, window_seconds=60)


def test_expired_keys_are_removed():
    rate_limit_store[("login", "203.0.113.7")] = [time.time() - 3600]

    check_rate_limit(make_request(), "login", max_requests=5, window_seconds=60)

    assert ("login", "203.0.113.7") not in rate_limit_store
    assert list(rate_limit_store) == [("login", "10.0.0.1")]
