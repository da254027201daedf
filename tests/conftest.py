"""Shared fixtures: fake Cursor state databases, JWTs and a fake curl_cffi."""

from __future__ import annotations

import base64
import json
import sqlite3
import time
from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

import cursor_usage


def _seg(obj: dict) -> str:
    return base64.urlsafe_b64encode(json.dumps(obj).encode()).rstrip(b"=").decode()


def make_jwt(payload: dict) -> str:
    return f"{_seg({'alg': 'HS256', 'typ': 'JWT'})}.{_seg(payload)}.signature"


def ms(dt: datetime) -> str:
    return str(int(dt.timestamp() * 1000))


@pytest.fixture
def state_db(tmp_path: Path):
    """Create a Cursor-style state.vscdb holding the given access token."""

    def _make(token=None, key: str = cursor_usage.TOKEN_KEY, table: str = "ItemTable") -> str:
        path = tmp_path / "state.vscdb"
        conn = sqlite3.connect(path)
        conn.execute(f"CREATE TABLE {table} (key TEXT UNIQUE ON CONFLICT REPLACE, value BLOB)")
        conn.execute(f"INSERT INTO {table} VALUES (?, ?)", ("other/key", "noise"))
        if token is not None:
            conn.execute(f"INSERT INTO {table} VALUES (?, ?)", (key, token))
        conn.commit()
        conn.close()
        return str(path)

    return _make


class FakeResponse:
    def __init__(self, status_code: int = 200, payload=None, text: str | None = None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        if self._payload is None:
            return json.loads(self.text)
        return self._payload


@pytest.fixture
def http(monkeypatch):
    """Replace curl_cffi in cursor_usage; queue responses per method."""
    calls: list[tuple[str, str, dict]] = []
    queued: dict[str, list] = {"GET": [], "POST": []}

    def _handler(method):
        def send(url, **kwargs):
            calls.append((method, url, kwargs))
            resp = queued[method].pop(0)
            if isinstance(resp, Exception):
                raise resp
            return resp
        return send

    monkeypatch.setattr(
        cursor_usage, "requests",
        SimpleNamespace(get=_handler("GET"), post=_handler("POST")),
    )
    return SimpleNamespace(calls=calls, get=queued["GET"], post=queued["POST"])


@pytest.fixture
def pacific_time(monkeypatch):
    """Run the test with the process-local timezone set to US Pacific."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset is not available on this platform")
    monkeypatch.setenv("TZ", "America/Los_Angeles")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
