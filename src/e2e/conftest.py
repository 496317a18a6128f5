from __future__ import annotations
import threading
from pathlib import Path
from typing import Optional

import pytest
import requests


class FakeResponse:
    """
    Minimal stand-in for a streamed requests.Response:
      - status_code / reason / headers
      - iter_content(chunk_size) over a bytes body
      - context manager that records closing
    `fail_at` raises a connection error once that many bytes were served;
    `gate` blocks after the first chunk until the event is set.
    """
    def __init__(self,
                 body: bytes = b"",
                 *,
                 status: int = 200,
                 reason: str = "OK",
                 length: bool = True,
                 fail_at: Optional[int] = None,
                 gate: Optional[threading.Event] = None) -> None:
        self.status_code = status
        self.reason = reason
        self.headers = {"Content-Length": str(len(body))} if length else {}
        self._body = body
        self._fail_at = fail_at
        self._gate = gate
        self.closed = False

    def iter_content(self, chunk_size: int = 1):
        for i in range(0, len(self._body), chunk_size):
            if self._fail_at is not None and i >= self._fail_at:
                raise requests.ConnectionError("connection reset by peer")
            if self._gate is not None and i > 0:
                self._gate.wait(5)
            yield self._body[i:i + chunk_size]

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False


class FakeSession:
    """Hands out queued responses (or raises queued exceptions) in order."""
    def __init__(self, *responses) -> None:
        self._queue = list(responses)
        self.calls: list[tuple[str, dict]] = []

    def get(self, url: str, **kwargs):
        self.calls.append((url, kwargs))
        item = self._queue.pop(0) if len(self._queue) > 1 else self._queue[0]
        if isinstance(item, BaseException):
            raise item
        return item


def leftovers(directory: Path) -> list[str]:
    """Partial download files left behind in directory."""
    return [p.name for p in directory.iterdir() if p.name.endswith(".part")]


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "acronyms.db"


@pytest.fixture
def seeded_db(db_path: Path) -> Path:
    db_path.write_text(
        "BTW\tby the way\n"
        "LOL\tlaugh out loud\n"
        "LOL\tlots of love\n"
        "USA\tUnited States of America\n",
        encoding="utf-8",
    )
    return db_path
