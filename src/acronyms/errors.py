from __future__ import annotations
from typing import Optional


class AcronymError(Exception):
    """Base class for every error raised by the acronyms package."""


# ---- local dictionary ----

class LoadError(AcronymError):
    """The dictionary file could not be read (absent or unreadable)."""

    def __init__(self, path: str, reason: str = "") -> None:
        self.path = path
        self.reason = reason
        msg = f"cannot load dictionary {path}"
        super().__init__(f"{msg}: {reason}" if reason else msg)


class DictionaryNotLoaded(LoadError):
    """A lookup was attempted before any dictionary was loaded."""

    def __init__(self, path: str) -> None:
        super().__init__(path, "no dictionary loaded yet, run a refresh")


# ---- download ----

class FetchError(AcronymError):
    """Any failure of a dictionary download."""


class NetworkError(FetchError):
    """Host unreachable, timeout, connection dropped mid-transfer."""


class HttpStatusError(FetchError):
    def __init__(self, status: int, reason: Optional[str] = None) -> None:
        self.status = int(status)
        self.reason = reason or ""
        super().__init__(f"HTTP {self.status} {self.reason}".rstrip())


class DictionaryIOError(FetchError):
    """Writing the downloaded dictionary to local storage failed."""


class FetchCancelled(FetchError):
    def __init__(self) -> None:
        super().__init__("download cancelled")
