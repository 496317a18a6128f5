from __future__ import annotations
import logging
import os
import tempfile
import threading
from typing import Any, Callable, List, Optional

import requests

from .config import CHUNK_SIZE, TIMEOUT, USER_AGENT
from .errors import (
    DictionaryIOError,
    FetchCancelled,
    FetchError,
    HttpStatusError,
    NetworkError,
)
from .models import FetchOutcome, FetchProgress

log = logging.getLogger(__name__)

ProgressSink = Callable[[FetchProgress], None]
CompleteSink = Callable[[FetchOutcome], None]


class CancelToken:
    """Cooperative cancellation flag, polled once per chunk."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()


def _content_length(resp: Any) -> Optional[int]:
    raw = resp.headers.get("Content-Length")
    try:
        n = int(raw)
    except (TypeError, ValueError):
        return None
    return n if n > 0 else None


def _notify(sink: Optional[Callable[[Any], None]], value: Any, what: str) -> None:
    if sink is None:
        return
    try:
        sink(value)
    except Exception:
        log.exception("%s callback failed", what)


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass
    except OSError as exc:
        log.warning("could not remove partial download %s: %s", path, exc)


def fetch(url: str,
          dest: str,
          on_progress: Optional[ProgressSink] = None,
          on_complete: Optional[CompleteSink] = None,
          *,
          cancel: Optional[CancelToken] = None,
          session: Any = None,
          chunk_size: int = CHUNK_SIZE,
          timeout: float = TIMEOUT) -> FetchOutcome:
    """
    Stream `url` into `dest`.

    The body goes to a temporary file next to `dest` that is renamed over it
    only once the stream has been fully consumed; a failed or cancelled
    transfer leaves `dest` exactly as it was. `on_progress` is called after
    every chunk, `on_complete` exactly once at the end. Errors are returned in
    the outcome, never raised.
    """
    cancel = cancel or CancelToken()
    http = session if session is not None else requests
    dest_dir = os.path.dirname(os.path.abspath(dest))

    done = 0
    tmp: Optional[str] = None
    log.info("Downloading %s -> %s", url, dest)
    try:
        if cancel.cancelled:
            raise FetchCancelled()
        with http.get(url, stream=True, timeout=timeout,
                      headers={"User-Agent": USER_AGENT}) as resp:
            if resp.status_code != 200:
                raise HttpStatusError(resp.status_code, getattr(resp, "reason", None))
            total = _content_length(resp)

            os.makedirs(dest_dir, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=f".{os.path.basename(dest)}.",
                                       suffix=".part", dir=dest_dir)
            with os.fdopen(fd, "wb") as out:
                for chunk in resp.iter_content(chunk_size=chunk_size):
                    if cancel.cancelled:
                        raise FetchCancelled()
                    if not chunk:
                        continue
                    out.write(chunk)
                    done += len(chunk)
                    _notify(on_progress, FetchProgress(done, total), "progress")

        if cancel.cancelled:
            raise FetchCancelled()
        os.replace(tmp, dest)
        tmp = None
        outcome = FetchOutcome.success(dest, done)
        log.info("Downloaded %s (%d bytes)", dest, done)
    except FetchError as exc:
        outcome = FetchOutcome.failure(exc, done)
    # RequestException derives from OSError, so it has to be caught first
    except requests.RequestException as exc:
        outcome = FetchOutcome.failure(NetworkError(str(exc)), done)
    except OSError as exc:
        outcome = FetchOutcome.failure(DictionaryIOError(str(exc)), done)
    finally:
        if tmp is not None:
            _discard(tmp)

    if not outcome.ok:
        if outcome.cancelled:
            log.info("Download of %s cancelled after %d bytes", url, done)
        else:
            log.warning("%s", outcome.message)
    _notify(on_complete, outcome, "completion")
    return outcome


class FetchTask:
    """
    One background download with a cancellation token and event subscriptions.

    Progress events arrive in increasing byte order on the worker thread; the
    done event fires exactly once, after the last progress event. Subscribing
    after completion delivers the done event immediately.
    """

    def __init__(self,
                 url: str,
                 dest: str,
                 *,
                 session: Any = None,
                 chunk_size: int = CHUNK_SIZE,
                 timeout: float = TIMEOUT) -> None:
        self.url = url
        self.dest = dest
        self._session = session
        self._chunk_size = chunk_size
        self._timeout = timeout

        self._token = CancelToken()
        self._lock = threading.Lock()
        self._progress_subs: List[ProgressSink] = []
        self._done_subs: List[CompleteSink] = []
        self._progress: Optional[FetchProgress] = None
        self._outcome: Optional[FetchOutcome] = None
        self._thread: Optional[threading.Thread] = None
        self._finished = threading.Event()

    # ------------- public -------------

    def subscribe(self,
                  on_progress: Optional[ProgressSink] = None,
                  on_done: Optional[CompleteSink] = None) -> "FetchTask":
        with self._lock:
            if on_progress is not None:
                self._progress_subs.append(on_progress)
            if on_done is not None and self._outcome is None:
                self._done_subs.append(on_done)
                on_done = None
            outcome = self._outcome
        if on_done is not None:
            _notify(on_done, outcome, "completion")
        return self

    def start(self) -> "FetchTask":
        with self._lock:
            if self._thread is not None:
                raise RuntimeError("FetchTask already started")
            self._thread = threading.Thread(
                target=self._run, name=f"fetch:{os.path.basename(self.dest)}", daemon=True
            )
        self._thread.start()
        return self

    def cancel(self) -> None:
        self._token.cancel()

    def wait(self, timeout: Optional[float] = None) -> Optional[FetchOutcome]:
        """Block until the task is done (or timeout); return its outcome or None."""
        self._finished.wait(timeout)
        return self._outcome

    @property
    def running(self) -> bool:
        return self._thread is not None and not self._finished.is_set()

    @property
    def done(self) -> bool:
        return self._finished.is_set()

    @property
    def cancelled(self) -> bool:
        return self._token.cancelled

    @property
    def progress(self) -> Optional[FetchProgress]:
        return self._progress

    @property
    def outcome(self) -> Optional[FetchOutcome]:
        return self._outcome

    # ------------- worker -------------

    def _publish_progress(self, p: FetchProgress) -> None:
        self._progress = p
        with self._lock:
            subs = list(self._progress_subs)
        for fn in subs:
            _notify(fn, p, "progress")

    def _run(self) -> None:
        try:
            outcome = fetch(
                self.url, self.dest, self._publish_progress,
                cancel=self._token, session=self._session,
                chunk_size=self._chunk_size, timeout=self._timeout,
            )
        except Exception as exc:
            log.exception("Download task for %s crashed", self.url)
            outcome = FetchOutcome.failure(FetchError(repr(exc)))

        with self._lock:
            self._outcome = outcome
            subs = list(self._done_subs)
            self._done_subs.clear()
        try:
            for fn in subs:
                _notify(fn, outcome, "completion")
        finally:
            self._finished.set()
