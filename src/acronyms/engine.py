# acronyms/engine.py
from __future__ import annotations

import os
import logging
import threading
from typing import Any, Callable, Dict, Optional

from . import config as CFG
from .errors import DictionaryNotLoaded, LoadError
from .fetcher import FetchTask
from .loader import load
from .models import AcronymIndex, FetchOutcome, FetchProgress, LookupResult
from .search import lookup

log = logging.getLogger(__name__)


class AcronymService:
    """
    Thin orchestration layer that glues together:
      - the local dictionary file (DB_PATH),
      - the background downloader (fetcher.FetchTask),
      - the in-memory index (loader.load + search.lookup).

    Public API (used by CLI/Flask):
      * bootstrap():  load the file, or download it first if it is missing
      * refresh():    (re)download in the background, reload on success
      * reload():     rebuild the index from the file on disk
      * lookup(q):    LookupResult for user input
      * stats(), status(), shutdown()

    The index is never mutated: a reload builds a new one and swaps the
    reference, so readers see either the old or the new index.
    A refresh started while another is running cancels the older one; any
    download that still completes has replaced the file and triggers a reload.
    """

    # ------------- lifecycle -------------

    def __init__(self,
                 path: Optional[str] = None,
                 url: Optional[str] = None,
                 *,
                 session: Any = None,
                 chunk_size: int = CFG.CHUNK_SIZE,
                 timeout: float = CFG.TIMEOUT) -> None:
        self.path = path or CFG.DB_PATH
        self.url = url or CFG.DICTIONARY_URL
        self.index: Optional[AcronymIndex] = None
        self._session = session
        self._chunk_size = chunk_size
        self._timeout = timeout
        self._lock = threading.Lock()
        self._reload_lock = threading.Lock()
        self._task: Optional[FetchTask] = None

    # /* ~~~ Load the cached dictionary, downloading it first when absent ~~~ */
    def bootstrap(self,
                  *,
                  fetch_if_missing: bool = True,
                  on_progress: Optional[Callable[[FetchProgress], None]] = None) -> Optional[FetchTask]:
        if os.path.exists(self.path):
            self.reload()
            return None
        if not fetch_if_missing:
            log.info("No dictionary at %s and fetching is disabled", self.path)
            return None
        log.info("No dictionary at %s, downloading from %s", self.path, self.url)
        return self.refresh(on_progress=on_progress)

    # /* ~~~ Rebuild the index off to the side and swap it in ~~~ */
    def reload(self) -> AcronymIndex:
        with self._reload_lock:
            idx = load(self.path)
            self.index = idx
        return idx

    # /* ~~~ Start a background download; supersedes any running one ~~~ */
    def refresh(self, *, on_progress: Optional[Callable[[FetchProgress], None]] = None) -> FetchTask:
        task = FetchTask(self.url, self.path, session=self._session,
                         chunk_size=self._chunk_size, timeout=self._timeout)
        with self._lock:
            previous, self._task = self._task, task
        if previous is not None and previous.running:
            log.info("Refresh requested while a download is running; cancelling it")
            previous.cancel()
        task.subscribe(on_progress=on_progress,
                       on_done=lambda outcome: self._on_fetch_done(task, outcome))
        return task.start()

    # ------------- query -------------

    def lookup(self, acronym: str) -> LookupResult:
        idx = self.index
        if idx is None:
            raise DictionaryNotLoaded(self.path)
        return lookup(idx, acronym)

    @property
    def current_task(self) -> Optional[FetchTask]:
        return self._task

    @property
    def loaded(self) -> bool:
        return self.index is not None

    def stats(self) -> Dict[str, Any]:
        idx = self.index
        return {
            "path": self.path,
            "exists": os.path.exists(self.path),
            "loaded": idx is not None,
            "acronyms": len(idx) if idx is not None else 0,
            "definitions": idx.entry_count if idx is not None else 0,
            "skipped": idx.skipped if idx is not None else 0,
        }

    def status(self) -> Dict[str, Any]:
        """Snapshot of the latest refresh, for progress displays."""
        task = self._task
        if task is None:
            return {"state": "idle", "bytes": 0, "total": None, "percent": None, "message": ""}
        p: Optional[FetchProgress] = task.progress
        outcome: Optional[FetchOutcome] = task.outcome
        if outcome is None:
            state = "running"
            message = "Downloading acronyms…"
        elif outcome.ok:
            state, message = "done", outcome.message
        elif outcome.cancelled:
            state, message = "cancelled", outcome.message
        else:
            state, message = "failed", outcome.message
        return {
            "state": state,
            "bytes": p.bytes_done if p else 0,
            "total": p.total if p else None,
            "percent": p.percent if p else None,
            "message": message,
        }

    # ------------- teardown -------------

    def shutdown(self, *, wait: Optional[float] = None) -> None:
        task = self._task
        if task is not None and task.running:
            task.cancel()
            if wait is not None:
                task.wait(wait)
        log.info("AcronymService shutdown complete")

    # ------------- internals -------------

    def _on_fetch_done(self, task: FetchTask, outcome: FetchOutcome) -> None:
        # a successful task has already replaced the file, superseded or not
        if not outcome.ok:
            return
        if task is not self._task:
            log.info("Superseded download completed anyway; reloading its file")
        try:
            self.reload()
        except LoadError as exc:
            log.error("Downloaded dictionary could not be loaded: %s", exc)
