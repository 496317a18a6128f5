"""
Acronym lookup

Downloads a tab-separated acronym dictionary (one `ACRONYM<TAB>definition`
pair per line), caches it as a flat file and answers exact-match lookups,
returning every definition of an acronym in file order.

Main pieces:
    fetch(url, dest, ...)        stream the dictionary to disk (cancellable)
    load(path)                   build an AcronymIndex from the cached file
    lookup(index, acronym)       normalize user input and look it up
    AcronymService               bootstrap / refresh / lookup in one object

Example Usage:
    from acronyms import AcronymService

    svc = AcronymService()
    task = svc.bootstrap()          # downloads if the cache is missing
    if task is not None:
        task.wait()
    print(svc.lookup("u.s.a.").definitions)
"""

# src/acronyms/__init__.py
from .engine import AcronymService
from .errors import (
    AcronymError,
    DictionaryIOError,
    DictionaryNotLoaded,
    FetchCancelled,
    FetchError,
    HttpStatusError,
    LoadError,
    NetworkError,
)
from .fetcher import CancelToken, FetchTask, fetch
from .loader import iter_entries, load
from .models import AcronymIndex, DictionaryEntry, FetchOutcome, FetchProgress, LookupResult
from .normalize import normalize_acronym
from .search import lookup

__version__ = "1.0.0"
__all__ = [
    "AcronymService",
    "AcronymError", "LoadError", "DictionaryNotLoaded",
    "FetchError", "NetworkError", "HttpStatusError", "DictionaryIOError", "FetchCancelled",
    "CancelToken", "FetchTask", "fetch",
    "iter_entries", "load", "lookup", "normalize_acronym",
    "AcronymIndex", "DictionaryEntry", "FetchOutcome", "FetchProgress", "LookupResult",
]
