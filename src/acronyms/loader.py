from __future__ import annotations
import logging
from typing import Iterable, Iterator, Tuple

from .config import DELIMITER, ENCODING, VERBOSE
from .errors import LoadError
from .models import AcronymIndex, DictionaryEntry

log = logging.getLogger(__name__)

PROGRESS_EVERY_LINES = 100_000

def parse_line(raw: str) -> Tuple[str, str] | None:
    """Split `ACRONYM<TAB>definition`; None if the line has no tab."""
    line = raw.rstrip("\r\n")
    key, sep, definition = line.partition(DELIMITER)
    if not sep:
        return None
    return key, definition

def iter_entries(lines: Iterable[str], skipped: list[int] | None = None) -> Iterator[DictionaryEntry]:
    """
    Yield a DictionaryEntry for every well-formed line.
    Malformed lines are dropped; their line numbers are appended to `skipped`
    when a list is passed in.
    """
    for i, raw in enumerate(lines):
        parsed = parse_line(raw)
        if parsed is None:
            if skipped is not None:
                skipped.append(i)
            log.debug("skipping malformed line %d: %r", i, raw[:80])
            continue
        yield DictionaryEntry(acronym=parsed[0], definition=parsed[1], line_no=i)
        if VERBOSE and (i + 1) % PROGRESS_EVERY_LINES == 0:
            print(f"[loaded] lines={i + 1:,}")

def load(path: str) -> AcronymIndex:
    """
    Read the dictionary file at `path` into a fresh AcronymIndex.
    Raises LoadError if the file is absent or cannot be read.
    """
    skipped: list[int] = []
    try:
        with open(path, "r", encoding=ENCODING, errors="replace", newline="") as f:
            entries = list(iter_entries(f, skipped))
    except FileNotFoundError:
        raise LoadError(path, "file does not exist") from None
    except OSError as exc:
        raise LoadError(path, str(exc)) from exc

    index = AcronymIndex.from_entries(entries, source=path, skipped=len(skipped))
    log.info("Loaded %s: acronyms=%d definitions=%d skipped=%d",
             path, len(index), index.entry_count, index.skipped)
    return index
