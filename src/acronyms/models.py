from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

from .errors import FetchCancelled, FetchError

@dataclass(frozen=True)
class DictionaryEntry:
    acronym: str              # text before the first tab, as stored in the file
    definition: str           # text after the first tab
    line_no: int              # 0-based


class AcronymIndex:
    """
    Read-only mapping acronym -> ordered definitions.

    Keys are kept exactly as they appear in the file; definitions keep file
    order, so duplicate acronyms accumulate instead of overwriting each other.
    """

    def __init__(self,
                 table: Mapping[str, List[str]] | None = None,
                 *,
                 source: str | None = None,
                 skipped: int = 0) -> None:
        self._table: Dict[str, Tuple[str, ...]] = {
            k: tuple(v) for k, v in (table or {}).items() if v
        }
        self.source = source
        self.skipped = skipped

    @classmethod
    def from_entries(cls, entries, *, source: str | None = None, skipped: int = 0) -> "AcronymIndex":
        table: Dict[str, List[str]] = {}
        for e in entries:
            table.setdefault(e.acronym, []).append(e.definition)
        return cls(table, source=source, skipped=skipped)

    def get(self, acronym: str) -> Tuple[str, ...]:
        return self._table.get(acronym, ())

    def __contains__(self, acronym: object) -> bool:
        return acronym in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[str]:
        return iter(self._table)

    @property
    def entry_count(self) -> int:
        return sum(len(v) for v in self._table.values())

    def __repr__(self) -> str:
        return (f"AcronymIndex(acronyms={len(self)}, definitions={self.entry_count}, "
                f"skipped={self.skipped}, source={self.source!r})")


@dataclass(frozen=True)
class LookupResult:
    query: str                    # raw user input
    acronym: str                  # normalized key that was looked up
    definitions: Tuple[str, ...]  # file order; empty when not found

    @property
    def found(self) -> bool:
        return bool(self.definitions)


@dataclass(frozen=True)
class FetchProgress:
    bytes_done: int
    total: Optional[int]      # None when the server did not report a length

    @property
    def indeterminate(self) -> bool:
        return self.total is None

    @property
    def percent(self) -> Optional[int]:
        if not self.total:
            return None
        return min(100, self.bytes_done * 100 // self.total)


@dataclass(frozen=True)
class FetchOutcome:
    ok: bool
    message: str
    error: Optional[FetchError] = None
    bytes_written: int = 0

    @property
    def cancelled(self) -> bool:
        return isinstance(self.error, FetchCancelled)

    @classmethod
    def success(cls, dest: str, nbytes: int) -> "FetchOutcome":
        return cls(True, f"Successfully downloaded {dest} ({nbytes:,} bytes)", None, nbytes)

    @classmethod
    def failure(cls, error: FetchError, nbytes: int = 0) -> "FetchOutcome":
        return cls(False, f"Download error: {error}", error, nbytes)
