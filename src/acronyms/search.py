from __future__ import annotations

from .models import AcronymIndex, LookupResult
from .normalize import normalize_acronym

def lookup(index: AcronymIndex, acronym: str) -> LookupResult:
    """
    Exact-match lookup of user input against the index.
    Normalization happens here, on the query only; stored keys are compared
    verbatim. An absent key is a LookupResult with no definitions.
    """
    key = normalize_acronym(acronym)
    if not key:
        return LookupResult(query=acronym, acronym=key, definitions=())
    return LookupResult(query=acronym, acronym=key, definitions=index.get(key))
