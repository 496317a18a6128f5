from __future__ import annotations
import re

# An uppercase letter directly followed by a period ("U.S.A.", "E.G")
_DOTTED = re.compile(r"[A-Z]\.")

def looks_dotted(text: str) -> bool:
    """True if text (already upper-cased) contains a letter-dot pair."""
    return _DOTTED.search(text) is not None

def normalize_acronym(raw: str) -> str:
    """
    Turn user input into a dictionary key.
    Rules:
      * surrounding whitespace is dropped
      * upper-cased (keys in the dictionary are upper-case)
      * periods are removed, but only when the input looks like a dotted
        abbreviation; ".NET" or "..." stay as typed
    """
    key = raw.strip().upper()
    if looks_dotted(key):
        key = key.replace(".", "")
    return key
