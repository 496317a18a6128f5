from __future__ import annotations
import os

# Remote source of the dictionary (raw file body, no auth)
DICTIONARY_URL: str = os.environ.get("ACRONYMS_URL", "https://www.mirbsd.org/acronyms")

# Local cache of the dictionary
DB_PATH: str = os.environ.get(
    "ACRONYMS_DB",
    os.path.join(os.path.expanduser("~"), ".cache", "acronyms", "acronyms.db"),
)

# Download tuning
CHUNK_SIZE: int = 4096
TIMEOUT: float = float(os.environ.get("ACRONYMS_TIMEOUT", "30"))
USER_AGENT: str = "acronyms/1.0"

# Dictionary file format
DELIMITER: str = "\t"
ENCODING: str = "utf-8"

# Progress logging (set ACRONYMS_VERBOSE=1 to enable)
VERBOSE: bool = os.environ.get("ACRONYMS_VERBOSE") == "1"
