from __future__ import annotations

import re
from re import Pattern

# Sub-clause markers that may sit between the number and the code name,
# e.g. "ayat (1)", "ayat 2", "huruf a", "angka 3", "ke-1".
# Numbers are ASCII digits only.
_SUB_CLAUSE = (
    r"(?:ayat\s*(?:\(\s*\w{1,4}\s*\)|[0-9]{1,3}[a-z]?)"
    r"|huruf\s+\(?[a-z]\)?(?![a-z])"
    r"|angka\s+[0-9]{1,3}"
    r"|ke-?\s?[0-9]{1,2})"
)

_CODE_NAME = (
    r"KUHAP|KUHP"
    r"|Kitab\s+Undang[-\s]Undang\s+Hukum\s+Acara\s+Pidana"
    r"|Kitab\s+Undang[-\s]Undang\s+Hukum\s+Pidana"
)

STRICT_PASAL: Pattern[str] = re.compile(
    r"\bPasal\s+(?P<number>[0-9]{1,4})(?![0-9])"
    rf"(?:[\s,]*{_SUB_CLAUSE}){{0,8}}"
    rf"(?:\s*(?P<code>{_CODE_NAME})\b)?",
    re.IGNORECASE,
)

LOOSE_PASAL: Pattern[str] = re.compile(
    r"\bPasal\s+(?P<number>[0-9]{1,4})(?![0-9])",
    re.IGNORECASE,
)
