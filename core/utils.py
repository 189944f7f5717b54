# core/utils.py

from typing import Iterable, List, Optional


def parse_capability_keys(values: Optional[Iterable[str]]) -> List[str]:
    """
    Normalize capability keys from query parameters:
    - Accept repeated params and comma-separated values
    - Strip whitespace, drop empties
    - Keep first-seen order, no duplicates
    """
    keys = []

    for value in values or []:
        if value is None:
            continue

        for part in str(value).split(","):
            stripped = part.strip()
            if stripped == "":
                continue
            keys.append(stripped)

    return list(dict.fromkeys(keys))
