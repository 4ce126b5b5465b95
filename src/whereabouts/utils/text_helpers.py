"""
Helpers for turning free-text person and place names into dedup keys.
"""

from typing import Iterable, List

# Polish diacritics folded to their closest ASCII letter.
_DIACRITICS = str.maketrans({
    "ą": "a", "Ą": "A",
    "ć": "c", "Ć": "C",
    "ę": "e", "Ę": "E",
    "ł": "l", "Ł": "L",
    "ń": "n", "Ń": "N",
    "ó": "o", "Ó": "O",
    "ś": "s", "Ś": "S",
    "ź": "z", "Ź": "Z",
    "ż": "z", "Ż": "Z",
})


def normalize(raw: str) -> str:
    """Returns the canonical key for a person or place name.

    Args:
      raw: The name as it appeared in a note or oracle reply.

    Returns:
      The name with diacritics replaced and upper-cased.

    Examples:
      "Kraków"     =>   "KRAKOW"
      "Rafał"      =>   "RAFAL"
      "ŁÓDŹ"       =>   "LODZ"
      ""           =>   ""
    """
    return raw.translate(_DIACRITICS).upper()


def normalize_all(items: Iterable[str]) -> List[str]:
    """Normalizes a sequence of names, dropping blanks and repeated keys.

    The first occurrence of each key wins, so the input order is preserved.
    """
    seen = set()
    result = []
    for item in items:
        key = normalize(item.strip())
        if not key or key in seen:
            continue
        seen.add(key)
        result.append(key)
    return result


def contains_token(text: str, token: str) -> bool:
    """Case-folded substring match of `token` inside `text`."""
    needle = normalize(token)
    return bool(needle) and needle in normalize(text)
