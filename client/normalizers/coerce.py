import numbers
from typing import Any, Sequence

# Shared recursion cap for coerce_text and pick_field.
MAX_DEPTH = 3

# Keys tried, in order, when an object has to be collapsed into one string.
DISPLAY_KEYS = ("title", "name", "label", "value", "text", "code", "id")


def coerce_text(value: Any, depth: int = 0) -> str:
    """
    Collapse any JSON value into a clean display string.

      - None -> ""
      - list -> non-empty element strings joined with ", "
      - str -> stripped
      - number/bool -> stringified ("true"/"false" for bools)
      - dict -> first non-empty of DISPLAY_KEYS

    Anything nested deeper than MAX_DEPTH becomes "". Never raises.
    """
    if depth > MAX_DEPTH or value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, numbers.Number):
        return _number_text(value)
    if isinstance(value, (list, tuple)):
        parts = [coerce_text(v, depth + 1) for v in value]
        return ", ".join(p for p in parts if p)
    if isinstance(value, dict):
        for key in DISPLAY_KEYS:
            if key in value:
                text = coerce_text(value[key], depth + 1)
                if text:
                    return text
        return ""
    return ""


def _number_text(n: numbers.Number) -> str:
    # 3.0 renders as "3", like the JSON it came from
    if isinstance(n, float) and n.is_integer():
        return str(int(n))
    return str(n)


def pick_field(obj: Any, keys: Sequence[str], depth: int = 0) -> str:
    """
    Return the first populated value for `keys` anywhere in `obj`.

    Keys are tried in caller order on the current object, exact match first,
    then case-insensitively. Only when none of them yields text do we descend
    into nested dicts/lists (in their natural order). Earlier keys always win
    on the same level, even if a later key holds "better" data.
    """
    if depth > MAX_DEPTH:
        return ""

    if isinstance(obj, dict):
        folded: dict = {}
        for k in obj:
            folded.setdefault(str(k).lower(), []).append(k)

        for key in keys:
            text = coerce_text(obj[key]) if key in obj else ""
            if not text:
                for actual in folded.get(key.lower(), ()):
                    if actual != key:
                        text = coerce_text(obj[actual])
                        if text:
                            break
            if text:
                return text
        children = obj.values()
    elif isinstance(obj, (list, tuple)):
        children = obj
    else:
        return ""

    for child in children:
        if isinstance(child, (dict, list, tuple)):
            found = pick_field(child, keys, depth + 1)
            if found:
                return found
    return ""
