import json
from typing import Any, Dict, Optional


def _balanced_end(text: str, start: int) -> Optional[int]:
    """Index just past the '}' that closes the '{' at `start`, ignoring braces inside strings."""
    depth = 0
    in_string = False
    escaped = False
    for i in range(start, len(text)):
        ch = text[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
            continue
        if ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return i + 1
    return None


def extract_json_object(raw: Optional[str]) -> Optional[Dict[str, Any]]:
    """
    Pulls the first balanced JSON object out of free model text
    (code fences, chatter before/after, etc.). Returns None when there isn't one.
    """
    if not raw:
        return None

    start = raw.find("{")
    while start != -1:
        end = _balanced_end(raw, start)
        if end is None:
            start = raw.find("{", start + 1)
            continue
        try:
            parsed = json.loads(raw[start:end])
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, dict):
            return parsed
        start = raw.find("{", start + 1)
    return None
