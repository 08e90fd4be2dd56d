"""Pull a JSON document out of an LLM text response.

Models asked for "JSON only" still wrap the payload in markdown fences,
prepend a sentence of prose, or emit escapes like \\- that json.loads
rejects. ``repair_json`` undoes those three habits and nothing more; the
result still goes through json.loads and schema validation.
"""

import re


_FENCE_OPEN_RE = re.compile(r"^```[a-zA-Z0-9_-]*[ \t]*\n?")
_FENCE_CLOSE_RE = re.compile(r"\n?```\s*$")

# Valid JSON escape sequences: \", \\, \/, \b, \f, \n, \r, \t, \uXXXX
_VALID_ESCAPES = frozenset('"\\/bfnrtu')
_ESCAPE_RE = re.compile(r"\\(.)", re.DOTALL)


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ```/```json fence if the response has one."""
    stripped = text.strip()
    if not stripped.startswith("```"):
        return stripped
    stripped = _FENCE_OPEN_RE.sub("", stripped, count=1)
    return _FENCE_CLOSE_RE.sub("", stripped, count=1).strip()


def extract_json_block(text: str) -> str:
    """Return the outermost {...} or [...] span, or the text unchanged if none.

    An unbalanced block runs to the end of the text so that json.loads
    reports the truncation instead of silently parsing a prefix.
    """
    start = next((i for i, ch in enumerate(text) if ch in "{["), -1)
    if start == -1:
        return text

    open_char = text[start]
    close_char = "}" if open_char == "{" else "]"
    depth = 0
    in_string = False
    escape_next = False

    for i in range(start, len(text)):
        ch = text[i]
        if escape_next:
            escape_next = False
            continue
        if ch == "\\":
            escape_next = True
            continue
        if ch == '"':
            in_string = not in_string
            continue
        if in_string:
            continue
        if ch == open_char:
            depth += 1
        elif ch == close_char:
            depth -= 1
            if depth == 0:
                return text[start:i + 1]

    return text[start:]


def repair_json(text: str) -> str:
    """Fence-strip, isolate the JSON block, and drop invalid escapes.

    Args:
        text: Raw LLM response that may contain JSON.

    Returns:
        Cleaned JSON string ready for json.loads().
    """
    json_str = extract_json_block(strip_code_fence(text))
    return _ESCAPE_RE.sub(_replace_escape, json_str)


def _replace_escape(match: re.Match) -> str:
    """Keep valid escapes, drop the backslash from invalid ones (\\- -> -)."""
    char = match.group(1)
    return match.group(0) if char in _VALID_ESCAPES else char
