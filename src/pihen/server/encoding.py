"""JSON encoding of collection method results.

Output is compact, newline-terminated and HTML-safe: ``<``, ``>``,
``&`` and the two JavaScript line terminators are escaped so a result
can be embedded in a page without further quoting.
"""

import dataclasses
import datetime
import json
from typing import Any

_HTML_UNSAFE = (0x3C, 0x3E, 0x26, 0x2028, 0x2029)
_HTML_ESCAPES = {code: "\\u%04x" % code for code in _HTML_UNSAFE}
# Lone surrogates have no UTF-8 form; they become U+FFFD.
_SURROGATES = dict.fromkeys(range(0xD800, 0xE000), chr(0xFFFD))
_TRANSLATIONS = {**_SURROGATES, **_HTML_ESCAPES}


def _default(value: Any) -> Any:
    """Encode the types ``json`` does not know about."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (set, frozenset)):
        return list(value)
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    msg = f"Object of type {type(value).__name__} is not JSON serializable"
    raise TypeError(msg)


def encode_json(value: Any) -> bytes:
    """Encode *value* as one line of UTF-8 JSON.

    ``{"id": 1}`` encodes to ``b'{"id":1}\\n'``.

    Raises:
        TypeError: *value* holds an object with no JSON form.
        ValueError: *value* holds NaN or an infinity.
    """
    text = json.dumps(
        value,
        default=_default,
        ensure_ascii=False,
        allow_nan=False,
        separators=(",", ":"),
    )
    return (text.translate(_TRANSLATIONS) + "\n").encode("utf-8")
