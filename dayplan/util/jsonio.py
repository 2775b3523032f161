# dayplan/util/jsonio.py
from __future__ import annotations

import json
from typing import Any

try:
    import orjson  # type: ignore
except Exception:  # pragma: no cover
    orjson = None  # type: ignore


def loads(s: str) -> Any:
    if orjson is not None:
        return orjson.loads(s)
    return json.loads(s)


def dumps(obj: Any) -> str:
    if orjson is not None:
        return orjson.dumps(obj, option=orjson.OPT_INDENT_2).decode("utf-8")
    return json.dumps(obj, ensure_ascii=False, indent=2)
