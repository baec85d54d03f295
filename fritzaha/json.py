"""JSON abstraction."""

from __future__ import annotations

from typing import Any

try:
    import orjson

    def dumps(obj: Any, *, indent: bool = False) -> str:
        """Dump JSON."""
        return orjson.dumps(
            obj, option=orjson.OPT_INDENT_2 if indent else None
        ).decode()

    loads = orjson.loads
except ImportError:
    import json

    def dumps(obj: Any, *, indent: bool = False) -> str:
        """Dump JSON."""
        # Separators specified for consistency with orjson
        return json.dumps(obj, separators=(",", ":"), indent=2 if indent else None)

    loads = json.loads
