"""Persistence of comparison results (diff snapshots and plain-text reports)."""

from __future__ import annotations

import json
import math
import logging
from pathlib import Path
from typing import Any, List, Optional

from config import config

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

INDENT = "  "


def _json_safe(obj: Any) -> Any:
    """Replace NaN and infinities with ``None`` so output stays strict JSON."""

    if isinstance(obj, float) and not math.isfinite(obj):
        return None
    if isinstance(obj, dict):
        return {key: _json_safe(value) for key, value in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_json_safe(item) for item in obj]
    return obj


def _single_line(obj: Any) -> str:
    return json.dumps(
        obj, separators=(", ", ": "), ensure_ascii=False, allow_nan=False, default=str
    )


def _compact(obj: Any, indent: str, reserved: int, max_length: int) -> str:
    line = _single_line(obj)
    if len(line) <= max_length - len(indent) - reserved:
        return line

    next_indent = indent + INDENT
    items: List[str] = []

    if isinstance(obj, (list, tuple)) and obj:
        for i, item in enumerate(obj):
            trailing = 0 if i == len(obj) - 1 else 1
            items.append(next_indent + _compact(item, next_indent, trailing, max_length))
        return "[\n" + ",\n".join(items) + "\n" + indent + "]"

    if isinstance(obj, dict) and obj:
        keys = list(obj)
        for i, key in enumerate(keys):
            prefix = json.dumps(str(key), ensure_ascii=False) + ": "
            trailing = 0 if i == len(keys) - 1 else 1
            value = _compact(obj[key], next_indent, len(prefix) + trailing, max_length)
            items.append(next_indent + prefix + value)
        return "{\n" + ",\n".join(items) + "\n" + indent + "}"

    return line


def compact_dumps(obj: Any, max_length: Optional[int] = None) -> str:
    """
    Serialize ``obj`` as pretty-printed JSON with bounded line length.

    Containers that fit within ``max_length`` at their indentation stay on a
    single line; larger ones are expanded one child per line. Key order is
    preserved so output is deterministic for a given input.
    """

    max_length = config.artifacts.json_max_length if max_length is None else max_length
    return _compact(_json_safe(obj), "", 0, max_length)


class ArtifactWriter:
    """Write named comparison results under a stable directory."""

    def __init__(self, compare_path: Path | str | None = None, max_length: Optional[int] = None):
        self.compare_path = Path(
            config.artifacts.compare_path if compare_path is None else compare_path
        )
        self.max_length = max_length

    def path_for(self, name: str, obj: Any) -> Path:
        suffix = ".md" if isinstance(obj, str) else ".json"
        return self.compare_path / f"{name}{suffix}"

    def write_result(self, name: str, obj: Any) -> Path:
        """Strings are saved as Markdown, anything else as compact JSON."""

        self.compare_path.mkdir(parents=True, exist_ok=True)
        target = self.path_for(name, obj)

        if isinstance(obj, str):
            target.write_text(obj, encoding="utf-8")
        else:
            target.write_text(compact_dumps(obj, self.max_length), encoding="utf-8")

        logger.info("Wrote comparison result: %s", target)
        return target
