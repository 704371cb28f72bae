"""
Internal structured diagnostics.

Emits one JSON object per line to stderr when internal logging is enabled
(``LAWSENDER_CORE__INTERNAL_LOGGING_ENABLED=true`` or the CLI ``--verbose``
flag). Diagnostics are best-effort: a failing writer never affects the send
path. Never pass secrets as fields.
"""

from __future__ import annotations

import json
import sys
import time
from typing import Any, Callable

Writer = Callable[[dict[str, Any]], None]

# Cached on first use; tests reset it through the root conftest.
_internal_logging_enabled: bool | None = None
_writer: Writer | None = None


def _default_writer(payload: dict[str, Any]) -> None:
    sys.stderr.write(json.dumps(payload, default=str, separators=(",", ":")) + "\n")
    sys.stderr.flush()


def _is_enabled() -> bool:
    global _internal_logging_enabled
    if _internal_logging_enabled is None:
        try:
            from .settings import Settings

            _internal_logging_enabled = bool(
                Settings().core.internal_logging_enabled
            )
        except Exception:
            _internal_logging_enabled = False
    return _internal_logging_enabled


def enable(flag: bool = True) -> None:
    """Force diagnostics on or off, overriding the environment."""
    global _internal_logging_enabled
    _internal_logging_enabled = flag


def set_writer_for_tests(writer: Writer | None) -> None:
    """Replace the output writer; ``None`` restores stderr."""
    global _writer
    _writer = writer


def _emit(level: str, component: str, message: str, **fields: Any) -> None:
    if not _is_enabled():
        return
    payload: dict[str, Any] = {
        "ts": time.time(),
        "level": level,
        "component": component,
        "message": message,
    }
    payload.update(fields)
    try:
        (_writer or _default_writer)(payload)
    except Exception:
        return


def debug(component: str, message: str, **fields: Any) -> None:
    _emit("DEBUG", component, message, **fields)


def warn(component: str, message: str, **fields: Any) -> None:
    _emit("WARN", component, message, **fields)
