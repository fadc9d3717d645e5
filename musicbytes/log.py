# log.py
"""
Progress events for a musicbytes run, as JSON lines on stderr.

Every record carries the same envelope:

  {"ts_ms": 1760000000000, "run": "3f2a9c1e", "event_type": "MELODY_MAPPED", ...}

`run` is fixed for the lifetime of the process, so the lines of one
invocation can be picked out of a shared log. stdout stays reserved for
the arduino/json renderers. Logging never raises.
"""

from __future__ import annotations

import json
import sys
import time
import uuid
from typing import Any, Callable, Dict

RUN_ID = uuid.uuid4().hex[:8]


def _now_ms() -> int:
    return int(time.time() * 1000)


def _stderr_print(line: str) -> None:
    sys.stderr.write(line + "\n")
    sys.stderr.flush()


# patchable in tests
_print: Callable[[str], None] = _stderr_print
_clock: Callable[[], int] = _now_ms


def _dumps(record: Dict[str, Any]) -> str:
    return json.dumps(record, ensure_ascii=False, separators=(",", ":"))


def log_event(event_type: str, **fields: Any) -> None:
    """
    Emit one event line, e.g. log_event("MELODY_MAPPED", tones=42).

    Fields that cannot be serialized are replaced by their repr().
    """
    record: Dict[str, Any] = {"ts_ms": _clock(), "run": RUN_ID, "event_type": event_type}
    record.update(fields)
    try:
        line = _dumps(record)
    except (TypeError, ValueError):
        line = _dumps({**record, **{k: repr(v) for k, v in fields.items()}})
    _print(line)
