"""
ooh_engines.tracer -- ``@traced_engine`` decorator emitting OOH_ENGINE_TRACE.

Responsibility:
    Wrap the public entry points of the pure billing engines so each call
    leaves one structured trace record: engine name and version, a short
    fingerprint of the billing inputs, and the wall time spent.  Two runs
    with the same fingerprint were asked the same question.

Architecture position:
    Engines -- infrastructure support for the pure calculation layer.
    Emits a log record only; never alters arguments or results.

Invariants enforced:
    - Fingerprints cover the named parameters whether they were passed
      positionally or by keyword.
    - A ``date`` and its ISO string fingerprint identically, as do a
      ``Decimal`` and its string form.
    - Fingerprint is the first 16 hex chars of a SHA-256 digest.
"""

from __future__ import annotations

import functools
import hashlib
import inspect
import json
import time
from collections.abc import Callable, Mapping
from datetime import date
from typing import Any

from ooh_kernel.logging_config import get_logger

_logger = get_logger("engines.tracer")


def _fingerprint_default(value: Any) -> Any:
    if isinstance(value, date):
        return value.isoformat()
    return str(value)


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    arguments: Mapping[str, Any],
) -> str:
    """Deterministic 16-char fingerprint of ``arguments[field]`` for each field.

    Missing fields count as ``None``.
    """
    selected = {field: arguments.get(field) for field in fingerprint_fields}
    canonical = json.dumps(selected, sort_keys=True, default=_fingerprint_default)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:16]


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """Decorator factory for engine entry points.

    Args:
        engine_name: Engine identifier (e.g. "segmentation").
        engine_version: Engine version (e.g. "1.0").
        fingerprint_fields: Parameter names folded into the fingerprint.
    """

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            fingerprint = ""
            if fingerprint_fields:
                bound = signature.bind_partial(*args, **kwargs)
                fingerprint = compute_input_fingerprint(
                    fingerprint_fields, bound.arguments
                )

            started = time.monotonic()
            result = func(*args, **kwargs)
            elapsed_ms = round((time.monotonic() - started) * 1000, 2)

            _logger.info("OOH_ENGINE_TRACE", extra={
                "trace_type": "OOH_ENGINE_TRACE",
                "engine_name": engine_name,
                "engine_version": engine_version,
                "input_fingerprint": fingerprint,
                "duration_ms": elapsed_ms,
                "function": func.__qualname__,
            })
            return result

        return wrapper

    return decorator
