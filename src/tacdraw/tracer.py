"""
Hierarchical runtime tracing for tacdraw.

Nested spans with timing and compact summaries of geometries, segments and
primitive lists, so a synthesis call can be followed without a debugger.
Disabled by default; when disabled every entry point returns immediately.
"""

import functools
import inspect
import json
import sys
import threading
import time
from contextlib import contextmanager
from datetime import datetime


class TracerConfig:
    """Configuration for the tracer."""

    def __init__(self):
        self.enabled = False
        self.level = "INFO"
        self.file_path = None
        self.json_output = False
        self._file_handle = None

    def configure(self, enabled=False, level="INFO", file_path=None, json_output=False):
        """Configure tracer settings."""
        self.enabled = enabled
        self.level = level.upper()
        self.file_path = file_path
        self.json_output = json_output

        self.close()
        if file_path and enabled:
            self._file_handle = open(file_path, "w", encoding="utf-8")

    def close(self):
        """Close file handle if open."""
        if self._file_handle:
            self._file_handle.close()
            self._file_handle = None


class Tracer:
    """
    Hierarchical tracer.

    Spans nest and report elapsed time; events attach to the innermost
    open span of the calling thread. Output goes to stderr, optionally
    mirrored to a file and emitted as JSON records.
    """

    LEVELS = {"ERROR": 0, "WARN": 1, "INFO": 2, "DEBUG": 3}

    def __init__(self):
        self.config = TracerConfig()
        self._local = threading.local()
        self._lock = threading.Lock()

    @property
    def _span_stack(self):
        stack = getattr(self._local, "span_stack", None)
        if stack is None:
            stack = self._local.span_stack = []
        return stack

    @property
    def _depth(self):
        return len(self._span_stack)

    def _should_log(self, level):
        if not self.config.enabled:
            return False
        return self.LEVELS.get(level, 2) <= self.LEVELS.get(self.config.level, 2)

    def _emit(self, line):
        with self._lock:
            print(line, file=sys.stderr)
            if self.config._file_handle:
                self.config._file_handle.write(line + "\n")
                self.config._file_handle.flush()

    def _write(self, level, module, func, message, meta=None):
        if not self._should_log(level):
            return

        now = datetime.now()
        timestamp = now.strftime("%H:%M:%S.") + f"{now.microsecond // 1000:03d}"
        location = f"{module}:{func}" if func else module

        self._emit(f"{timestamp} {level:<5} {'  ' * self._depth}{location}  {message}")

        if self.config.json_output:
            record = {
                "timestamp": timestamp,
                "level": level,
                "depth": self._depth,
                "module": module,
                "function": func,
                "message": message,
                "meta": {k: summarize(v) for k, v in (meta or {}).items()},
            }
            self._emit(json.dumps(record))

    @contextmanager
    def span(self, name, module="", **meta):
        """
        Context manager for a traced span.

        Logs start and end with the elapsed time; a failure inside the span
        is logged at ERROR and re-raised.
        """
        if not self.config.enabled:
            yield
            return

        start_time = time.perf_counter()
        meta_str = " ".join(f"{k}={summarize(v)}" for k, v in meta.items())
        self._write("INFO", module, name, f"start {meta_str}".strip(), meta)
        self._span_stack.append((name, module))

        try:
            yield
        except Exception as e:
            elapsed = (time.perf_counter() - start_time) * 1000
            self._span_stack.pop()
            self._write("ERROR", module, name, f"failed dt={elapsed:.1f}ms error={type(e).__name__}: {str(e)[:100]}")
            raise
        else:
            elapsed = (time.perf_counter() - start_time) * 1000
            self._span_stack.pop()
            self._write("INFO", module, name, f"end ok dt={elapsed:.1f}ms")

    def event(self, message, level="INFO", **meta):
        """Log a one-off event within the current span."""
        if not self._should_log(level):
            return

        func, module = self._span_stack[-1] if self._span_stack else ("", "")
        meta_str = " ".join(f"{k}={summarize(v)}" for k, v in meta.items())
        self._write(level, module, func, f"{message} {meta_str}".strip(), meta)


def summarize(obj, max_len=200):
    """
    Summarize an object for logging.

    Never longer than max_len characters and never raises.
    """
    try:
        result = _summarize_impl(obj)
    except Exception:
        return f"<{type(obj).__name__}>"
    if len(result) > max_len:
        return result[:max_len - 3] + "..."
    return result


def _summarize_impl(obj):
    if obj is None:
        return "None"

    type_name = type(obj).__name__

    from shapely.geometry.base import BaseGeometry
    if isinstance(obj, BaseGeometry):
        if obj.is_empty:
            return f"{obj.geom_type}(empty)"
        bounds = ",".join(f"{b:.1f}" for b in obj.bounds)
        parts = len(obj.geoms) if hasattr(obj, "geoms") else 1
        return f"{obj.geom_type}(parts={parts},bounds=[{bounds}])"

    from tacdraw.geometry.kernel import Segment
    if isinstance(obj, Segment):
        return (
            f"Segment(({obj.start[0]:.2f},{obj.start[1]:.2f})->"
            f"({obj.end[0]:.2f},{obj.end[1]:.2f}),angle={obj.angle():.3f})"
        )

    from tacdraw.models import Fill, Label, Stroke
    if isinstance(obj, Stroke):
        return f"Stroke(dashed={obj.dashed},{_summarize_impl(obj.geometry)})"
    if isinstance(obj, Fill):
        return f"Fill({_summarize_impl(obj.geometry)})"
    if isinstance(obj, Label):
        return f"Label({obj.text!r}@({obj.anchor[0]:.2f},{obj.anchor[1]:.2f}),rot={obj.rotation:.3f})"

    from pydantic import BaseModel
    if isinstance(obj, BaseModel):
        fields = list(type(obj).model_fields.keys())[:3]
        return f"{type_name}(fields={fields}...)"

    import numpy as np
    if isinstance(obj, np.ndarray):
        shape_str = "x".join(str(s) for s in obj.shape)
        return f"ndarray({obj.dtype},{shape_str})"

    if isinstance(obj, str):
        if len(obj) > 50:
            return f"str(len={len(obj)})"
        return repr(obj)

    if isinstance(obj, (list, tuple)):
        if len(obj) == 0:
            return f"{type_name}(len=0)"
        kinds = sorted({type(o).__name__ for o in obj})
        return f"{type_name}(len={len(obj)},types={'|'.join(kinds)})"

    if isinstance(obj, dict):
        keys = ",".join(str(k) for k in list(obj.keys())[:5])
        return f"dict(len={len(obj)},keys=[{keys}])"

    if isinstance(obj, (bool, int, float)):
        return str(obj)

    return f"<{type_name}>"


def trace(label=None, arg_names=None):
    """
    Decorator to trace function execution.

    Wraps the call in a span. Arguments listed in arg_names are summarized
    in the span's start line whether passed by position or keyword.
    """
    def decorator(func):
        signature = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            if not _tracer.config.enabled:
                return func(*args, **kwargs)

            func_module = func.__module__.split(".")[-1] if func.__module__ else ""
            func_name = label or func.__name__

            meta = {}
            if arg_names:
                bound = signature.bind_partial(*args, **kwargs)
                for name in arg_names:
                    if name in bound.arguments:
                        meta[name] = bound.arguments[name]

            with _tracer.span(func_name, module=func_module, **meta):
                return func(*args, **kwargs)

        return wrapper
    return decorator


# Global tracer instance
_tracer = Tracer()


def get_tracer():
    """Get the global tracer instance."""
    return _tracer


def configure_tracer(enabled=False, level="INFO", file_path=None, json_output=False):
    """Configure the global tracer."""
    _tracer.config.configure(
        enabled=enabled,
        level=level,
        file_path=file_path,
        json_output=json_output,
    )
