"""
Artifact saving utilities for tacdraw.

Writes primitive dumps as JSON and preview drawings as SVG.
"""

import json
import os

from tacdraw.models import dump_primitives
from tacdraw.tracer import get_tracer


def ensure_dir(path):
    """Create directory if it does not exist."""
    if path:
        os.makedirs(path, exist_ok=True)


def save_json(data, path, indent=2):
    """
    Save a dict, a Pydantic model or a primitive sequence to JSON.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(data, "model_dump"):
        data = data.model_dump(mode="json")
    elif isinstance(data, (list, tuple)) and all(hasattr(d, "model_dump") for d in data):
        data = dump_primitives(data)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent, default=str)

    tracer.event(f"Saved JSON: {path}")


def save_svg(svg_content, path):
    """
    Save an svgwrite Drawing (or raw SVG text) to file.
    """
    tracer = get_tracer()

    ensure_dir(os.path.dirname(path))

    if hasattr(svg_content, "tostring"):
        content = svg_content.tostring()
    else:
        content = str(svg_content)

    with open(path, "w", encoding="utf-8") as f:
        f.write(content)

    tracer.event(f"Saved SVG: {path}")
