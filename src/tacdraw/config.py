"""
Configuration management for tacdraw.

Loads YAML configuration with defaults for the geometry kernel, the SVG
preview export and tracing. Configuration never changes what a generator
computes for a given kernel; it only selects the kernel's tessellation
and how previews look.
"""

import os
from dataclasses import asdict, dataclass, field

import yaml


@dataclass
class KernelConfig:
    """Configuration for the geometry kernel."""
    quad_segs: int = 16  # segments per quarter circle in buffers and disks


@dataclass
class PreviewConfig:
    """Configuration for SVG previews of primitive sequences."""
    stroke_color: str = "black"
    stroke_width: float = 1.5
    dash_array: str = "6,4"
    fill_color: str = "black"
    font_size: float = 12.0
    font_family: str = "Arial, sans-serif"
    margin: float = 10.0
    scale: float = 1.0


@dataclass
class TracingConfig:
    """Configuration for runtime tracing."""
    enabled: bool = False
    level: str = "INFO"
    file_path: str = None
    json_output: bool = False


@dataclass
class SynthesisConfig:
    """Complete configuration."""
    kernel: KernelConfig = field(default_factory=KernelConfig)
    preview: PreviewConfig = field(default_factory=PreviewConfig)
    tracing: TracingConfig = field(default_factory=TracingConfig)


SECTIONS = ("kernel", "preview", "tracing")


def load_config(config_path=None):
    """
    Load configuration from YAML file.

    Falls back to defaults for any missing file, section or key.
    """
    config = SynthesisConfig()

    if config_path and os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f) or {}

        config = _merge_config(config, yaml_data)

    return config


def _merge_config(config, yaml_data):
    """Merge YAML data into config dataclass, ignoring unknown keys."""
    for section in SECTIONS:
        values = yaml_data.get(section)
        if not isinstance(values, dict):
            continue
        target = getattr(config, section)
        for key, value in values.items():
            if hasattr(target, key):
                setattr(target, key, value)

    return config


def save_default_config(path):
    """Save default configuration to YAML file for reference."""
    yaml_data = asdict(SynthesisConfig())

    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(yaml_data, f, default_flow_style=False, sort_keys=False)
