"""TOML config loading for doclog.toml."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_NAME = "doclog.toml"


@dataclass
class RenderConfig:
    charset: str = "unicode"
    color: bool = False
    show_newlines: bool = False


@dataclass
class CodeConfig:
    previous_lines: int = 0
    next_lines: int = 0
    middle_lines: int = 0


@dataclass
class DoclogConfig:
    render: RenderConfig = field(default_factory=RenderConfig)
    code: CodeConfig = field(default_factory=CodeConfig)


def find_config(start_path: Path | None = None) -> Path:
    """Closest doclog.toml at or above ``start_path``. Raises FileNotFoundError."""
    start = (start_path or Path.cwd()).resolve()
    search = start.parents if start.is_file() else (start, *start.parents)
    for directory in search:
        candidate = directory / CONFIG_NAME
        if candidate.is_file():
            return candidate
    raise FileNotFoundError(f"No {CONFIG_NAME} found in {start} or its parents")


def load_config(path: Path) -> DoclogConfig:
    """Parse a doclog.toml file into a DoclogConfig."""
    with open(path, "rb") as f:
        data = tomllib.load(f)

    config = DoclogConfig()

    if "render" in data:
        rnd = data["render"]
        config.render = RenderConfig(
            charset=rnd.get("charset", "unicode"),
            color=rnd.get("color", False),
            show_newlines=rnd.get("show_newlines", False),
        )
        if config.render.charset not in ("unicode", "ascii"):
            raise ValueError(f"{path}: render.charset must be 'unicode' or 'ascii'")

    if "code" in data:
        code = data["code"]
        config.code = CodeConfig(
            previous_lines=code.get("previous_lines", 0),
            next_lines=code.get("next_lines", 0),
            middle_lines=code.get("middle_lines", 0),
        )

    logger.debug("loaded config from %s", path)
    return config


def load_nearest(start_path: Path | None = None) -> DoclogConfig:
    """Load the closest doclog.toml, or the defaults when there is none."""
    try:
        return load_config(find_config(start_path))
    except FileNotFoundError:
        return DoclogConfig()
