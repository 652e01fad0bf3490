"""Configuration management for the igview CLI.

Reads/writes a TOML config file and provides a typed Config dataclass.
Default location: ``~/.config/igview/config.toml``.
Override with the ``IGVIEW_CONFIG`` environment variable.

The parser itself takes no configuration; these settings only shape how
the CLI writes and prints results.
"""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

_DEFAULT_CONFIG_DIR = Path("~/.config/igview").expanduser()
_DEFAULT_OUTPUT_DIR = Path("./data/output")


def _config_path() -> Path:
    env = os.environ.get("IGVIEW_CONFIG")
    if env:
        return Path(env).expanduser()
    return _DEFAULT_CONFIG_DIR / "config.toml"


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Config:
    output_dir: str = str(_DEFAULT_OUTPUT_DIR)

    # Indentation of the normalized-export JSON; 0 writes compact JSON.
    indent: int = 2

    # Print the parser log after every parse.
    show_diagnostics: bool = False

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    def ensure_dirs(self) -> None:
        self.output_path.mkdir(parents=True, exist_ok=True)


def load_config() -> Config:
    """Load config from disk, falling back to defaults + env overrides."""
    path = _config_path()
    cfg = Config()

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)
        output_section = data.get("output", {})

        cfg.output_dir = output_section.get("dir", cfg.output_dir)
        cfg.indent = int(output_section.get("indent", cfg.indent))
        cfg.show_diagnostics = bool(
            output_section.get("show_diagnostics", cfg.show_diagnostics)
        )

    # Environment variables always take precedence
    cfg.output_dir = os.environ.get("IGVIEW_OUTPUT_DIR", cfg.output_dir)
    cfg.indent = int(os.environ.get("IGVIEW_INDENT", str(cfg.indent)))
    if "IGVIEW_SHOW_DIAGNOSTICS" in os.environ:
        cfg.show_diagnostics = _env_bool(os.environ["IGVIEW_SHOW_DIAGNOSTICS"])

    return cfg


def save_config(cfg: Config) -> Path:
    """Write config to the TOML file. Returns the path written."""
    path = _config_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    lines = [
        "[output]",
        f'dir = "{cfg.output_dir}"',
        f"indent = {cfg.indent}",
        f"show_diagnostics = {'true' if cfg.show_diagnostics else 'false'}",
        "",
    ]

    path.write_text("\n".join(lines), encoding="utf-8")
    return path


def config_exists() -> bool:
    return _config_path().exists()


def config_path_display() -> str:
    return str(_config_path())
