"""Application configuration: settings schema and diffview.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field

from diffview.core.models import DiffOptions


CONFIG_FILE = "diffview.yaml"
ENV_PREFIX = "DIFFVIEW_"


class Settings(BaseModel):
    context_lines:     int  = Field(default=3, ge=0, description="Unchanged lines kept around each change")
    ignore_whitespace: bool = Field(default=False, description="Match lines with all whitespace removed")
    view_mode:         str  = Field(default="split", pattern="^(split|inline)$", description="split or inline")
    color:             bool = Field(default=False, description="ANSI colors in rendered diffs")
    log_level:         str  = Field(
        default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$", description="stdlib logging level",
    )

    def diff_options(self) -> DiffOptions:
        return DiffOptions(context_lines=self.context_lines, ignore_whitespace=self.ignore_whitespace)


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from diffview.yaml, then DIFFVIEW_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    if isinstance(data.get("log_level"), str):
        data["log_level"] = data["log_level"].upper()
    return Settings(**data)
