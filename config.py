# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Application settings loaded from an optional YAML file."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field
from yaml import YAMLError

CONFIG_ENV_VAR = "RACKVIEW_CONFIG"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    link_base: str = "/"
    collision_policy: Literal["last_write_wins", "reject"] = "last_write_wins"
    out_of_range: Literal["drop", "render"] = "drop"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    max_content_length: int = Field(default=1024 * 1024, gt=0)
    max_height: int = Field(default=500, gt=0)

    @classmethod
    def from_yaml(cls, raw: str) -> "Settings":
        try:
            data = yaml.safe_load(raw)
        except YAMLError as exc:
            raise ValueError(f"invalid settings YAML: {exc}") from exc
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError("settings YAML must be a mapping")
        return cls.model_validate(data)


def load_settings(path: str | None = None) -> Settings:
    path = path or os.environ.get(CONFIG_ENV_VAR)
    if not path:
        return Settings()
    return Settings.from_yaml(Path(path).read_text(encoding="utf-8"))


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=level, format=LOG_FORMAT)
