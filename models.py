# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Data model for rack blocks: rack options, equipment items, parse outcomes, layout rows."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

DEFAULT_RACK_NAME = "Rack"
DEFAULT_RACK_HEIGHT = 42

_NAME_OPTION = re.compile(r"^name=(.+)")
_HEIGHT_OPTION = re.compile(r"^height=(\d+)", re.ASCII)


def top_unit(u_bottom: int, u_size: int, descending: bool = False) -> int:
    direction = -1 if descending else 1
    return u_bottom + direction * (u_size - 1)


class RackConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str = DEFAULT_RACK_NAME
    height: int = Field(default=DEFAULT_RACK_HEIGHT, gt=0)
    descending: bool = False

    @property
    def direction(self) -> int:
        return -1 if self.descending else 1

    @classmethod
    def from_options(cls, options: str) -> "RackConfig":
        """Build a config from the option string of a ``<rack ...>`` tag.

        Tokens are whitespace separated: ``name=<text>``, ``height=<digits>`` and
        the bare ``descending`` flag. Unknown tokens are ignored; a later token of
        the same kind overrides an earlier one.
        """
        values: dict[str, object] = {}
        for token in options.split():
            name_match = _NAME_OPTION.match(token)
            height_match = _HEIGHT_OPTION.match(token)
            if name_match:
                values["name"] = name_match.group(1)
            elif height_match:
                try:
                    height = int(height_match.group(1))
                except ValueError:
                    continue
                if height > 0:
                    values["height"] = height
            elif token == "descending":
                values["descending"] = True
        return cls.model_validate(values)


class EquipmentItem(BaseModel):
    model_config = ConfigDict(extra="forbid")

    u_bottom: int
    u_size: int = Field(ge=1)
    u_top: int
    model: str
    name: str = ""
    color: str
    link: str | None = None
    link_title: str | None = None
    comment: str = ""

    @model_validator(mode="after")
    def validate_u_top(self) -> "EquipmentItem":
        span = self.u_size - 1
        if self.u_top not in {self.u_bottom + span, self.u_bottom - span}:
            raise ValueError(
                f"u_top {self.u_top} does not match u_bottom {self.u_bottom} "
                f"with u_size {self.u_size}"
            )
        return self

    @property
    def units(self) -> range:
        """Every unit the item covers, from ``u_top`` back towards ``u_bottom``."""
        step = 1 if self.u_bottom >= self.u_top else -1
        return range(self.u_top, self.u_bottom + step, step)

    def fits(self, config: RackConfig) -> bool:
        return all(1 <= u <= config.height for u in (self.u_bottom, self.u_top))


@dataclass(frozen=True)
class ResolvedLink:
    url: str
    title: str | None = None


@dataclass(frozen=True)
class ParsedItem:
    item: EquipmentItem
    line_no: int


@dataclass(frozen=True)
class LineSyntaxError:
    """A block line that did not match the equipment grammar."""

    line: str
    line_no: int


ParseOutcome = ParsedItem | LineSyntaxError

RowKind = Literal["anchor", "continuation", "empty"]


@dataclass(frozen=True)
class RenderRow:
    kind: RowKind
    unit: int
    item: EquipmentItem | None = None
