# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Elevation rendering: the structural unit table plus CSV and JSON exports."""

from __future__ import annotations

import json
from dataclasses import dataclass, field

from models import EquipmentItem, RackConfig, RenderRow
from services.layout import (
    CollisionPolicy,
    OutOfRangePolicy,
    RackHeightError,
    build_slot_map,
    last_write_wins,
    resolve_layout,
)

CSV_COLUMNS = ["Model", "Name", "Rack", "U", "Height", "Comment"]


@dataclass
class ElevationTable:
    title: str
    rows: list[RenderRow]


@dataclass
class Elevation:
    config: RackConfig
    table: ElevationTable
    csv: str
    items: list[EquipmentItem]
    warnings: list[str] = field(default_factory=list)


def rack_csv(config: RackConfig, items: list[EquipmentItem]) -> str:
    """One line per item in input order.

    Text fields are wrapped in double quotes without escaping embedded quotes, and
    the rack name is written bare, so the output matches existing spreadsheets.
    """
    lines = [",".join(CSV_COLUMNS)]
    for item in items:
        lines.append(
            f'"{item.model}","{item.name}",{config.name},'
            f'{item.u_bottom},{item.u_size},"{item.comment}"'
        )
    return "\n".join(lines) + "\n"


def elevation_json(config: RackConfig, items: list[EquipmentItem]) -> str:
    payload = {
        "rack": config.model_dump(),
        "items": [item.model_dump() for item in items],
    }
    return json.dumps(payload, ensure_ascii=False, indent=2)


def render(
    config: RackConfig,
    items: list[EquipmentItem],
    on_collision: CollisionPolicy = last_write_wins,
    out_of_range: OutOfRangePolicy = "drop",
    max_height: int | None = None,
) -> Elevation:
    if max_height is not None and config.height > max_height:
        raise RackHeightError(
            f"rack {config.name!r} has height {config.height}, above the limit of {max_height}"
        )
    slot_map = build_slot_map(items, config, on_collision=on_collision, out_of_range=out_of_range)
    rows = resolve_layout(config, slot_map)
    return Elevation(
        config=config,
        table=ElevationTable(title=config.name, rows=rows),
        csv=rack_csv(config, items),
        items=list(items),
        warnings=list(slot_map.warnings),
    )
