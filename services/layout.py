# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Placement of parsed equipment onto the numbered unit scale of a rack."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal

from models import EquipmentItem, RackConfig, RenderRow

logger = logging.getLogger(__name__)

OutOfRangePolicy = Literal["drop", "render"]
CollisionPolicy = Callable[[int, EquipmentItem, EquipmentItem], EquipmentItem]


class SlotCollisionError(Exception):
    """Raised when two items anchor at the same unit and collisions are rejected."""


class RackHeightError(Exception):
    """Raised when a rack is taller than the configured rendering limit."""


def last_write_wins(unit: int, existing: EquipmentItem, incoming: EquipmentItem) -> EquipmentItem:
    return incoming


def reject_on_collision(
    unit: int, existing: EquipmentItem, incoming: EquipmentItem
) -> EquipmentItem:
    raise SlotCollisionError(
        f"U{unit}: {incoming.model!r} collides with {existing.model!r} already anchored there"
    )


COLLISION_POLICIES: dict[str, CollisionPolicy] = {
    "last_write_wins": last_write_wins,
    "reject": reject_on_collision,
}


@dataclass
class SlotMap:
    """Items keyed by their anchor unit (``u_top``), plus placement diagnostics."""

    slots: dict[int, EquipmentItem] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)

    def get(self, unit: int) -> EquipmentItem | None:
        return self.slots.get(unit)


def build_slot_map(
    items: list[EquipmentItem],
    config: RackConfig,
    on_collision: CollisionPolicy = last_write_wins,
    out_of_range: OutOfRangePolicy = "drop",
) -> SlotMap:
    slot_map = SlotMap()
    for item in items:
        if out_of_range == "drop" and not item.fits(config):
            message = (
                f"{item.model!r} at U{item.u_bottom} (size {item.u_size}) "
                f"does not fit rack {config.name!r} of height {config.height}"
            )
            logger.warning("Dropping out-of-range item: %s", message)
            slot_map.warnings.append(message)
            continue
        unit = item.u_top
        existing = slot_map.slots.get(unit)
        if existing is not None:
            kept = on_collision(unit, existing, item)
            message = (
                f"U{unit}: {existing.model!r} and {item.model!r} share an anchor unit; "
                f"keeping {kept.model!r}"
            )
            logger.warning("Slot collision: %s", message)
            slot_map.warnings.append(message)
            item = kept
        slot_map.slots[unit] = item
    return slot_map


def walk_units(config: RackConfig) -> range:
    """Units from the visual top of the rack to its visual bottom."""
    if config.descending:
        return range(1, config.height + 1)
    return range(config.height, 0, -1)


def resolve_layout(config: RackConfig, slot_map: SlotMap) -> list[RenderRow]:
    step = -config.direction
    rows: list[RenderRow] = []
    skip_until: int | None = None
    for unit in walk_units(config):
        if skip_until is not None and (unit - skip_until) * step <= 0:
            continue
        skip_until = None
        item = slot_map.get(unit)
        if item is None or not item.model:
            rows.append(RenderRow(kind="empty", unit=unit))
            continue
        rows.append(RenderRow(kind="anchor", unit=unit, item=item))
        rows.extend(
            RenderRow(kind="continuation", unit=covered, item=item) for covered in item.units[1:]
        )
        skip_until = item.units[-1]
    return rows
