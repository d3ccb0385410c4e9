# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).

from __future__ import annotations

import pytest

from models import EquipmentItem, RackConfig, top_unit


def make_item(
    u_bottom: int,
    u_size: int = 1,
    model: str = "X",
    descending: bool = False,
    **fields: object,
) -> EquipmentItem:
    return EquipmentItem.model_validate(
        {
            "u_bottom": u_bottom,
            "u_size": u_size,
            "u_top": top_unit(u_bottom, u_size, descending),
            "model": model,
            "color": "#888",
            **fields,
        }
    )


@pytest.fixture
def rack() -> RackConfig:
    return RackConfig()


@pytest.fixture
def descending_rack() -> RackConfig:
    return RackConfig(name="R-desc", height=10, descending=True)
