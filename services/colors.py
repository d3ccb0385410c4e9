# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Default equipment colors picked from the model text."""

from __future__ import annotations

import re
from typing import Protocol

DEFAULT_COLOR = "#888"
EMPTY_MODEL_COLOR = "#FFF"

# Applied in order; every matching rule overwrites the previous pick.
MODEL_COLOR_RULES: list[tuple[str, str]] = [
    (r"(wire|cable)\s*guide|pdu|patch|term server|lcd", "#bba"),
    (r"blank", "#fff"),
    (r"netapp|fas\d", "#07c"),
    (r"^Sh(elf)?\s", "#0AE"),
    (r"cisco|catalyst|nexus", "#F80"),
    (r"brocade|mds", "#8F0"),
    (r"ucs", "#c00"),
    (r"ibm", "#67A"),
    (r"hp", "#A67"),
]


class ColorClassifier(Protocol):
    def classify(self, model: str) -> str: ...


class ModelColorClassifier:
    def __init__(
        self,
        rules: list[tuple[str, str]] | None = None,
        default: str = DEFAULT_COLOR,
        empty: str = EMPTY_MODEL_COLOR,
    ):
        self.rules = [
            (re.compile(pattern, re.IGNORECASE | re.ASCII), color)
            for pattern, color in (MODEL_COLOR_RULES if rules is None else rules)
        ]
        self.default = default
        self.empty = empty

    def classify(self, model: str) -> str:
        color = self.default
        for pattern, rule_color in self.rules:
            if pattern.search(model):
                color = rule_color
        if not model:
            color = self.empty
        return color

