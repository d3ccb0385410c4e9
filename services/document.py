# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Discovery and rendering of ``<rack ...>...</rack>`` blocks inside a document."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from html import escape

from config import Settings
from models import LineSyntaxError, ParseOutcome, RackConfig
from services.colors import ColorClassifier, ModelColorClassifier
from services.export import Elevation, render
from services.layout import (
    COLLISION_POLICIES,
    CollisionPolicy,
    OutOfRangePolicy,
    RackHeightError,
    SlotCollisionError,
    last_write_wins,
)
from services.links import LinkResolver, WikiLinkResolver
from services.parser import parse, parsed_items
from services.render_html import elevation_html, syntax_error_html, warning_html

logger = logging.getLogger(__name__)

RACK_BLOCK = re.compile(r"<rack([^>]*)>(.*?)</rack>", re.DOTALL)
NO_DATA_MESSAGE = "No data found"


@dataclass(frozen=True)
class RackBlock:
    options: str
    body: str
    start: int = 0
    end: int = 0


def find_rack_blocks(text: str) -> list[RackBlock]:
    return [
        RackBlock(options=m.group(1), body=m.group(2), start=m.start(), end=m.end())
        for m in RACK_BLOCK.finditer(text)
    ]


class DocumentRenderer:
    """Renders rack blocks one at a time; nothing is shared between blocks."""

    def __init__(
        self,
        classifier: ColorClassifier | None = None,
        link_resolver: LinkResolver | None = None,
        on_collision: CollisionPolicy = last_write_wins,
        out_of_range: OutOfRangePolicy = "drop",
        max_height: int | None = None,
    ):
        self.classifier = classifier or ModelColorClassifier()
        self.link_resolver = link_resolver or WikiLinkResolver()
        self.on_collision = on_collision
        self.out_of_range = out_of_range
        self.max_height = max_height

    @classmethod
    def from_settings(cls, settings: Settings) -> "DocumentRenderer":
        return cls(
            link_resolver=WikiLinkResolver(base=settings.link_base),
            on_collision=COLLISION_POLICIES[settings.collision_policy],
            out_of_range=settings.out_of_range,
            max_height=settings.max_height,
        )

    def parse_block(self, block: RackBlock) -> tuple[RackConfig, list[ParseOutcome]]:
        return parse(block.body, block.options, self.classifier, self.link_resolver)

    def render_outcomes(self, config: RackConfig, outcomes: list[ParseOutcome]) -> Elevation:
        return render(
            config,
            parsed_items(outcomes),
            on_collision=self.on_collision,
            out_of_range=self.out_of_range,
            max_height=self.max_height,
        )

    def elevation(self, block: RackBlock) -> tuple[list[ParseOutcome], Elevation]:
        config, outcomes = self.parse_block(block)
        return outcomes, self.render_outcomes(config, outcomes)

    def render_block(self, block: RackBlock, export_id: str | None = None) -> str:
        parts: list[str] = []
        if not block.body.strip():
            parts.append(NO_DATA_MESSAGE)
        config, outcomes = self.parse_block(block)
        parts.extend(
            syntax_error_html(outcome)
            for outcome in outcomes
            if isinstance(outcome, LineSyntaxError)
        )
        try:
            elevation = self.render_outcomes(config, outcomes)
        except (SlotCollisionError, RackHeightError) as exc:
            logger.warning("Rack %r rejected: %s", config.name, exc)
            parts.append(warning_html(str(exc)))
            return "".join(parts)
        parts.extend(warning_html(message) for message in elevation.warnings)
        parts.append(elevation_html(elevation, export_id))
        return "".join(parts)

    def render_document(self, text: str) -> str:
        """Replace every rack block with its elevation; other text is escaped verbatim."""
        parts: list[str] = []
        pos = 0
        for block in find_rack_blocks(text):
            parts.append(_text_html(text[pos : block.start]))
            parts.append(self.render_block(block))
            pos = block.end
        parts.append(_text_html(text[pos:]))
        return "".join(parts)


def _text_html(segment: str) -> str:
    if not segment.strip():
        return ""
    return f"<pre class='doc-text'>{escape(segment.strip())}</pre>\n"
