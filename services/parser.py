# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Line grammar for rack block bodies.

Each equipment line reads::

    <u_bottom> <u_size> <model> [name] [#color] [link:<target>] [comment]

Fields are scanned left to right. Only ``u_bottom``, ``u_size`` and ``model``
can make a line fail; once they match, the optional fields either match at the
current position or are skipped, and whatever is left becomes the comment.
"""

from __future__ import annotations

import logging
import re

from models import (
    EquipmentItem,
    LineSyntaxError,
    ParsedItem,
    ParseOutcome,
    RackConfig,
    top_unit,
)
from services.colors import ColorClassifier, ModelColorClassifier
from services.links import LinkResolver, WikiLinkResolver

logger = logging.getLogger(__name__)

_SPACE = re.compile(r"\s*", re.ASCII)
_REQUIRED_SPACE = re.compile(r"\s+", re.ASCII)
_DIGITS = re.compile(r"\d+", re.ASCII)
_QUOTED = re.compile(r'"[^"]*"')
_BARE = re.compile(r"\S+", re.ASCII)
_BARE_NAME = re.compile(r"(?!#|link:)\S*", re.ASCII)
_COLOR = re.compile(r"#\w+", re.ASCII)
_LINK = re.compile(r"link:(\[\[[^\]|]+(?:\|[^\]]*)?\]\]|\S*)", re.ASCII)
_COMMENT_LINE = re.compile(r"^\s*#", re.ASCII)


def _unquote(token: str) -> str:
    if token.endswith('"'):
        token = token[:-1]
    if token.startswith('"'):
        token = token[1:]
    return token


class _LineScanner:
    def __init__(self, line: str):
        self.line = line
        self.pos = 0

    def take(self, pattern: re.Pattern[str]) -> re.Match[str] | None:
        match = pattern.match(self.line, self.pos)
        if match:
            self.pos = match.end()
        return match

    def skip_space(self) -> None:
        self.take(_SPACE)

    def take_text(self, bare: re.Pattern[str]) -> str | None:
        match = self.take(_QUOTED) or self.take(bare)
        return _unquote(match.group(0)) if match else None

    def rest(self) -> str:
        return self.line[self.pos :].strip(" \t\n\r\f\v")


def is_skippable(line: str) -> bool:
    return not line.strip() or bool(_COMMENT_LINE.match(line))


def parse_line(
    line: str,
    config: RackConfig,
    classifier: ColorClassifier | None = None,
    link_resolver: LinkResolver | None = None,
) -> EquipmentItem | None:
    """Parse one equipment line; ``None`` means the line does not fit the grammar."""
    classifier = classifier or ModelColorClassifier()
    link_resolver = link_resolver or WikiLinkResolver()
    scanner = _LineScanner(line)

    scanner.skip_space()
    u_bottom = scanner.take(_DIGITS)
    if not u_bottom or not scanner.take(_REQUIRED_SPACE):
        return None
    u_size = scanner.take(_DIGITS)
    if not u_size or not scanner.take(_REQUIRED_SPACE):
        return None
    model = scanner.take_text(_BARE)
    if model is None:
        return None

    scanner.skip_space()
    name = scanner.take_text(_BARE_NAME) or ""
    scanner.skip_space()
    color = scanner.take(_COLOR)
    scanner.skip_space()
    link = scanner.take(_LINK)
    comment = scanner.rest()

    try:
        size = int(u_size.group(0))
        bottom = int(u_bottom.group(0))
    except ValueError:
        # digit strings past the interpreter's int conversion limit
        return None
    if size < 1:
        return None
    resolved = link_resolver.resolve(link.group(1)) if link else None
    return EquipmentItem(
        u_bottom=bottom,
        u_size=size,
        u_top=top_unit(bottom, size, config.descending),
        model=model,
        name=name,
        color=color.group(0) if color else classifier.classify(model),
        link=resolved.url if resolved else None,
        link_title=resolved.title if resolved else None,
        comment=comment,
    )


def body_lines(body: str) -> list[str]:
    """Split a block body into lines, dropping leading blank lines and trailing newlines."""
    body = re.sub(r"[\r\n]*$", "", body)
    body = re.sub(r"^\s*[\r\n]*", "", body)
    return body.split("\n") if body else []


def parse_body(
    body: str,
    config: RackConfig,
    classifier: ColorClassifier | None = None,
    link_resolver: LinkResolver | None = None,
) -> list[ParseOutcome]:
    classifier = classifier or ModelColorClassifier()
    link_resolver = link_resolver or WikiLinkResolver()
    outcomes: list[ParseOutcome] = []
    for line_no, line in enumerate(body_lines(body), start=1):
        if is_skippable(line):
            continue
        item = parse_line(line, config, classifier, link_resolver)
        if item is None:
            logger.debug("Syntax error in rack %r line %d: %r", config.name, line_no, line)
            outcomes.append(LineSyntaxError(line=line, line_no=line_no))
        else:
            outcomes.append(ParsedItem(item=item, line_no=line_no))
    return outcomes


def parse(
    body: str,
    options: str = "",
    classifier: ColorClassifier | None = None,
    link_resolver: LinkResolver | None = None,
) -> tuple[RackConfig, list[ParseOutcome]]:
    """Parse a rack block: its raw option string and its body text."""
    config = RackConfig.from_options(options)
    return config, parse_body(body, config, classifier, link_resolver)


def parsed_items(outcomes: list[ParseOutcome]) -> list[EquipmentItem]:
    return [o.item for o in outcomes if isinstance(o, ParsedItem)]
