# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Resolution of ``link:`` fields into external URLs or internal page links."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Protocol
from urllib.parse import quote

from models import ResolvedLink

_INTERNAL_REF = re.compile(r"^\[\[([^\]|]+)(?:\|([^\]]*))?\]\]")
_INVALID_ID_CHARS = re.compile(r"[^\w.:\-]+")
_REPEATED_COLONS = re.compile(r":+")
_REPEATED_UNDERSCORES = re.compile(r"_+")
_COLON_PADDING = re.compile(r"[._\-]*:[._\-]*")


class LinkResolver(Protocol):
    def resolve(self, raw: str) -> ResolvedLink | None: ...


def clean_page_id(raw_id: str) -> str:
    """Normalize a page reference into a wiki-style page id (``ns:page_name``)."""
    page_id = raw_id.strip().lower()
    page_id = page_id.replace("/", ":").replace(";", ":")
    page_id = re.sub(r"\s+", "_", page_id)
    page_id = _INVALID_ID_CHARS.sub("_", page_id)
    page_id = _REPEATED_COLONS.sub(":", page_id)
    page_id = _REPEATED_UNDERSCORES.sub("_", page_id)
    page_id = _COLON_PADDING.sub(":", page_id)
    return page_id.strip(":._-")


def build_page_url(page_id: str, base: str = "/") -> str:
    if not base.endswith("/"):
        base = f"{base}/"
    return f"{base}{quote(page_id, safe=':')}"


class WikiLinkResolver:
    """Classify a raw link field as empty, an internal ``[[ref]]`` or a literal URL.

    Page id normalization and URL building are host capabilities and can be
    swapped out, e.g. to point internal references at another wiki.
    """

    def __init__(
        self,
        base: str = "/",
        clean_id: Callable[[str], str] = clean_page_id,
        build_url: Callable[[str, str], str] = build_page_url,
    ):
        self.base = base
        self.clean_id = clean_id
        self.build_url = build_url

    def resolve(self, raw: str) -> ResolvedLink | None:
        if not raw:
            return None
        if not raw.startswith("[["):
            return ResolvedLink(url=raw)
        match = _INTERNAL_REF.match(raw)
        if match:
            target, title = match.group(1), match.group(2) or None
        else:
            # unterminated reference: everything up to the first ] or | is the id
            target, title = re.split(r"[\]|]", raw[2:], maxsplit=1)[0], None
        return ResolvedLink(url=self.build_url(self.clean_id(target), self.base), title=title)
