# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""HTML serialization of rack elevations and inline diagnostics."""

from __future__ import annotations

from html import escape
from uuid import uuid4

from models import LineSyntaxError, RenderRow
from services.export import Elevation

SHOW_CSV_LABEL = "Show CSV &darr;"
HIDE_CSV_LABEL = "Hide CSV &uarr;"


def new_export_id() -> str:
    return f"csv_{uuid4().hex[:12]}"


def syntax_error_html(error: LineSyntaxError) -> str:
    return (
        'Syntax error on the following line: <pre class="rack-error" style="color:red">'
        f"{escape(error.line)}</pre>\n"
    )


def warning_html(message: str) -> str:
    return f'<div class="rack-warning">{escape(message)}</div>\n'


def _anchor_html(row: RenderRow) -> str:
    item = row.item
    assert item is not None
    link_open = ""
    link_close = ""
    if item.link:
        title = f' title="{escape(item.link_title)}"' if item.link_title else ""
        link_open = f'<a href="{escape(item.link)}"{title}>'
        link_close = "</a>"
    marker = " *" if item.comment else ""
    return (
        f"<tr><th>{row.unit}</th>"
        f"<td class='item' rowspan='{item.u_size}' "
        f"style='background-color: {escape(item.color)};' title=\"{escape(item.comment)}\">"
        f"{link_open}"
        f"<div style='float: left; font-weight:bold;'>{escape(item.model)}{marker}</div>"
        f"<div style='float: right; margin-left: 3em; '>{escape(item.name)}</div>"
        f"{link_close}"
        "</td></tr>\n"
    )


def row_html(row: RenderRow) -> str:
    if row.kind == "anchor":
        return _anchor_html(row)
    if row.kind == "continuation":
        return f"<tr><th>{row.unit}</th></tr>\n"
    return f"<tr><th>{row.unit}</th><td class='empty'></td></tr>\n"


def elevation_html(elevation: Elevation, export_id: str | None = None) -> str:
    """Render the unit table followed by the hidden CSV region it toggles."""
    export_id = export_id or new_export_id()
    parts = [
        "<table class='rack'>"
        f"<tr><th colspan='2' class='title'>{escape(elevation.table.title)}</th></tr>\n"
    ]
    parts.extend(row_html(row) for row in elevation.table.rows)
    parts.append(
        "<tr><th colspan='2' class='bottom'>"
        f"<span class='rack-csv-toggle' style='cursor: pointer;' data-target='{export_id}' "
        f"data-show-label='{SHOW_CSV_LABEL}' data-hide-label='{HIDE_CSV_LABEL}'>"
        f"{SHOW_CSV_LABEL}</span></th></tr>\n"
    )
    parts.append("</table>&nbsp;")
    parts.append(f"<pre class='rack-csv' style='display:none;' id='{export_id}'>")
    parts.append(escape(elevation.csv))
    parts.append("</pre>\n")
    return "".join(parts)
