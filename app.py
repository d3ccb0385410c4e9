# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Flask WebUI for rendering rack elevation blocks."""

from __future__ import annotations

import logging
import os

from flask import Flask, Response, flash, redirect, render_template, request, url_for

from config import Settings, configure_logging, load_settings
from services.document import DocumentRenderer, RackBlock, find_rack_blocks
from services.export import Elevation, elevation_json
from services.layout import RackHeightError, SlotCollisionError

logger = logging.getLogger(__name__)

SAMPLE_DOCUMENT = """Storage row, rack 7.

<rack name=R07 height=12>
# u_bottom u_size model [name] [#color] [link:target] [comment]
12 1 "Cisco 4948" rtp-sw1 uplink switch
10 2 NetApp #abc123 link:http://example.com primary filer
7 3 "Shelf DS4243" "" three disk shelves
6 1 "Cable guide"
1 2 "HP DL380" db1 link:[[servers:db1|Database host]]
</rack>
"""


def create_app(settings: Settings | None = None) -> Flask:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    app = Flask(__name__)
    app.secret_key = os.environ.get("SECRET_KEY", "dev-secret")
    app.config["MAX_CONTENT_LENGTH"] = settings.max_content_length
    renderer = DocumentRenderer.from_settings(settings)

    def _submitted_elevation(index: int) -> Elevation | Response:
        blocks: list[RackBlock] = find_rack_blocks(request.form.get("document", ""))
        if index >= len(blocks):
            return Response("not found", status=404)
        try:
            _, elevation = renderer.elevation(blocks[index])
        except SlotCollisionError as exc:
            return Response(str(exc), status=409)
        except RackHeightError as exc:
            return Response(str(exc), status=422)
        return elevation

    @app.get("/")
    def index() -> Response:
        return redirect(url_for("editor"))

    @app.get("/editor")
    def editor() -> str:
        return render_template("editor.html", document=SAMPLE_DOCUMENT)

    @app.post("/render")
    def render_document() -> str | Response:
        document = request.form.get("document", "")
        if not document.strip():
            flash("Please enter a document")
            return redirect(url_for("editor"))
        blocks = find_rack_blocks(document)
        if not blocks:
            flash("No <rack> block found in the document")
            return redirect(url_for("editor"))
        logger.info("Rendering %d rack block(s)", len(blocks))
        return render_template(
            "document.html",
            document=document,
            rendered=renderer.render_document(document),
            rack_count=len(blocks),
        )

    @app.post("/export/<int:index>/rack.csv")
    def export_csv(index: int) -> Response:
        elevation = _submitted_elevation(index)
        if isinstance(elevation, Response):
            return elevation
        return Response(
            elevation.csv,
            mimetype="text/csv",
            headers={
                "Content-Disposition": f"attachment; filename={elevation.config.name}.csv"
            },
        )

    @app.post("/export/<int:index>/rack.json")
    def export_json(index: int) -> Response:
        elevation = _submitted_elevation(index)
        if isinstance(elevation, Response):
            return elevation
        return Response(
            elevation_json(elevation.config, elevation.items), mimetype="application/json"
        )

    return app


if __name__ == "__main__":
    create_app().run(host="0.0.0.0", port=5000, debug=True)
