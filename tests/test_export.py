# SPDX-License-Identifier: Apache-2.0
# This file was created or modified with the assistance of an AI (Large Language Model).
"""Tests for elevation rendering and the CSV/JSON exports."""

from __future__ import annotations

import csv
import io
import json

import pytest

from models import RackConfig
from services.export import CSV_COLUMNS, elevation_json, rack_csv, render
from services.layout import RackHeightError, SlotCollisionError, reject_on_collision
from services.parser import parse, parse_line, parsed_items
from tests.conftest import make_item


def test_csv_header_and_row(rack: RackConfig) -> None:
    item = parse_line('1 1 "Cisco 4948" rtpserver1 this is a comment', rack)
    assert item is not None
    assert rack_csv(rack, [item]) == (
        "Model,Name,Rack,U,Height,Comment\n"
        '"Cisco 4948","rtpserver1",Rack,1,1,"this is a comment"\n'
    )


def test_csv_without_items_is_header_only(rack: RackConfig) -> None:
    assert rack_csv(rack, []) == ",".join(CSV_COLUMNS) + "\n"


def test_csv_follows_input_order_not_layout_order() -> None:
    config, outcomes = parse("1 1 Low\n10 1 High\n5 1 Middle", "name=R9 height=10")
    lines = render(config, parsed_items(outcomes)).csv.splitlines()
    assert [line.split(",")[0] for line in lines[1:]] == ['"Low"', '"High"', '"Middle"']
    assert lines[1].split(",")[2] == "R9"


def test_csv_does_not_escape_embedded_quotes(rack: RackConfig) -> None:
    item = parse_line('1 1 ab"c', rack)
    assert item is not None
    assert rack_csv(rack, [item]).splitlines()[1] == '"ab"c","",Rack,1,1,""'


def test_csv_rows_reparse_to_the_same_items() -> None:
    config, outcomes = parse(
        '1 2 "HP DL380" db1 nightly backups\n5 1 Catalyst "core sw" \n8 3 "Shelf DS4243"',
        "height=12",
    )
    items = parsed_items(outcomes)
    rows = list(csv.DictReader(io.StringIO(render(config, items).csv)))
    assert len(rows) == len(items)
    for row, original in zip(rows, items):
        line = f'{row["U"]} {row["Height"]} "{row["Model"]}" "{row["Name"]}" {row["Comment"]}'
        again = parse_line(line, config)
        assert again is not None
        assert (again.u_bottom, again.u_size, again.model, again.name, again.comment) == (
            original.u_bottom,
            original.u_size,
            original.model,
            original.name,
            original.comment,
        )


def test_render_is_idempotent() -> None:
    config, outcomes = parse('1 1 A\n2 3 "B c" d e\n2 1 Z', "height=8")
    items = parsed_items(outcomes)
    first = render(config, items)
    second = render(config, items)
    assert first.table == second.table
    assert first.csv == second.csv
    assert first.warnings == second.warnings


def test_render_table_title_and_rows() -> None:
    config = RackConfig(name="R1", height=3)
    elevation = render(config, [make_item(2, 2, model="Server")])
    assert elevation.table.title == "R1"
    assert [(r.kind, r.unit) for r in elevation.table.rows] == [
        ("anchor", 3),
        ("continuation", 2),
        ("empty", 1),
    ]
    assert elevation.items[0].model == "Server"


def test_render_reports_collisions_and_dropped_items() -> None:
    config = RackConfig(height=4)
    items = [make_item(1, 1, model="A"), make_item(1, 1, model="B"), make_item(4, 2, model="C")]
    elevation = render(config, items)
    assert len(elevation.warnings) == 2
    assert elevation.csv.count("\n") == 4


def test_render_collision_policy_is_passed_through() -> None:
    config = RackConfig(height=4)
    items = [make_item(1, 1, model="A"), make_item(1, 1, model="B")]
    with pytest.raises(SlotCollisionError):
        render(config, items, on_collision=reject_on_collision)


def test_elevation_json() -> None:
    config, outcomes = parse("3 2 NetApp filer1 link:http://example.com", "name=R2 height=6")
    payload = json.loads(elevation_json(config, parsed_items(outcomes)))
    assert payload["rack"] == {"name": "R2", "height": 6, "descending": False}
    assert payload["items"] == [
        {
            "u_bottom": 3,
            "u_size": 2,
            "u_top": 4,
            "model": "NetApp",
            "name": "filer1",
            "color": "#07c",
            "link": "http://example.com",
            "link_title": None,
            "comment": "",
        }
    ]


def test_render_refuses_racks_above_max_height() -> None:
    config = RackConfig(name="huge", height=1_000_000_000)
    with pytest.raises(RackHeightError, match="above the limit of 500"):
        render(config, [make_item(1, 1)], max_height=500)


def test_render_at_max_height_is_allowed() -> None:
    elevation = render(RackConfig(height=3), [], max_height=3)
    assert len(elevation.table.rows) == 3
