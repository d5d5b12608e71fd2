from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from gymsupply.adapters.sheets import CatalogFileSource, SheetsAPIError, load_catalog_file

if TYPE_CHECKING:
    from pathlib import Path


def test_load_json_export(tmp_path: Path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(
        json.dumps(
            [
                {"EXOS Part Number": "A1", "Item Name": "Bench", "Cost": "$100"},
                {"EXOS Part Number": "A2", "Item Name": ""},
            ]
        ),
        encoding="utf-8",
    )

    records = load_catalog_file(path)

    assert [(record.key, record.cost) for record in records] == [("A1", "$100")]


def test_load_csv_export_with_bom(tmp_path: Path) -> None:
    path = tmp_path / "catalog.csv"
    path.write_text(
        "EXOS Part Number,Item Name,Brand,Cost\nA1,Bench,Rogue,$100\n,Loose,,\n",
        encoding="utf-8-sig",
    )

    records = CatalogFileSource(path)()

    assert [record.key for record in records] == ["A1", None]
    assert records[0].brand == "Rogue"


def test_json_error_payload_raises(tmp_path: Path) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps({"error": "quota exceeded"}), encoding="utf-8")

    with pytest.raises(SheetsAPIError, match="quota"):
        load_catalog_file(path)


def test_unsupported_suffix_raises(tmp_path: Path) -> None:
    path = tmp_path / "catalog.xlsx"
    path.write_bytes(b"")

    with pytest.raises(ValueError, match="Unsupported"):
        load_catalog_file(path)
