import csv
import json

import pytest

from commission_report.export.commission_export import CommissionExportError, write_flat_csv, write_raw_json
from commission_report.transform.commission_rows import CSV_COLUMNS

RECORDS = [
    {
        "id": "c1",
        "transaction_date": "2024-01-01",
        "transaction_total": 10,
        "transaction_commission": 1,
        "vendor_id_offer_id": "v1_o1",
        "offer_title": 'A "Deal"',
        "vendor_type": "net",
        "click_source": "smartserve",
        "referrer": "http://x",
        "placement_id": "p1",
        "geo": {"city": "Austin", "sub_1_code": "TX", "country": "US"},
    },
    {
        "id": "c2",
        "transaction_date": "2024-01-02",
        "transaction_total": 24.5,
        "transaction_commission": 2.45,
        "vendor_id_offer_id": "v2_o9",
        "offer_title": "Café chairs, set of 4\nfree shipping",
        "vendor_type": "net",
        "click_source": "shortcode",
        "referrer": None,
        "placement_id": None,
        "geo": {},
        "extra": {"nested": [1, 2, 3]},
    },
]


def test_csv_example_row(tmp_path):
    path = tmp_path / "output.csv"

    write_flat_csv(RECORDS[:1], path)

    lines = path.read_text(encoding="utf-8").split("\n")
    assert lines[1] == '"c1","2024-01-01","10","1","v1_o1","A ""Deal""","net","smartserve","http://x","p1","Austin, TX","US"'


def test_csv_header_and_row_count(tmp_path):
    path = tmp_path / "output.csv"

    result = write_flat_csv(RECORDS, path)

    with path.open(newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))

    assert rows[0] == CSV_COLUMNS
    assert len(rows) == len(RECORDS) + 1
    assert result.rows == len(RECORDS)
    assert result.path == path


def test_csv_fields_parse_back(tmp_path):
    path = tmp_path / "output.csv"

    write_flat_csv(RECORDS, path)

    with path.open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))

    assert rows[0]["offer_title"] == 'A "Deal"'
    assert rows[1]["offer_title"] == "Café chairs, set of 4\nfree shipping"
    assert rows[1]["city"] == "?, ?"
    assert rows[1]["country"] == "?"
    assert rows[1]["referrer"] == ""


def test_csv_empty_has_header_only(tmp_path):
    path = tmp_path / "output.csv"

    write_flat_csv([], path)

    with path.open(newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows == [CSV_COLUMNS]


def test_json_round_trip(tmp_path):
    path = tmp_path / "output.json"

    result = write_raw_json(RECORDS, path)

    text = path.read_text(encoding="utf-8")
    assert json.loads(text) == RECORDS
    assert text.startswith("[\n  {")
    assert "Café" in text
    assert result.rows == 2


def test_overwrites_existing_files(tmp_path):
    json_path = tmp_path / "output.json"
    csv_path = tmp_path / "output.csv"
    json_path.write_text("stale", encoding="utf-8")
    csv_path.write_text("stale\nstale\nstale\n", encoding="utf-8")

    write_raw_json([], json_path)
    write_flat_csv([], csv_path)

    assert json.loads(json_path.read_text(encoding="utf-8")) == []
    assert csv_path.read_text(encoding="utf-8").count("\n") == 1


def test_unwritable_path_raises_export_error(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x", encoding="utf-8")

    with pytest.raises(CommissionExportError):
        write_raw_json(RECORDS, blocker / "output.json")

    with pytest.raises(CommissionExportError):
        write_flat_csv(RECORDS, blocker / "output.csv")
