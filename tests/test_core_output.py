"""Tests for CLI output formatting."""

import json

from kouji.core.output import OutputFormat, format_result, format_table

ROWS = [
    {"id": "A3K7M", "company_name": "Acme", "file_count": 2, "tags": ["Acme", "Nagoya"]},
    {"id": "B9PQR", "company_name": "Beta", "file_count": 0, "tags": []},
]


def test_human_format():
    text = format_result({"key": "val"}, title="Test Title")
    assert "Test Title" in text
    assert "Key" in text
    assert "val" in text


def test_json_format():
    text = format_result({"temp": 28.5}, fmt=OutputFormat.JSON)
    assert json.loads(text) == {"temp": 28.5}


def test_markdown_format():
    text = format_result({"size": 4.0}, fmt=OutputFormat.MARKDOWN)
    assert "| Size |" in text


def test_json_keeps_non_ascii():
    text = format_result({"company": "豊田築炉"}, fmt=OutputFormat.JSON)
    assert "豊田築炉" in text


def test_table_human_aligns_columns():
    text = format_table(ROWS, ["id", "company_name", "file_count"], title="Projects")
    lines = text.splitlines()
    assert lines[0] == "Projects"
    assert "Company Name" in text
    assert any(line.startswith("A3K7M") for line in lines)
    assert any(line.startswith("B9PQR") for line in lines)


def test_table_json_is_full_rows():
    text = format_table(ROWS, ["id"], fmt=OutputFormat.JSON)
    assert json.loads(text) == ROWS


def test_table_markdown_rows():
    text = format_table(ROWS, ["id", "tags"], fmt=OutputFormat.MARKDOWN)
    assert "| Id | Tags |" in text
    assert "| A3K7M | Acme, Nagoya |" in text
    assert "| B9PQR | - |" in text
