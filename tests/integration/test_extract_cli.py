# tests/integration/test_extract_cli.py

from __future__ import annotations

import json

import pytest

import extract_cli
from tests.utils import make_page, make_property, write_page

pytestmark = pytest.mark.integration


def test_cli_prints_record_json(tmp_path, capsys, dataset_file):
    page = write_page(tmp_path, make_page(make_property(rentZestimate=None)))

    code = extract_cli.main(["--file", str(page), "--dataset", str(dataset_file), "--pretty"])
    assert code == 0

    out = json.loads(capsys.readouterr().out)
    assert out["price"] == 350000
    assert out["zip_code"] == "43205"
    assert out["property_type"] == "Single Family"
    assert out["secondary_rent_estimate"] == 1600
    assert out["secondary_rent_source"]["area_code"] == "METRO18140M18140"
    assert "rent_estimate" not in out


def test_cli_require_fields_failure_exit_code(tmp_path, capsys, dataset_file):
    page = write_page(tmp_path, "<html><body><p>Coming soon</p></body></html>")

    code = extract_cli.main(["--file", str(page), "--dataset", str(dataset_file), "--require-fields"])
    assert code == 1
    assert "incomplete" in capsys.readouterr().err


def test_cli_missing_file(tmp_path, capsys):
    code = extract_cli.main(["--file", str(tmp_path / "nope.html")])
    assert code == 1
    assert "could not read listing page" in capsys.readouterr().err


def test_cli_bad_config(tmp_path, capsys):
    cfg = tmp_path / "config.json"
    cfg.write_text("{oops", encoding="utf-8")
    page = write_page(tmp_path, make_page(make_property()))

    assert extract_cli.main(["--file", str(page), "--config", str(cfg)]) == 1
    assert "Invalid JSON" in capsys.readouterr().err


def test_cli_requires_a_source():
    with pytest.raises(SystemExit):
        extract_cli.main([])
