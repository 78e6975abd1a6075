"""Tests for the command line entry point."""

import json
import logging

import pytest

import generate_report


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("REPORT_OUTPUT_DIR", str(tmp_path / "reports"))
    monkeypatch.delenv("REPORT_LOG_FILE", raising=False)
    monkeypatch.delenv("REPORT_PDF_COMPRESS", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def _write_json(path, data) -> str:
    path.write_text(json.dumps(data))
    return str(path)


class TestMain:
    def test_writes_report_to_explicit_output(self, tmp_path, minimal_payload) -> None:
        payload = _write_json(tmp_path / "payload.json", minimal_payload.to_dict())
        output = tmp_path / "out" / "acme.pdf"
        assert generate_report.main([payload, "--output", str(output)]) == 0
        assert output.read_bytes().startswith(b"%PDF")

    def test_default_output_path(self, tmp_path, minimal_payload) -> None:
        payload = _write_json(tmp_path / "payload.json", minimal_payload.to_dict())
        assert generate_report.main([payload, "--log-level", "warning"]) == 0
        assert (tmp_path / "reports" / "acme-dental-report.pdf").exists()

    def test_drilldown(self, tmp_path, drilldown_table) -> None:
        payload = _write_json(tmp_path / "drill.json", drilldown_table.to_dict())
        assert generate_report.main([payload, "--drilldown"]) == 0
        assert (tmp_path / "reports" / "marketing-drilldown-drilldown.pdf").exists()

    def test_missing_required_field(self, tmp_path) -> None:
        payload = _write_json(tmp_path / "payload.json", {"date": "today"})
        assert generate_report.main([payload]) == 1

    def test_overflowing_number_in_payload(self, tmp_path) -> None:
        path = tmp_path / "payload.json"
        path.write_text(
            '{"clientName": "Acme", "date": "today", "growthCategories": '
            '[{"name": "Marketing", "score": 64, "confidence": 80, "scored": 1e400, "total": 6}]}'
        )
        assert generate_report.main([str(path)]) == 1

    def test_invalid_json(self, tmp_path) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        assert generate_report.main([str(path)]) == 1

    def test_missing_file(self, tmp_path) -> None:
        assert generate_report.main([str(tmp_path / "absent.json")]) == 1

    def test_invalid_configuration(self, tmp_path, minimal_payload, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REPORT_PDF_COMPRESS", "maybe")
        payload = _write_json(tmp_path / "payload.json", minimal_payload.to_dict())
        assert generate_report.main([payload]) == 1
