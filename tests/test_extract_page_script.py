"""
Tests for the extract_page command-line runner.
"""
import importlib.util
import json
from pathlib import Path

import pytest

SCRIPT = Path(__file__).parent.parent / "scripts" / "extract_page.py"


@pytest.fixture
def extract_page():
    spec = importlib.util.spec_from_file_location("extract_page", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def test_run_prints_outcome(extract_page, tmp_path, capsys):
    page = tmp_path / "page.html"
    page.write_text("""
    <html><head>
    <script type="application/ld+json">
    {"@type": "JobPosting", "title": "QA Engineer", "description": "<p>Test all the things.</p>"}
    </script>
    </head><body></body></html>
    """, encoding="utf-8")

    exit_code = extract_page.run(page, "https://acme.example/jobs/7")

    assert exit_code == 0
    output = json.loads(capsys.readouterr().out)
    assert output["is_job_page"] is True
    assert output["outcome"]["success"] is True
    assert output["outcome"]["strategy_name"] == "generic"
    assert output["outcome"]["record"]["title"] == "QA Engineer"


def test_run_without_offer(extract_page, tmp_path, capsys):
    page = tmp_path / "page.html"
    page.write_text("<html><body><p>About us</p></body></html>", encoding="utf-8")

    assert extract_page.run(page, "https://acme.example/about") == 1
    output = json.loads(capsys.readouterr().out)
    assert output["is_job_page"] is False
    assert output["outcome"]["strategy_name"] == "none"


def test_run_with_missing_file(extract_page, tmp_path):
    assert extract_page.run(tmp_path / "missing.html", "https://acme.example/") == 1
