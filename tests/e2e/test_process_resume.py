"""End-to-End tests for the resume processing script.

Runs scripts/process_resume.py as a subprocess against a temporary
configuration so traces land in tmp_path. Only the chunking path is
exercised; extraction and tailoring need provider API keys.
"""

import json
import os
import subprocess
import sys
from pathlib import Path

import pytest
import yaml

# Project root for script execution
PROJECT_ROOT = Path(__file__).parent.parent.parent
SAMPLE_RESUME = PROJECT_ROOT / "tests" / "fixtures" / "sample_resume.txt"


class TestProcessResume:
    """E2E tests for scripts/process_resume.py."""

    @pytest.fixture
    def config_path(self, tmp_path):
        """Write a settings file whose traces go to tmp_path."""
        with (PROJECT_ROOT / "config" / "settings.yaml").open(encoding="utf-8") as fh:
            settings = yaml.safe_load(fh)
        settings["observability"]["traces_path"] = str(tmp_path / "traces.jsonl")
        settings["observability"]["log_level"] = "WARNING"

        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump(settings), encoding="utf-8")
        return path

    def run_script(self, *args: str) -> subprocess.CompletedProcess:
        env = os.environ.copy()
        env["PYTHONUTF8"] = "1"
        return subprocess.run(
            [sys.executable, str(PROJECT_ROOT / "scripts" / "process_resume.py"), *args],
            capture_output=True,
            text=True,
            cwd=str(PROJECT_ROOT),
            timeout=60,
            env=env,
            encoding="utf-8",
            errors="replace",
        )

    def test_help(self):
        result = self.run_script("--help")

        assert result.returncode == 0
        assert "--path" in result.stdout
        assert "--chunk-size" in result.stdout
        assert "--job-description" in result.stdout

    def test_summary_output(self, config_path):
        result = self.run_script("--path", str(SAMPLE_RESUME), "--config", str(config_path))

        assert result.returncode == 0, result.stdout + result.stderr
        assert "DOCUMENT SUMMARY" in result.stdout
        assert "Chunks:     1" in result.stdout

    def test_verbose_enables_debug_logging(self, config_path):
        quiet = self.run_script("--path", str(SAMPLE_RESUME), "--config", str(config_path))
        verbose = self.run_script("--path", str(SAMPLE_RESUME), "--config", str(config_path), "--verbose")

        assert verbose.returncode == 0, verbose.stdout + verbose.stderr
        assert "DEBUG" in verbose.stderr
        assert "Processing document text" in verbose.stderr
        assert "Processing document text" not in quiet.stderr

    def test_json_output_with_overrides(self, config_path, tmp_path):
        result = self.run_script(
            "--path", str(SAMPLE_RESUME),
            "--config", str(config_path),
            "--chunk-size", "300",
            "--overlap", "50",
            "--json",
        )

        assert result.returncode == 0, result.stdout + result.stderr
        document = json.loads(result.stdout)["document"]
        chunks = document["chunks"]
        assert document["metadata"]["totalChunks"] == len(chunks) > 1
        assert [c["index"] for c in chunks] == list(range(len(chunks)))
        assert all(0 < c["characterCount"] <= 300 + 2 for c in chunks)
        assert document["fullText"].startswith("Jane Doe\njane.doe@example.com | +1 555 0100")
        assert "\n\n\n" not in document["fullText"]

        lines = (tmp_path / "traces.jsonl").read_text(encoding="utf-8").splitlines()
        trace = json.loads(lines[-1])
        assert trace["trace_type"] == "processing"
        assert [s["stage"] for s in trace["stages"]] == ["process_document"]
        assert trace["stages"][0]["data"]["total_chunks"] == len(chunks)

    def test_nonexistent_file(self, config_path):
        result = self.run_script("--path", "/nonexistent/resume.txt", "--config", str(config_path))

        assert result.returncode == 2
        assert "does not exist" in result.stdout

    def test_invalid_config(self):
        result = self.run_script("--path", str(SAMPLE_RESUME), "--config", "/nonexistent/config.yaml")

        assert result.returncode == 2
        assert "not found" in result.stdout.lower()

    def test_bad_chunk_size_type_in_config(self, tmp_path):
        with (PROJECT_ROOT / "config" / "settings.yaml").open(encoding="utf-8") as fh:
            settings = yaml.safe_load(fh)
        settings["splitter"]["chunk_size"] = "large"
        settings["observability"]["trace_enabled"] = False
        path = tmp_path / "settings.yaml"
        path.write_text(yaml.safe_dump(settings), encoding="utf-8")

        result = self.run_script("--path", str(SAMPLE_RESUME), "--config", str(path))

        assert result.returncode == 2
        assert "chunk_size must be an int" in result.stdout
