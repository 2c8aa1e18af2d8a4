"""Tests for the scangate CLI"""

import glob
import json
import os
import shutil
import tempfile
import uuid

import pytest
from click.testing import CliRunner

from conftest import build_tar
from scangate.cli.main import cli

REPORT = [
    {"vulnerability": "CVE-2021-1", "severity": "Critical", "featurename": "openssl"},
    {"vulnerability": "CVE-2021-2", "severity": "High", "featurename": "zlib"},
    {"vulnerability": "CVE-2021-3", "severity": "Low", "featurename": "bash"},
]


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def report_file(tmp_path):
    path = tmp_path / "report.json"
    path.write_text(json.dumps(REPORT))
    return str(path)


@pytest.fixture
def whitelist_file(tmp_path):
    path = tmp_path / "whitelist.yaml"
    path.write_text("generalwhitelist:\n  CVE-2021-1: accepted risk\n")
    return str(path)


class TestCheckCommand:

    def test_unapproved_vulnerabilities_fail(self, runner, report_file, whitelist_file):
        result = runner.invoke(cli, [
            "check", report_file, "--image", "app:1", "--threshold", "High", "--whitelist", whitelist_file,
        ])

        assert result.exit_code == 1
        assert "[CVE-2021-2]" in result.output
        assert "[CVE-2021-1]" not in result.output
        assert "[CVE-2021-3]" not in result.output
        assert "1 unapproved vulnerabilities" in result.output

    def test_clean_report_passes(self, runner, report_file):
        result = runner.invoke(cli, ["check", report_file, "--image", "app:1", "--threshold", "Critical",
                                     "--whitelist", self._whitelist_all(report_file)])

        assert result.exit_code == 0
        assert "NO unapproved vulnerabilities" in result.output

    def test_json_output_file(self, runner, tmp_path, report_file, whitelist_file):
        output = tmp_path / "out.json"
        result = runner.invoke(cli, [
            "check", report_file, "-i", "app:1", "-t", "Negligible", "-w", whitelist_file,
            "--format", "json", "--output", str(output),
        ])

        assert result.exit_code == 1
        data = json.loads(output.read_text())
        assert data["image"] == "app:1"
        assert data["unapproved"] == ["CVE-2021-2", "CVE-2021-3"]
        assert [v["vulnerability"] for v in data["vulnerabilities"]] == ["CVE-2021-2", "CVE-2021-3"]

    def test_report_all_csv(self, runner, report_file, whitelist_file):
        result = runner.invoke(cli, [
            "check", report_file, "-i", "app:1", "-t", "High", "-w", whitelist_file,
            "--format", "csv", "--report-all",
        ])

        assert result.exit_code == 1
        assert "app:1,CVE-2021-1,Critical,openssl,,,,,True," in result.output
        assert "app:1,CVE-2021-2,High,zlib,,,,,False," in result.output

    def test_invalid_threshold_is_fatal(self, runner, report_file):
        result = runner.invoke(cli, ["check", report_file, "--image", "app:1", "--threshold", "high"])

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert "high" in result.output

    def test_threshold_from_environment(self, runner, report_file):
        result = runner.invoke(cli, ["check", report_file, "--image", "app:1"],
                               env={"SCANGATE_THRESHOLD": "Severe"})

        assert result.exit_code == 1
        assert "Severe" in result.output

    def test_unreadable_whitelist_is_fatal(self, runner, tmp_path, report_file):
        result = runner.invoke(cli, [
            "check", report_file, "--image", "app:1", "--whitelist", str(tmp_path / "missing.yaml"),
        ])

        assert result.exit_code == 1
        assert "could not read file" in result.output

    def test_unknown_severity_in_report_is_fatal(self, runner, tmp_path):
        path = tmp_path / "report.json"
        path.write_text(json.dumps([{"vulnerability": "CVE-1", "severity": "Important"}]))

        result = runner.invoke(cli, ["check", str(path), "--image", "app:1"])

        assert result.exit_code == 1
        assert "Invalid vulnerability report" in result.output

    @staticmethod
    def _whitelist_all(report_file):
        path = os.path.join(os.path.dirname(report_file), "all.yaml")
        with open(path, "w") as f:
            f.write("generalwhitelist:\n")
            for vuln in REPORT:
                f.write(f"  {vuln['vulnerability']}: ok\n")
        return path


class TestExtractCommand:

    def test_extract(self, runner, tmp_path):
        archive = tmp_path / "image.tar"
        archive.write_bytes(build_tar([("layer", None, 0o755), ("layer/layer.tar", b"data", 0o644)]).getvalue())
        destination = tmp_path / "out"

        result = runner.invoke(cli, ["extract", str(archive), str(destination)])

        assert result.exit_code == 0
        assert (destination / "layer" / "layer.tar").read_bytes() == b"data"

    def test_extract_from_stdin(self, runner, tmp_path):
        data = build_tar([("manifest.json", b"[]", 0o644)]).getvalue()
        destination = tmp_path / "out"

        result = runner.invoke(cli, ["extract", "-", str(destination)], input=data)

        assert result.exit_code == 0
        assert (destination / "manifest.json").exists()

    def test_traversal_names_entry(self, runner, tmp_path):
        archive = tmp_path / "evil.tar"
        archive.write_bytes(build_tar([("../../etc/passwd", b"root::0:0::/:/bin/sh\n", 0o644)]).getvalue())

        result = runner.invoke(cli, ["extract", str(archive), str(tmp_path / "out")])

        assert result.exit_code == 1
        assert "../../etc/passwd" in result.output
        assert "illegal file path" in result.output

    def test_malformed_archive(self, runner, tmp_path):
        archive = tmp_path / "broken.tar"
        archive.write_bytes(b"garbage" * 200)

        result = runner.invoke(cli, ["extract", str(archive), str(tmp_path / "out")])

        assert result.exit_code == 1
        assert "Could not extract" in result.output


class TestScanCommand:

    @pytest.fixture
    def prefix(self):
        prefix = f"scangate-test-{uuid.uuid4().hex[:8]}-"
        yield prefix
        for path in glob.glob(os.path.join(tempfile.gettempdir(), prefix + "*")):
            shutil.rmtree(path, ignore_errors=True)

    def _scratch_dirs(self, prefix):
        return glob.glob(os.path.join(tempfile.gettempdir(), prefix + "*"))

    def test_scan_extracts_gates_and_cleans_up(self, runner, tmp_path, report_file, whitelist_file, prefix):
        archive = tmp_path / "image.tar"
        archive.write_bytes(build_tar([("manifest.json", b"[]", 0o644)]).getvalue())

        result = runner.invoke(cli, [
            "scan", str(archive), report_file, "--image", "app:1", "-t", "High", "-w", whitelist_file,
        ], env={"SCANGATE_TMP_PREFIX": prefix})

        assert result.exit_code == 1
        assert "Extracted 1 entries" in result.output
        assert "[CVE-2021-2]" in result.output
        assert self._scratch_dirs(prefix) == []

    def test_scan_keep_layers(self, runner, tmp_path, report_file, prefix):
        archive = tmp_path / "image.tar"
        archive.write_bytes(build_tar([("manifest.json", b"[]", 0o644)]).getvalue())

        result = runner.invoke(cli, [
            "scan", str(archive), report_file, "--image", "app:1", "-t", "Critical", "--keep-layers",
        ], env={"SCANGATE_TMP_PREFIX": prefix})

        assert result.exit_code == 1
        kept = self._scratch_dirs(prefix)
        assert len(kept) == 1
        assert os.path.exists(os.path.join(kept[0], "manifest.json"))

    def test_scan_rejects_traversal(self, runner, tmp_path, report_file, prefix):
        archive = tmp_path / "evil.tar"
        archive.write_bytes(build_tar([("/etc/cron.d/job", b"* * * * * root sh\n", 0o644)]).getvalue())

        result = runner.invoke(cli, [
            "scan", str(archive), report_file, "--image", "app:1",
        ], env={"SCANGATE_TMP_PREFIX": prefix})

        assert result.exit_code == 1
        assert "/etc/cron.d/job" in result.output
        assert self._scratch_dirs(prefix) == []

    def test_scan_invalid_threshold_before_extraction(self, runner, tmp_path, report_file, prefix):
        result = runner.invoke(cli, [
            "scan", str(tmp_path / "missing.tar"), report_file, "--image", "app:1", "-t", "Bad",
        ], env={"SCANGATE_TMP_PREFIX": prefix})

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert self._scratch_dirs(prefix) == []


class TestInfoCommands:

    def test_config_validate(self, runner, tmp_path):
        result = runner.invoke(cli, ["config", "--validate"], env={"SCANGATE_THRESHOLD": "High"})

        assert result.exit_code == 0
        assert "Severity Threshold: High" in result.output
        assert "Configuration looks good!" in result.output

    def test_config_validate_reports_issues(self, runner):
        result = runner.invoke(cli, ["config", "--validate"], env={"SCANGATE_THRESHOLD": "severe"})

        assert result.exit_code == 1
        assert "Invalid severity threshold" in result.output

    def test_malformed_environment_is_fatal(self, runner):
        result = runner.invoke(cli, ["config", "--validate"], env={"SCANGATE_REPORT_TIMEOUT": "thirty"})

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        assert "SCANGATE_REPORT_TIMEOUT" in result.output
        assert not isinstance(result.exception, ValueError)

    def test_version(self, runner):
        result = runner.invoke(cli, ["version"])

        assert result.exit_code == 0
        assert "scangate Version: 1.0.0" in result.output
