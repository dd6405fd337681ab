"""End-to-end tests for the branchprune entry point with a fake registry."""

import json
import logging
from unittest.mock import MagicMock

import pytest

import branchprune
from constants import ExitCodes
from registry.errors import RegistryError
from versioning.models import PackageInfo, PackageVersion

BASE_ARGS = ["--token", "t", "--organization", "my-org", "--repository", "my-repo", "-t", "npm"]


class FakeRegistry:
    """In-memory registry recording delete calls."""

    def __init__(self, packages=None, versions=None, fail_delete=(), fail_list=()):
        self.packages = packages or []
        self.versions = versions or {}
        self.fail_delete = set(fail_delete)
        self.fail_list = set(fail_list)
        self.deleted = []

    def list_packages(self):
        return list(self.packages)

    def list_versions(self, name):
        if name in self.fail_list:
            raise RegistryError("HTTP 500")
        return [PackageVersion(name, label, i) for i, label in enumerate(self.versions.get(name, []))]

    def delete_version(self, version):
        if version.version_label in self.fail_delete:
            raise RegistryError("HTTP 403")
        self.deleted.append((version.package_name, version.version_label))


@pytest.fixture
def run(monkeypatch):
    monkeypatch.setattr(branchprune, "configure_logging", lambda *a, **k: None)

    def _run(argv, registry):
        monkeypatch.setattr(branchprune, "get_client", lambda config: registry)
        with pytest.raises(SystemExit) as excinfo:
            branchprune.main(argv)
        return excinfo.value.code
    return _run


def test_deletes_branch_versions(run):
    registry = FakeRegistry(
        packages=[PackageInfo("pkg", "my-repo")],
        versions={"pkg": ["1.0.0-feature-x.1", "1.0.0-feature-x.2", "1.0.0-main.1", "1.0.0"]},
    )

    code = run(BASE_ARGS + ["-b", "refs/heads/feature/x"], registry)

    assert code == ExitCodes.SUCCESS.value
    assert registry.deleted == [("pkg", "1.0.0-feature-x.1"), ("pkg", "1.0.0-feature-x.2")]


def test_no_packages_for_repository(run, caplog):
    registry = FakeRegistry(packages=[PackageInfo("pkg", "elsewhere")])

    with caplog.at_level(logging.INFO):
        code = run(BASE_ARGS + ["-b", "main"], registry)

    assert code == ExitCodes.SUCCESS.value
    assert registry.deleted == []
    assert "No packages found" in caplog.text


def test_discovery_failure_is_fatal(run):
    registry = FakeRegistry()
    registry.list_packages = MagicMock(side_effect=RegistryError("HTTP 401"))

    assert run(BASE_ARGS + ["-b", "main"], registry) == ExitCodes.CONNECTION_ERROR.value


def test_unwritable_log_file_exits_with_file_error(run, monkeypatch, capsys):
    def fail(*args, **kwargs):
        raise PermissionError(13, "Permission denied")

    monkeypatch.setattr(branchprune, "configure_logging", fail)

    code = run(BASE_ARGS + ["-b", "main", "--logfile", "/nope/run.log"], FakeRegistry())

    assert code == ExitCodes.FILE_ERROR.value
    assert "/nope/run.log" in capsys.readouterr().err


def test_empty_branch_is_rejected(run):
    registry = FakeRegistry(packages=[PackageInfo("pkg", "my-repo")], versions={"pkg": ["1.0.0-.1"]})

    assert run(BASE_ARGS + ["-b", "  "], registry) == ExitCodes.CONFIG_ERROR.value
    assert registry.deleted == []


def test_partial_failures_complete_the_run(run):
    registry = FakeRegistry(
        versions={"pkg-a": ["1.0.0-dev.1", "1.0.0-dev.2", "1.0.0-dev.3"], "pkg-b": ["1.0.0-dev.1"]},
        fail_delete={"1.0.0-dev.2"},
        fail_list={"pkg-b"},
    )
    argv = BASE_ARGS + ["-b", "dev", "-p", "pkg-a,pkg-b"]

    assert run(argv, registry) == ExitCodes.SUCCESS.value
    assert registry.deleted == [("pkg-a", "1.0.0-dev.1"), ("pkg-a", "1.0.0-dev.3")]

    registry.deleted = []
    assert run(argv + ["--error-on-warnings"], registry) == ExitCodes.EXIT_WARNINGS.value


def test_dry_run_writes_report(run, tmp_path):
    registry = FakeRegistry(versions={"pkg": ["1.0.0-dev.1", "1.0.0-main.1"]})
    out = tmp_path / "report.json"

    code = run(BASE_ARGS + ["-b", "dev", "-p", "pkg", "--dry-run", "-o", str(out)], registry)

    assert code == ExitCodes.SUCCESS.value
    assert registry.deleted == []
    report = json.loads(out.read_text(encoding="utf-8"))
    assert report["pattern"] == "-dev."
    assert report["dryRun"] is True
    assert report["selected"] == [{"packageName": "pkg", "version": "1.0.0-dev.1", "id": 0}]
    assert report["deletions"][0]["status"] == "planned"
    assert report["totals"]["planned"] == 1
    assert report["totals"]["versionsSeen"] == 2


def test_run_cleanup_returns_report(make_config):
    registry = FakeRegistry(versions={"pkg-a": ["1.0.0-x.1"], "pkg-b": []})
    config = make_config(branch_name="x", package_names=("pkg-a", "pkg-b"))

    report = branchprune.run_cleanup(config, registry)

    assert report.packages == ["pkg-a", "pkg-b"]
    assert [v.version_label for v in report.retained] == ["1.0.0-x.1"]
    assert report.has_failures() is False
    assert registry.deleted == [("pkg-a", "1.0.0-x.1")]
