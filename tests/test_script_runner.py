"""Tests for user script staging and execution."""

import os

import pytest

from quickpackage.api.exceptions import CopyError, ScriptError
from quickpackage.core.script_runner import ScriptRunner

from conftest import write_script


@pytest.fixture
def runner():
    return ScriptRunner()


def test_stage_copies_and_makes_executable(tmp_path, runner):
    source = tmp_path / "scripts" / "build.sh"
    source.parent.mkdir()
    source.write_text("#!/bin/sh\nexit 0\n")
    work = tmp_path / "work"
    work.mkdir()

    staged = runner.stage(source, work)

    assert staged == work / "build.sh"
    assert os.access(staged, os.X_OK)


def test_stage_keeps_existing_copy(tmp_path, runner):
    source = write_script(tmp_path / "scripts" / "install.sh", "echo new")
    work = tmp_path / "work"
    existing = write_script(work / "install.sh", "echo old")

    staged = runner.stage(source, work)

    assert staged == existing
    assert "echo old" in staged.read_text()


def test_stage_missing_source(tmp_path, runner):
    (tmp_path / "work").mkdir()
    with pytest.raises(CopyError, match="Script not found"):
        runner.stage(tmp_path / "nope.sh", tmp_path / "work")


def test_stage_missing_work_dir(tmp_path, runner):
    source = write_script(tmp_path / "build.sh", "exit 0")
    with pytest.raises(CopyError, match="does not exist"):
        runner.stage(source, tmp_path / "work")


def test_run_uses_work_dir_as_cwd(tmp_path, runner):
    work = tmp_path / "work"
    script = write_script(work / "build.sh", "pwd > where.txt")

    runner.run(script, work)

    assert (work / "where.txt").read_text().strip() == str(work.resolve())


def test_run_nonzero_exit(tmp_path, runner):
    script = write_script(tmp_path / "fail.sh", "exit 3")

    with pytest.raises(ScriptError) as excinfo:
        runner.run(script, tmp_path)

    assert excinfo.value.exit_code == 3
    assert excinfo.value.error_code == "QP006"


def test_stage_and_run(tmp_path, runner):
    source = write_script(tmp_path / "scripts" / "build.sh", "echo built > artifact")
    work = tmp_path / "work"
    work.mkdir()

    runner.stage_and_run(source, work)

    assert (work / "artifact").read_text().strip() == "built"
