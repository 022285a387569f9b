"""Tests for staging directory management."""

import logging
import os

from quickpackage.core.staging import StagingArea


def test_create_uses_app_prefix(tmp_path):
    staging = StagingArea(tmp_path / "tmp")
    path = staging.create("demo")

    assert path.is_dir()
    assert path.parent == tmp_path / "tmp"
    assert path.name.startswith("quickpackage-demo-")


def test_create_is_unique(tmp_path):
    staging = StagingArea(tmp_path)
    assert staging.create("demo") != staging.create("demo")


def test_discover_nothing(tmp_path):
    assert StagingArea(tmp_path / "missing").discover("demo") is None


def test_discover_prefers_newest(tmp_path, caplog):
    staging = StagingArea(tmp_path)
    old = staging.create("demo")
    new = staging.create("demo")
    os.utime(old, (1_000_000, 1_000_000))
    os.utime(new, (2_000_000, 2_000_000))

    with caplog.at_level(logging.WARNING):
        assert staging.discover("demo") == new
    assert "Found 2 staging directories" in caplog.text


def test_cleanup_only_touches_this_app(tmp_path):
    staging = StagingArea(tmp_path)
    mine = [staging.create("demo"), staging.create("demo")]
    other = staging.create("demo2")

    removed = staging.cleanup("demo")

    assert sorted(removed) == sorted(mine)
    assert not any(p.exists() for p in mine)
    assert other.exists()
    assert staging.find_all("demo") == []
