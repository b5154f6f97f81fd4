"""
Tests for the master channel update.
"""

import json
import logging
import os

import pytest
import responses

from baro.core.exceptions import FetchingFailedError
from conftest import INDEX_URL, LAST_MODIFIED, NEWER_LAST_MODIFIED, requires_tar

NEW_MASTER_URL = "https://ziglang.org/builds/zig-linux-x86_64-0.14.0-dev.1.tar.gz"


def install_master(tool_info, version, activate=True):
    version_dir = tool_info.version_dir(version)
    version_dir.mkdir(parents=True)
    (version_dir / "zig").write_text(f"zig {version}")
    os.symlink(version_dir / "zig", tool_info.master_symlink_path)
    if activate:
        tool_info.bin_dir.mkdir(exist_ok=True)
        os.symlink(tool_info.master_symlink_path, tool_info.active_binary_path)
    return version_dir


def snapshot(path):
    return sorted(
        (str(p.relative_to(path)), os.readlink(p) if p.is_symlink() else None)
        for p in path.rglob("*")
    )


def add_remote(sample_index, last_modified=NEWER_LAST_MODIFIED):
    responses.add(
        responses.HEAD, INDEX_URL, status=200, headers={"Last-Modified": last_modified}
    )
    responses.add(responses.GET, INDEX_URL, body=json.dumps(sample_index), status=200)


class TestUpdateGuard:
    """Test update refuses to run off the master channel."""

    @responses.activate
    def test_not_on_master(self, zig, tool_info, caplog):
        """Test a release being active warns and changes nothing."""
        install_master(tool_info, "0.14.0-dev.0", activate=False)
        release = tool_info.version_dir("0.13.0")
        release.mkdir()
        (release / "zig").write_text("zig 0.13.0")
        tool_info.bin_dir.mkdir()
        os.symlink(release / "zig", tool_info.active_binary_path)
        before = snapshot(tool_info.appdata_path)

        with caplog.at_level(logging.WARNING):
            assert zig.update() is False

        assert "Use `baro use master` to switch into the master" in caplog.text
        assert snapshot(tool_info.appdata_path) == before
        assert len(responses.calls) == 0

    def test_nothing_active(self, zig, tool_info):
        tool_info.ensure_data_path()

        assert zig.update() is False


class TestUpdate:
    """Test replacing the master build."""

    @pytest.mark.integration
    @requires_tar
    @responses.activate
    def test_replaces_master(self, zig, tool_info, sample_index, make_archive):
        """Test the old build is removed and the new one linked."""
        tool_info.cache().write("last_modified", LAST_MODIFIED)
        old_dir = install_master(tool_info, "0.14.0-dev.0")
        add_remote(sample_index)
        responses.add(
            responses.GET, NEW_MASTER_URL, body=make_archive("0.14.0-dev.1"), status=200
        )

        assert zig.update() is True

        new_dir = tool_info.version_dir("0.14.0-dev.1")
        assert not old_dir.exists()
        assert os.readlink(tool_info.master_symlink_path) == str(new_dir / "zig")
        # bin/zig still points at the master link, now resolving to the new build
        assert tool_info.active_binary_path.resolve() == (new_dir / "zig").resolve()
        cache = json.loads(tool_info.cache_path.read_text())
        assert cache["zigc_last_modified"] == NEWER_LAST_MODIFIED

    @responses.activate
    def test_already_up_to_date(self, zig, tool_info, sample_index, caplog):
        """Test an installed pinned version is left alone."""
        current = install_master(tool_info, "0.14.0-dev.1")
        add_remote(sample_index)

        with caplog.at_level(logging.INFO):
            assert zig.update() is False

        assert current.exists()
        assert "already up to date" in caplog.text

    @pytest.mark.integration
    @requires_tar
    @responses.activate
    def test_pinned_build_missing_is_reinstalled(
        self, zig, tool_info, sample_index, make_archive
    ):
        """Test a master link to the pinned version without its build reinstalls it."""
        version_dir = install_master(tool_info, "0.14.0-dev.1")
        (version_dir / "zig").unlink()
        version_dir.rmdir()
        add_remote(sample_index)
        responses.add(
            responses.GET, NEW_MASTER_URL, body=make_archive("0.14.0-dev.1"), status=200
        )

        assert zig.update() is True

        assert (version_dir / "zig").exists()
        assert tool_info.active_binary_path.exists()

    @responses.activate
    def test_dangling_master_dir(self, zig, tool_info, sample_index):
        """Test a master link whose directory is gone is still replaced."""
        old_dir = install_master(tool_info, "0.14.0-dev.0")
        (old_dir / "zig").unlink()
        old_dir.rmdir()
        add_remote(sample_index)
        responses.add(responses.GET, NEW_MASTER_URL, status=404)

        with pytest.raises(FetchingFailedError):
            zig.update()

        assert not tool_info.master_symlink_path.is_symlink()
