"""
Tests for removing installed versions.
"""

import os

import pytest

from baro.core.exceptions import NotInstalledError
from baro.tool.cleanup import Cleaner


def install_fake(tool_info, version):
    version_dir = tool_info.version_dir(version)
    (version_dir / "lib").mkdir(parents=True)
    (version_dir / "zig").write_text("bin")
    (version_dir / "lib" / "std.zig").write_text("src")
    return version_dir


class TestClean:
    """Test Cleaner.clean."""

    def test_removes_release(self, tool_info):
        version_dir = install_fake(tool_info, "0.13.0")
        other = install_fake(tool_info, "0.12.0")

        Cleaner(tool_info).clean("0.13.0", version_dir)

        assert not version_dir.exists()
        assert other.exists()

    def test_master_removes_link(self, tool_info):
        """Test cleaning master also removes the master link."""
        version_dir = install_fake(tool_info, "0.14.0-dev.1")
        os.symlink(version_dir / "zig", tool_info.master_symlink_path)

        Cleaner(tool_info).clean("master", version_dir)

        assert not version_dir.exists()
        assert not tool_info.master_symlink_path.is_symlink()

    def test_active_link_left_dangling(self, tool_info):
        """Test cleaning the active version leaves bin/zig dangling."""
        version_dir = install_fake(tool_info, "0.13.0")
        tool_info.bin_dir.mkdir()
        os.symlink(version_dir / "zig", tool_info.active_binary_path)

        Cleaner(tool_info).clean("0.13.0", version_dir)

        assert tool_info.active_binary_path.is_symlink()
        assert not tool_info.active_binary_path.exists()

    def test_not_installed(self, tool_info):
        with pytest.raises(NotInstalledError):
            Cleaner(tool_info).clean("0.13.0", tool_info.version_dir("0.13.0"))

    def test_refuses_outside_data_dir(self, tool_info, tmp_path):
        """Test directories outside the tool data directory are refused."""
        tool_info.ensure_data_path()
        outside = tmp_path / "elsewhere"
        outside.mkdir()

        with pytest.raises(ValueError):
            Cleaner(tool_info).clean("0.13.0", outside)
        assert outside.exists()
