"""
Pytest configuration and shared fixtures for baro tests.
"""

import io
import json
import shutil
import tarfile
from pathlib import Path
from typing import Callable, Dict

import pytest

from baro.tool.info import ToolInfo
from baro.tool.zig import ZigCompiler

INDEX_URL = "https://ziglang.org/download/index.json"
PLATFORM_KEY = "x86_64-linux"
LAST_MODIFIED = "Tue, 08 Oct 2024 12:00:00 GMT"
NEWER_LAST_MODIFIED = "Wed, 09 Oct 2024 12:00:00 GMT"

requires_tar = pytest.mark.skipif(
    shutil.which("tar") is None, reason="`tar` executable not available"
)


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture
def sample_index() -> Dict:
    """Index document with one release and a master channel."""
    return {
        "master": {
            "version": "0.14.0-dev.1",
            "date": "2024-10-08",
            "x86_64-linux": {
                "tarball": "https://ziglang.org/builds/zig-linux-x86_64-0.14.0-dev.1.tar.gz",
                "shasum": "aa",
                "size": "1",
            },
        },
        "0.13.0": {
            "date": "2024-06-07",
            "x86_64-linux": {
                "tarball": "https://ziglang.org/download/0.13.0/zig-linux-x86_64-0.13.0.tar.gz",
                "shasum": "bb",
                "size": "1",
            },
            "aarch64-macos": {
                "tarball": "https://ziglang.org/download/0.13.0/zig-macos-aarch64-0.13.0.tar.xz",
            },
        },
        "0.12.0": {
            "aarch64-macos": {
                "tarball": "https://ziglang.org/download/0.12.0/zig-macos-aarch64-0.12.0.tar.xz",
            },
        },
    }


@pytest.fixture
def tool_info(tmp_path: Path) -> ToolInfo:
    """ToolInfo rooted in a temporary directory."""
    appdata = tmp_path / "appdata"
    appdata.mkdir()
    return ToolInfo(
        prefix="zigc",
        appdata_path=appdata,
        cache_path=tmp_path / "cache" / "cache.json",
        binary_name="zig",
    )


@pytest.fixture
def index_file(tool_info: ToolInfo, sample_index: Dict) -> Path:
    """Write ``sample_index`` as the cached index document."""
    tool_info.ensure_data_path()
    tool_info.index_file_path.write_text(json.dumps(sample_index))
    return tool_info.index_file_path


@pytest.fixture
def make_archive() -> Callable[..., bytes]:
    """
    Factory building a .tar.gz release archive in memory.

    The archive has a single top-level wrapper directory, like upstream
    releases do.
    """

    def _make(version: str, binary: bytes = b"#!/bin/sh\necho zig\n") -> bytes:
        wrapper = f"zig-linux-x86_64-{version}"
        files = {
            f"{wrapper}/zig": binary,
            f"{wrapper}/lib/std/std.zig": b"pub const version = \"" + version.encode() + b"\";\n",
        }
        buf = io.BytesIO()
        with tarfile.open(fileobj=buf, mode="w:gz") as tar:
            for name, data in files.items():
                member = tarfile.TarInfo(name)
                member.size = len(data)
                member.mode = 0o755
                tar.addfile(member, io.BytesIO(data))
        return buf.getvalue()

    return _make


@pytest.fixture
def zig(tool_info: ToolInfo) -> ZigCompiler:
    """ZigCompiler manager on ``tool_info`` pinned to the x86_64-linux platform."""
    manager = ZigCompiler(tool_info, index_url=INDEX_URL)
    manager.resolver._platform_key = lambda: PLATFORM_KEY
    return manager


@pytest.fixture
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    """Point HOME and the XDG roots at a temporary directory."""
    fake_home = tmp_path / "home"
    fake_home.mkdir()

    monkeypatch.setenv("HOME", str(fake_home))
    for var in ("XDG_DATA_HOME", "XDG_CACHE_HOME", "XDG_CONFIG_HOME"):
        monkeypatch.delenv(var, raising=False)

    return fake_home
