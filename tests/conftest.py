"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from collections.abc import Iterator
from pathlib import Path

import pytest
from lsi.walker.platform import Ownership, PosixMetadataProvider


@pytest.fixture(autouse=True)
def isolated_config(
    tmp_path_factory: pytest.TempPathFactory,
    monkeypatch: pytest.MonkeyPatch,
) -> Path:
    """Point XDG_CONFIG_HOME at an empty directory for every test."""
    config_home = tmp_path_factory.mktemp("xdg-config")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home


@pytest.fixture
def chdir_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Run the test with tmp_path as the working directory."""
    monkeypatch.chdir(tmp_path)
    yield tmp_path


@pytest.fixture
def link_tree(tmp_path: Path) -> Path:
    """Create a small tree with relative and absolute symlinks.

    Layout::

        a/
            link -> ../b/target      (relative)
            abs -> <tmp>/b/target    (absolute)
            broken -> missing
        b/
            target                   (regular file, 6 bytes)
    """
    (tmp_path / "a").mkdir()
    (tmp_path / "b").mkdir()
    (tmp_path / "b" / "target").write_text("target")
    (tmp_path / "a" / "link").symlink_to(Path("..") / "b" / "target")
    (tmp_path / "a" / "abs").symlink_to(tmp_path / "b" / "target")
    (tmp_path / "a" / "broken").symlink_to("missing")
    return tmp_path


class StaticOwnerProvider(PosixMetadataProvider):
    """POSIX provider with fixed owner names, independent of passwd/group."""

    def owner_info(self, st: os.stat_result) -> Ownership:
        return Ownership(uid=st.st_uid, user="alice", gid=st.st_gid, group="staff")


@pytest.fixture
def provider() -> PosixMetadataProvider:
    """Metadata provider that never depends on the host user database."""
    return StaticOwnerProvider()


@pytest.fixture
def static_owners(monkeypatch: pytest.MonkeyPatch, provider: PosixMetadataProvider) -> None:
    """Make the walker's default provider the static-owner provider."""
    monkeypatch.setattr("lsi.walker.walker.get_metadata_provider", lambda: provider)
