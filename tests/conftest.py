"""
Shared fixtures: on-disk installation builders and an in-memory accessor.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from reflist.refs import Kind, Reference, Scope


class InstallationBuilder:
    """Creates the directory layout of one installation under a base path."""

    def __init__(self, base: Path):
        self.base = base

    def init_repo(self) -> InstallationBuilder:
        (self.base / "repo" / "refs" / "remotes").mkdir(parents=True, exist_ok=True)
        return self

    def deploy(
        self,
        ref: str,
        active: str | None = None,
        origin: str | None = None,
        latest: str | None = None,
    ) -> Path:
        parsed = Reference.parse(ref)
        deploy_base = self.base / parsed.kind.value / parsed.name / parsed.arch / parsed.branch
        deploy_base.mkdir(parents=True, exist_ok=True)
        if active:
            (deploy_base / active).mkdir(exist_ok=True)
            os.symlink(active, deploy_base / "active")
        if origin:
            (deploy_base / "origin").write_text(origin + "\n", encoding="utf-8")
            if latest:
                latest_file = self.base / "repo" / "refs" / "remotes" / origin / ref
                latest_file.parent.mkdir(parents=True, exist_ok=True)
                latest_file.write_text(latest + "\n", encoding="utf-8")
        return deploy_base

    def make_current(self, name: str, arch: str, branch: str) -> None:
        os.symlink(f"{arch}/{branch}", self.base / "app" / name / "current")


@pytest.fixture
def user_install(tmp_path):
    return InstallationBuilder(tmp_path / "user").init_repo()


@pytest.fixture
def system_install(tmp_path):
    return InstallationBuilder(tmp_path / "system").init_repo()


class FakeAccessor:
    """
    In-memory StoreAccessor.

    refs maps scope -> list of ref strings; metadata dicts map
    (scope, ref string) -> value.
    """

    def __init__(self, refs=None, origins=None, active=None, latest=None, current=None):
        self.refs = refs or {}
        self.origins = origins or {}
        self.active = active or {}
        self.latest = latest or {}
        self.current = current or {}
        self.queries: list[tuple[Scope, Kind]] = []

    def list_refs(self, scope, kind, cancellable=None):
        self.queries.append((scope, kind))
        if cancellable is not None:
            cancellable.raise_if_cancelled(f"list {kind.value} refs")
        return sorted(
            Reference.parse(r)
            for r in self.refs.get(scope, [])
            if r.startswith(kind.value + "/")
        )

    def origin_of(self, scope, ref):
        return self.origins.get((scope, str(ref)))

    def active_commit_of(self, scope, ref):
        return self.active.get((scope, str(ref)))

    def latest_commit_of(self, scope, ref):
        return self.latest.get((scope, str(ref)))

    def current_app_ref(self, scope, name):
        ref = self.current.get((scope, name))
        return Reference.parse(ref) if ref else None


@pytest.fixture
def fake_accessor():
    return FakeAccessor
