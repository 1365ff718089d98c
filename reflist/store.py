"""
Installation store access.

An installation directory holds one deployment per reference:

    <base>/repo/                                object repository
    <base>/<kind>/<name>/<arch>/<branch>/active symlink to the active commit
    <base>/<kind>/<name>/<arch>/<branch>/origin remote the ref came from
    <base>/app/<name>/current                   symlink to <arch>/<branch>
    <base>/repo/refs/remotes/<origin>/<ref>     latest known commit

Listing failures are fatal (StoreError). Every metadata lookup is best
effort and returns None when the value is missing or unreadable.
"""

from __future__ import annotations

import os
from typing import Protocol

from .common import Cancellable, check_cancelled, vlog
from .config import Config
from .errors import InvalidReferenceError, StoreError
from .refs import Kind, Reference, Scope


class StoreAccessor(Protocol):
    """Queries the core pipeline needs from the installation stores."""

    def list_refs(
        self, scope: Scope, kind: Kind, cancellable: Cancellable | None = None
    ) -> list[Reference]: ...

    def origin_of(self, scope: Scope, ref: Reference) -> str | None: ...

    def active_commit_of(self, scope: Scope, ref: Reference) -> str | None: ...

    def latest_commit_of(self, scope: Scope, ref: Reference) -> str | None: ...

    def current_app_ref(self, scope: Scope, name: str) -> Reference | None: ...


def _read_text(path: str) -> str | None:
    try:
        with open(path, "r", encoding="utf-8") as f:
            value = f.read().strip()
    except (OSError, UnicodeDecodeError):
        return None
    return value or None


def _read_link(path: str) -> str | None:
    try:
        return os.readlink(path)
    except OSError:
        return None


def _subdirs(path: str) -> list[str]:
    """Names of real subdirectories of path (symlinks such as 'current' skipped)."""
    with os.scandir(path) as entries:
        return [
            entry.name
            for entry in entries
            if entry.is_dir(follow_symlinks=False)
        ]


class InstallationDir:
    """
    One installation directory (a user or system store).

    Attributes:
        path: Base directory of the installation
        user: Whether this is the per-user installation
    """

    def __init__(self, path: str, user: bool, verbose: bool = False):
        self.path = path
        self.user = user
        self.verbose = verbose

    def __repr__(self) -> str:
        return f"InstallationDir(path={self.path!r}, user={self.user})"

    @property
    def repo_path(self) -> str:
        return os.path.join(self.path, "repo")

    def deploy_base(self, ref: Reference) -> str:
        return os.path.join(self.path, ref.kind.value, ref.name, ref.arch, ref.branch)

    def is_initialized(self) -> bool:
        """Whether the store has an object repository."""
        return os.path.isdir(self.repo_path)

    def list_refs(self, kind: Kind, cancellable: Cancellable | None = None) -> list[Reference]:
        """
        List deployed references of one kind, sorted.

        Raises:
            StoreError: On any I/O error other than a missing kind directory
            ListingCancelled: If cancellable was cancelled
        """
        operation = f"list {kind.value} refs"
        check_cancelled(cancellable, operation)

        kind_dir = os.path.join(self.path, kind.value)
        refs: list[Reference] = []
        try:
            for name in _subdirs(kind_dir):
                check_cancelled(cancellable, operation)
                name_dir = os.path.join(kind_dir, name)
                for arch in _subdirs(name_dir):
                    arch_dir = os.path.join(name_dir, arch)
                    for branch in _subdirs(arch_dir):
                        refs.append(Reference(kind=kind, name=name, arch=arch, branch=branch))
        except FileNotFoundError as e:
            if e.filename != kind_dir:
                raise StoreError(operation, self.path, e) from e
            vlog(f"No {kind.value} directory in {self.path}", self.verbose)
            return []
        except OSError as e:
            raise StoreError(operation, self.path, e) from e

        refs.sort()
        vlog(f"Found {len(refs)} {kind.value} refs in {self.path}", self.verbose)
        return refs

    def get_origin(self, ref: Reference) -> str | None:
        return _read_text(os.path.join(self.deploy_base(ref), "origin"))

    def read_active(self, ref: Reference) -> str | None:
        target = _read_link(os.path.join(self.deploy_base(ref), "active"))
        if target is None:
            return None
        return os.path.basename(target.rstrip("/")) or None

    def read_latest(self, remote: str | None, ref: Reference) -> str | None:
        """Latest commit known for ref on remote (or in local heads)."""
        refs_dir = os.path.join(self.repo_path, "refs")
        if remote:
            path = os.path.join(refs_dir, "remotes", remote, str(ref))
        else:
            path = os.path.join(refs_dir, "heads", str(ref))
        return _read_text(path)

    def current_ref(self, name: str) -> Reference | None:
        """The app ref the 'current' link of name points to."""
        target = _read_link(os.path.join(self.path, Kind.APP.value, name, "current"))
        if target is None:
            return None
        try:
            return Reference.parse(f"{Kind.APP.value}/{name}/{target.strip('/')}")
        except InvalidReferenceError as e:
            vlog(f"Ignoring bad current link for {name}: {e}", self.verbose)
            return None


class InstallationStores:
    """
    StoreAccessor over the user and system installation directories.

    Args:
        user_dir: Per-user installation directory
        system_dir: System-wide installation directory
        verbose: Enable verbose logging
    """

    def __init__(self, user_dir: str, system_dir: str, verbose: bool = False):
        self.dirs = {
            Scope.USER: InstallationDir(user_dir, user=True, verbose=verbose),
            Scope.SYSTEM: InstallationDir(system_dir, user=False, verbose=verbose),
        }
        self.verbose = verbose

    @classmethod
    def from_config(cls, config: Config, verbose: bool = False) -> InstallationStores:
        return cls(
            user_dir=config.installation_dir(Scope.USER),
            system_dir=config.installation_dir(Scope.SYSTEM),
            verbose=verbose,
        )

    def get_dir(self, scope: Scope) -> InstallationDir:
        return self.dirs[scope]

    def list_refs(
        self, scope: Scope, kind: Kind, cancellable: Cancellable | None = None
    ) -> list[Reference]:
        """List refs of kind in scope; an uninitialized store lists nothing."""
        inst = self.dirs[scope]
        check_cancelled(cancellable, f"open {scope.value} installation")
        if not inst.is_initialized():
            vlog(f"{scope.value} installation at {inst.path} not initialized", self.verbose)
            return []
        return inst.list_refs(kind, cancellable)

    def origin_of(self, scope: Scope, ref: Reference) -> str | None:
        return self.dirs[scope].get_origin(ref)

    def active_commit_of(self, scope: Scope, ref: Reference) -> str | None:
        return self.dirs[scope].read_active(ref)

    def latest_commit_of(self, scope: Scope, ref: Reference) -> str | None:
        inst = self.dirs[scope]
        return inst.read_latest(inst.get_origin(ref), ref)

    def current_app_ref(self, scope: Scope, name: str) -> Reference | None:
        return self.dirs[scope].current_ref(name)
