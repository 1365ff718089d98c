"""
Reference value type and the Kind/Scope enumerations.

A reference names one installed item as ``kind/name/arch/branch``. It is
parsed once when read from a store and handled as a value afterwards.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import Enum

from .errors import InvalidReferenceError


class Kind(str, Enum):
    """Installable item kind (first reference component)."""
    APP = "app"
    RUNTIME = "runtime"

    def __str__(self) -> str:
        return self.value


class Scope(str, Enum):
    """Installation scope: per-user or system-wide store."""
    USER = "user"
    SYSTEM = "system"

    def __str__(self) -> str:
        return self.value


@functools.total_ordering
@dataclass(frozen=True)
class Reference:
    """
    One installed reference.

    Ordering follows the full ``kind/name/arch/branch`` string. Python compares
    str by code point, which matches byte-wise comparison of the UTF-8 form,
    so this is not the same as comparing the component tuple: ``org.foo.bar``
    sorts before ``org.foo`` because ``.`` < ``/``.

    Attributes:
        kind: app or runtime
        name: Application or runtime id (e.g. "org.gnome.Builder")
        arch: Architecture (e.g. "x86_64")
        branch: Branch (e.g. "stable")
    """
    kind: Kind
    name: str
    arch: str
    branch: str

    @classmethod
    def parse(cls, ref: str) -> Reference:
        """Parse a ``kind/name/arch/branch`` string.

        Raises:
            InvalidReferenceError: If ref does not have exactly four non-empty
                parts or the kind is unknown
        """
        parts = ref.split("/")
        if len(parts) != 4:
            raise InvalidReferenceError(ref, f"expected 4 parts, got {len(parts)}")
        if not all(parts):
            raise InvalidReferenceError(ref, "empty component")
        try:
            kind = Kind(parts[0])
        except ValueError:
            raise InvalidReferenceError(ref, f"unknown kind '{parts[0]}'") from None
        return cls(kind=kind, name=parts[1], arch=parts[2], branch=parts[3])

    @property
    def partial(self) -> str:
        """Reference without the leading ``kind/`` component."""
        return f"{self.name}/{self.arch}/{self.branch}"

    def same_name(self, other: Reference) -> bool:
        return self.name == other.name

    def __str__(self) -> str:
        return f"{self.kind.value}/{self.partial}"

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Reference):
            return NotImplemented
        return str(self) < str(other)
