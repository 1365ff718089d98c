"""
Row annotation for installed refs.

Compact rows carry just the name. Detailed rows carry the partial ref,
origin, active and latest commits, and an options column that collects
tags such as the scope, "current" and "runtime".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable

from .common import Cancellable, check_cancelled
from .config import DEFAULT_COMMIT_LENGTH, ListOptions
from .merge import unique_names
from .refs import Kind, Reference, Scope
from .store import StoreAccessor
from .table import TablePrinter


LATEST_UNKNOWN = "?"
LATEST_IS_ACTIVE = "-"

TAG_CURRENT = "current"
TAG_RUNTIME = "runtime"


@dataclass
class Row:
    """
    One output line: plain columns plus tags comma-joined into the last column.

    Attributes:
        columns: Column texts in display order
        tags: Tags appended to the last column
    """
    columns: list[str]
    tags: list[str] = field(default_factory=list)

    def emit(self, printer: TablePrinter) -> None:
        for column in self.columns:
            printer.add_column(column)
        for tag in self.tags:
            printer.append_with_comma(tag)
        printer.finish_row()


def truncate_commit(commit: str | None, length: int = DEFAULT_COMMIT_LENGTH) -> str:
    """Shorten a commit id for display; missing commits display as ''."""
    return (commit or "")[:length]


def format_latest(
    active: str | None,
    latest: str | None,
    length: int = DEFAULT_COMMIT_LENGTH,
) -> str:
    """
    Latest column text.

    Returns:
        "?" if no latest commit is known, "-" if it equals the active commit,
        otherwise the truncated latest commit
    """
    if not latest:
        return LATEST_UNKNOWN
    if latest == (active or ""):
        return LATEST_IS_ACTIVE
    return truncate_commit(latest, length)


def compact_rows(merged: Iterable[tuple[Reference, Scope]]) -> list[Row]:
    """One name-only row per distinct name."""
    return [Row(columns=[name]) for name in unique_names(merged)]


def row_tags(
    ref: Reference,
    scope: Scope,
    accessor: StoreAccessor,
    options: ListOptions,
) -> list[str]:
    tags = []
    if options.both_scopes:
        tags.append(scope.value)

    if ref.kind is Kind.APP:
        current = accessor.current_app_ref(scope, ref.name)
        if current is not None and current == ref:
            tags.append(TAG_CURRENT)
    elif options.include_apps:
        tags.append(TAG_RUNTIME)
    return tags


def detail_row(
    ref: Reference,
    scope: Scope,
    accessor: StoreAccessor,
    options: ListOptions,
    cancellable: Cancellable | None = None,
) -> Row:
    """
    Detailed row for one merged ref.

    Missing origin, active, latest or current values degrade to placeholder
    text; none of these lookups can fail the row.
    """
    check_cancelled(cancellable, f"read details of {ref}")
    origin = accessor.origin_of(scope, ref)
    active = accessor.active_commit_of(scope, ref)
    latest = accessor.latest_commit_of(scope, ref)

    columns = [
        ref.partial,
        origin or "",
        truncate_commit(active, options.commit_length),
        format_latest(active, latest, options.commit_length),
        "",  # Options
    ]
    return Row(columns=columns, tags=row_tags(ref, scope, accessor, options))


def annotate(
    merged: Iterable[tuple[Reference, Scope]],
    accessor: StoreAccessor,
    options: ListOptions,
    cancellable: Cancellable | None = None,
) -> list[Row]:
    """Rows for the merged refs in the mode options select."""
    if not options.show_details:
        return compact_rows(merged)
    return [
        detail_row(ref, scope, accessor, options, cancellable)
        for ref, scope in merged
    ]
