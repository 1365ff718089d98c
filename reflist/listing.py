"""
Installed ref listing pipeline.

Queries the selected scopes, merges them, annotates the merged refs and
renders the table. Nothing is returned until every store query has
succeeded, so a failure never leaves partial output behind.
"""

from __future__ import annotations

from .annotate import annotate
from .common import Cancellable, check_cancelled, vlog
from .config import ListOptions
from .merge import combine_kinds, merge_scope_sets
from .refs import Kind, Reference, Scope
from .store import StoreAccessor
from .table import TablePrinter


KIND_ORDER = (Kind.APP, Kind.RUNTIME)


def collect_scope(
    accessor: StoreAccessor,
    scope: Scope,
    options: ListOptions,
    cancellable: Cancellable | None = None,
    verbose: bool = False,
) -> list[Reference]:
    """
    Sorted refs of every requested kind in one scope.

    Raises:
        StoreError: If a store query fails
        ListingCancelled: If cancellable was cancelled
    """
    if scope not in options.scopes:
        return []

    per_kind = [
        accessor.list_refs(scope, kind, cancellable)
        for kind in KIND_ORDER
        if kind in options.kinds
    ]
    refs = combine_kinds(*per_kind)
    vlog(f"{scope.value}: {len(refs)} refs", verbose)
    return refs


def list_installed(
    options: ListOptions,
    accessor: StoreAccessor,
    cancellable: Cancellable | None = None,
    verbose: bool = False,
) -> str:
    """
    Render the installed refs table.

    Args:
        options: Kinds, scopes and display mode
        accessor: Installation store access
        cancellable: Optional cancellation token checked before store queries
        verbose: Enable verbose logging

    Returns:
        Rendered table text ('' when nothing is installed)

    Raises:
        StoreError: If a store query fails
        ListingCancelled: If cancellable was cancelled
    """
    user = collect_scope(accessor, Scope.USER, options, cancellable, verbose)
    system = collect_scope(accessor, Scope.SYSTEM, options, cancellable, verbose)
    check_cancelled(cancellable, "read ref details")

    rows = annotate(merge_scope_sets(system, user), accessor, options, cancellable)
    check_cancelled(cancellable, "render table")

    printer = TablePrinter()
    for row in rows:
        row.emit(printer)
    return printer.render()
