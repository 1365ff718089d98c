"""
Merging of per-scope reference lists.

Each scope contributes a sorted list of references. The lists are merged in
one pass into a single ordered sequence tagged with the originating scope.
References present in both scopes are kept twice, system copy first.
"""

from __future__ import annotations

import heapq
from typing import Iterable, Iterator, Sequence

from .refs import Reference, Scope


def combine_kinds(*scope_sets: Sequence[Reference]) -> list[Reference]:
    """
    Merge the sorted per-kind lists of one scope into one sorted list.

    Args:
        scope_sets: Sorted reference lists (e.g. apps and runtimes)

    Returns:
        Sorted list holding every reference of every input
    """
    return list(heapq.merge(*scope_sets))


def merge_scope_sets(
    system: Sequence[Reference],
    user: Sequence[Reference],
) -> Iterator[tuple[Reference, Scope]]:
    """
    Two-pointer merge of the system and user reference lists.

    When the heads compare equal the system reference is emitted first; the
    matching user reference follows on a later step.

    Args:
        system: Sorted system-scope references
        user: Sorted user-scope references

    Yields:
        (reference, scope) pairs in ascending reference order
    """
    s = u = 0
    while s < len(system) or u < len(user):
        if s == len(system):
            is_user = True
        elif u == len(user):
            is_user = False
        else:
            is_user = not system[s] <= user[u]

        if is_user:
            yield user[u], Scope.USER
            u += 1
        else:
            yield system[s], Scope.SYSTEM
            s += 1


def unique_names(merged: Iterable[tuple[Reference, Scope]]) -> list[str]:
    """
    Reduce merged references to their distinct names.

    Args:
        merged: Output of merge_scope_sets()

    Returns:
        Each distinct name once, in order of first appearance
    """
    seen: set[str] = set()
    names = []
    for ref, _scope in merged:
        if ref.name not in seen:
            seen.add(ref.name)
            names.append(ref.name)
    return names
