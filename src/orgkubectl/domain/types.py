"""Identifier aliases and the ancestor-chain membership rule."""

from __future__ import annotations

from collections.abc import Iterable

ProjectId = str
ResourceId = str

# Ordered as returned by the inventory: the project entry first, then its
# folders, then the organization.
AncestorChain = tuple[ResourceId, ...]


def as_chain(ids: Iterable[ResourceId]) -> AncestorChain:
    """Freeze *ids* into an ancestor chain, preserving order."""
    return tuple(str(i) for i in ids)


def chain_contains(chain: AncestorChain, target: ResourceId) -> bool:
    """Whether *target* appears anywhere in *chain*.

    Examples:
        >>> chain_contains(("folder2", "org1"), "org1")
        True
        >>> chain_contains((), "org1")
        False
    """
    return target in chain
