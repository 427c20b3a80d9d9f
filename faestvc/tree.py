"""Index arithmetic for complete binary trees stored as flat arrays.

Nodes are laid out level by level: the root is node 0, and the children of
node ``i`` are ``2 * i + 1`` and ``2 * i + 2``.
"""

from __future__ import annotations

from typing import Iterable, Tuple

__all__ = ["binary_tree_node_count", "node_index", "bit_dec", "num_rec"]


def binary_tree_node_count(depth: int) -> int:
    """Return the total number of nodes, root included, of a tree of ``depth``."""
    if depth < 0:
        raise ValueError("depth must not be negative")
    return (1 << (depth + 1)) - 1


def node_index(depth: int, level_index: int) -> int:
    """Return the flat array index of the ``level_index``-th node on level ``depth``."""
    if depth < 0 or level_index < 0:
        raise ValueError("depth and level index must not be negative")
    if depth == 0:
        return 0
    return ((2 << (depth - 1)) - 2) + (level_index + 1)


def bit_dec(leaf_index: int, depth: int) -> Tuple[int, ...]:
    """Decompose ``leaf_index`` into ``depth`` bits, least significant first."""
    if depth < 0:
        raise ValueError("depth must not be negative")
    if not 0 <= leaf_index < (1 << depth):
        raise ValueError(f"leaf index {leaf_index} does not fit in {depth} bits")
    return tuple((leaf_index >> j) & 1 for j in range(depth))


def num_rec(bits: Iterable[int]) -> int:
    """Recompose an integer from bits given least significant first."""
    return sum(int(bit) << i for i, bit in enumerate(bits))