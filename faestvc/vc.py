"""GGM-tree vector commitments: commit, open, reconstruct and verify.

The pseudo-random generator and the two random oracles are supplied by the
caller through :class:`Primitives`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple

from .tree import binary_tree_node_count, node_index, num_rec

__all__ = [
    "Primitives",
    "VectorCommitment",
    "VectorReconstruction",
    "vector_commitment",
    "vector_open",
    "vector_reconstruction",
    "vector_verify",
]

PrgFunc = Callable[[bytes, bytes, int, int], bytes]
H0Func = Callable[[bytes, bytes, int], Tuple[bytes, bytes]]
H1Func = Callable[[bytes, int], bytes]


@dataclass(frozen=True)
class Primitives:
    """The keyed building blocks used by the commitment scheme.

    ``prg(key, iv, lam, out_len)`` expands a seed into ``out_len`` bytes.
    ``h0(seed, iv, lam)`` returns a ``(seed, commitment)`` pair of
    ``lam / 8`` and ``lam / 4`` bytes.
    ``h1(data, lam)`` returns a digest of ``lam / 4`` bytes.
    """

    prg: PrgFunc
    h0: H0Func
    h1: H1Func


@dataclass(frozen=True)
class VectorCommitment:
    """Result of committing to a tree of seeds."""

    h: bytes
    k: Tuple[bytes, ...]
    com: Tuple[bytes, ...]
    sd: Tuple[bytes, ...]


@dataclass(frozen=True)
class VectorReconstruction:
    """Result of rebuilding a commitment from an opening."""

    h: bytes
    k: Tuple[bytes, ...]
    com: Tuple[bytes, ...]
    s: Tuple[bytes, ...]


def _lambda_bytes(lam: int) -> int:
    if lam <= 0 or lam % 8:
        raise ValueError(f"lambda must be a positive multiple of 8, got {lam}")
    return lam // 8


def _check_depth(depth: int) -> None:
    if depth < 1:
        raise ValueError(f"depth must be at least 1, got {depth}")


def _check_choice(b: Sequence[int], depth: int) -> None:
    if len(b) != depth:
        raise ValueError(f"expected {depth} choice bits, got {len(b)}")
    if any(bit not in (0, 1) for bit in b):
        raise ValueError("choice bits must be 0 or 1")


def _expand(primitives: Primitives, seed: bytes, iv: bytes, lam: int, lb: int) -> Tuple[bytes, bytes]:
    out = primitives.prg(seed, iv, lam, 2 * lb)
    return out[:lb], out[lb : 2 * lb]


def _leaf_commitments(
    primitives: Primitives, leaves: Sequence[bytes], iv: bytes, lam: int
) -> Tuple[List[bytes], List[bytes]]:
    pairs = [primitives.h0(leaf, iv, lam) for leaf in leaves]
    return [sd for sd, _ in pairs], [com for _, com in pairs]


def vector_commitment(
    root_key: bytes, iv: bytes, lam: int, depth: int, primitives: Primitives
) -> VectorCommitment:
    """Expand ``root_key`` into a tree of ``2**depth`` leaves and commit to them."""
    lb = _lambda_bytes(lam)
    _check_depth(depth)
    if len(root_key) != lb:
        raise ValueError(f"root key must be {lb} bytes, got {len(root_key)}")

    node_count = binary_tree_node_count(depth)
    nodes: List[bytes] = [b""] * node_count
    nodes[0] = bytes(root_key)
    for i in range(node_count // 2):
        nodes[2 * i + 1], nodes[2 * i + 2] = _expand(primitives, nodes[i], iv, lam, lb)

    num_leaves = 1 << depth
    sd, com = _leaf_commitments(primitives, nodes[node_count - num_leaves :], iv, lam)
    h = primitives.h1(b"".join(com), lam)
    return VectorCommitment(h=h, k=tuple(nodes), com=tuple(com), sd=tuple(sd))


def vector_open(
    k: Sequence[bytes], com: Sequence[bytes], b: Sequence[int], depth: int, lambda_bytes: int
) -> Tuple[bytes, bytes]:
    """Open every leaf except the one selected by ``b``.

    Returns the co-path seeds, concatenated from the top of the tree down,
    and the commitment of the hidden leaf.
    """
    _check_depth(depth)
    _check_choice(b, depth)
    if len(k) != binary_tree_node_count(depth) or len(com) != 1 << depth:
        raise ValueError("tree and commitments do not match the depth")

    cop = bytearray()
    a = 0
    for i in range(depth):
        bit = b[depth - 1 - i]
        sibling = k[node_index(i + 1, 2 * a + (1 - bit))]
        if len(sibling) != lambda_bytes:
            raise ValueError(f"tree nodes must be {lambda_bytes} bytes")
        cop += sibling
        a = 2 * a + bit

    return bytes(cop), bytes(com[num_rec(b)])


def vector_reconstruction(
    iv: bytes,
    cop: bytes,
    com_j: bytes,
    b: Sequence[int],
    lam: int,
    depth: int,
    primitives: Primitives,
) -> VectorReconstruction:
    """Rebuild all seeds except the hidden leaf, and the overall commitment."""
    lb = _lambda_bytes(lam)
    _check_depth(depth)
    _check_choice(b, depth)
    if len(cop) != depth * lb:
        raise ValueError(f"co-path must be {depth * lb} bytes, got {len(cop)}")
    if len(com_j) != 2 * lb:
        raise ValueError(f"leaf commitment must be {2 * lb} bytes, got {len(com_j)}")

    zero = bytes(lb)
    nodes: List[bytes] = [zero] * binary_tree_node_count(depth)
    a = 0
    for i in range(1, depth + 1):
        bit = b[depth - i]
        nodes[node_index(i, 2 * a + (1 - bit))] = bytes(cop[(i - 1) * lb : i * lb])
        nodes[node_index(i, 2 * a + bit)] = zero
        for j in range(1 << (i - 1)):
            if j == a:
                continue
            left, right = _expand(primitives, nodes[node_index(i - 1, j)], iv, lam, lb)
            nodes[node_index(i, 2 * j)] = left
            nodes[node_index(i, 2 * j + 1)] = right
        a = 2 * a + bit

    leaf = num_rec(b)
    num_leaves = 1 << depth
    seeds: List[bytes] = []
    coms: List[bytes] = []
    for j in range(num_leaves):
        if j == leaf:
            seeds.append(zero)
            coms.append(bytes(com_j))
            continue
        sd, com = primitives.h0(nodes[node_index(depth, j)], iv, lam)
        seeds.append(sd)
        coms.append(com)

    h = primitives.h1(b"".join(coms), lam)
    return VectorReconstruction(h=h, k=tuple(nodes), com=tuple(coms), s=tuple(seeds))


def vector_verify(
    iv: bytes,
    cop: bytes,
    com_j: bytes,
    b: Sequence[int],
    lam: int,
    depth: int,
    expected_h: bytes,
    primitives: Primitives,
) -> Optional[VectorReconstruction]:
    """Reconstruct and compare with ``expected_h``.

    Returns the reconstruction when it matches, otherwise ``None``.
    """
    rec = vector_reconstruction(iv, cop, com_j, b, lam, depth, primitives)
    return rec if rec.h == bytes(expected_h) else None