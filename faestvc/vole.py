"""VOLE commitments built from vector commitments.

A prover commits to ``tau`` GGM trees and turns their leaf seeds into VOLE
correlations. A verifier who learns all but one leaf of every tree rebuilds
the same correlations, shifted by its secret choice.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .tree import num_rec
from .vc import (
    PrgFunc,
    Primitives,
    VectorCommitment,
    vector_commitment,
    vector_reconstruction,
)

__all__ = [
    "VoleParams",
    "VoleCommitment",
    "chal_dec",
    "convert_to_vole",
    "vole_commit",
    "vole_reconstruct",
]


@dataclass(frozen=True)
class VoleParams:
    """Parameters of a VOLE commitment.

    The first ``t0`` trees have depth ``k0``; the remaining ``t1`` trees have
    depth ``k1``. ``tau`` is the total number of trees.
    """

    lam: int
    tau: int
    t0: int
    k0: int
    t1: int
    k1: int

    def __post_init__(self) -> None:
        if self.lam <= 0 or self.lam % 8:
            raise ValueError(f"lambda must be a positive multiple of 8, got {self.lam}")
        if self.t0 < 0 or self.t1 < 0:
            raise ValueError("tree counts must not be negative")
        if self.tau <= 0 or self.tau != self.t0 + self.t1:
            raise ValueError(f"tau must equal t0 + t1 and be positive, got {self.tau}")
        if self.t0 and self.k0 < 1:
            raise ValueError(f"k0 must be at least 1, got {self.k0}")
        if self.t1 and self.k1 < 1:
            raise ValueError(f"k1 must be at least 1, got {self.k1}")


@dataclass(frozen=True)
class VoleCommitment:
    """What the prover holds after committing.

    ``v`` holds one row per tree level, trees one after another.
    ``c`` holds the ``tau - 1`` correction values.
    """

    hcom: bytes
    vec_coms: Tuple[VectorCommitment, ...]
    c: Tuple[bytes, ...]
    u: bytes
    v: Tuple[bytes, ...]


def _depth_of(params: VoleParams, i: int) -> int:
    return params.k0 if i < params.t0 else params.k1


def _ellhat_bytes(ellhat: int) -> int:
    if ellhat <= 0:
        raise ValueError(f"ellhat must be positive, got {ellhat}")
    return (ellhat + 7) // 8


def _xor(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


def chal_dec(
    chal: bytes, i: int, k0: int, t0: int, k1: int, t1: int
) -> Tuple[int, ...]:
    """Return the challenge bits that select the hidden leaf of tree ``i``.

    Bits are read least significant first within each byte.
    """
    if not 0 <= i < t0 + t1:
        raise ValueError(f"tree index {i} out of range for {t0 + t1} trees")
    if i < t0:
        lo, hi = i * k0, (i + 1) * k0
    else:
        t = i - t0
        lo, hi = t0 * k0 + t * k1, t0 * k0 + (t + 1) * k1
    if hi > 8 * len(chal):
        raise ValueError(f"challenge of {len(chal)} bytes is too short")
    return tuple((chal[j // 8] >> (j % 8)) & 1 for j in range(lo, hi))


def convert_to_vole(
    iv: bytes,
    sd: Sequence[bytes],
    sd0_bot: bool,
    lam: int,
    depth: int,
    out_len_bytes: int,
    prg: PrgFunc,
) -> Tuple[Optional[bytes], Tuple[bytes, ...]]:
    """Turn ``2**depth`` leaf seeds into a ``(u, v)`` VOLE pair.

    When ``sd0_bot`` is set, the first seed is treated as unknown and ``u``
    is returned as ``None``.
    """
    if depth < 0:
        raise ValueError("depth must not be negative")
    if out_len_bytes < 0:
        raise ValueError("output length must not be negative")
    num_instances = 1 << depth
    if len(sd) != num_instances:
        raise ValueError(f"expected {num_instances} seeds, got {len(sd)}")

    rows: List[int] = []
    for i, seed in enumerate(sd):
        if i == 0 and sd0_bot:
            rows.append(0)
            continue
        out = prg(seed, iv, lam, out_len_bytes)
        if len(out) != out_len_bytes:
            raise ValueError("generator returned output of the wrong length")
        rows.append(int.from_bytes(out, "big"))

    v: List[bytes] = []
    for _ in range(depth):
        acc = 0
        merged: List[int] = []
        for left, right in zip(rows[0::2], rows[1::2]):
            acc ^= right
            merged.append(left ^ right)
        v.append(acc.to_bytes(out_len_bytes, "big"))
        rows = merged

    u = None if sd0_bot else rows[0].to_bytes(out_len_bytes, "big")
    return u, tuple(v)


def vole_commit(
    root_key: bytes,
    iv: bytes,
    ellhat: int,
    params: VoleParams,
    primitives: Primitives,
) -> VoleCommitment:
    """Commit to ``tau`` seed trees derived from ``root_key``."""
    lam = params.lam
    lb = lam // 8
    if len(root_key) != lb:
        raise ValueError(f"root key must be {lb} bytes, got {len(root_key)}")
    ell_bytes = _ellhat_bytes(ellhat)

    expanded = primitives.prg(root_key, iv, lam, lb * params.tau)
    if len(expanded) != lb * params.tau:
        raise ValueError("generator returned output of the wrong length")

    vec_coms: List[VectorCommitment] = []
    us: List[bytes] = []
    v: List[bytes] = []
    for i in range(params.tau):
        depth = _depth_of(params, i)
        vc = vector_commitment(expanded[i * lb : (i + 1) * lb], iv, lam, depth, primitives)
        u_i, v_i = convert_to_vole(iv, vc.sd, False, lam, depth, ell_bytes, primitives.prg)
        assert u_i is not None
        vec_coms.append(vc)
        us.append(u_i)
        v.extend(v_i)

    u = us[0]
    c = tuple(_xor(u, u_i) for u_i in us[1:])
    hcom = primitives.h1(b"".join(vc.h for vc in vec_coms), lam)
    return VoleCommitment(hcom=hcom, vec_coms=tuple(vec_coms), c=c, u=u, v=tuple(v))


def vole_reconstruct(
    iv: bytes,
    chal: bytes,
    pdec: Sequence[bytes],
    com_j: Sequence[bytes],
    ellhat: int,
    params: VoleParams,
    primitives: Primitives,
) -> Tuple[bytes, Tuple[bytes, ...]]:
    """Rebuild the overall commitment and the shifted VOLE rows ``q``.

    ``pdec`` and ``com_j`` hold one opening per tree. Returns ``(hcom, q)``.
    """
    lam = params.lam
    lb = lam // 8
    ell_bytes = _ellhat_bytes(ellhat)
    if len(pdec) != params.tau or len(com_j) != params.tau:
        raise ValueError(f"expected {params.tau} openings")

    hs: List[bytes] = []
    q: List[bytes] = []
    zero = bytes(lb)
    for i in range(params.tau):
        depth = _depth_of(params, i)
        bits = chal_dec(chal, i, params.k0, params.t0, params.k1, params.t1)
        idx = num_rec(bits)
        rec = vector_reconstruction(iv, pdec[i], com_j[i], bits, lam, depth, primitives)
        sd = [zero] + [rec.s[j ^ idx] for j in range(1, 1 << depth)]
        _, q_i = convert_to_vole(iv, sd, True, lam, depth, ell_bytes, primitives.prg)
        q.extend(q_i)
        hs.append(rec.h)

    hcom = primitives.h1(b"".join(hs), lam)
    return hcom, tuple(q)