# faestvc

Building blocks for the commitment layer of FAEST-style signature schemes, in pure
Python with no third-party dependencies.

## Modules

- `faestvc.shake`: `HashContext` is an incremental SHAKE state. A security parameter
  of 128 selects SHAKE128, any other value selects SHAKE256. Data is absorbed with
  `update` (and `update_uint16_le` for a little-endian 16-bit value), the context is
  closed with `finalize`, and `squeeze(length)` then returns successive output bytes.
  `HashContext.with_prefix(security_param, prefix)` starts from a one-byte domain prefix.
  `HashContextX4` drives four such states together: `update` takes four inputs of equal
  length, `update_all` feeds one input to all four, `update_uint16s_le` takes four
  16-bit values, and `squeeze` returns a tuple of four outputs. Absorbing after
  `finalize`, or squeezing before it, raises `RuntimeError`.
- `faestvc.tree`: index arithmetic for complete binary trees stored level by level:
  `binary_tree_node_count(depth)`, `node_index(depth, level_index)`,
  `bit_dec(leaf_index, depth)` (a tuple of bits, least significant first; a leaf index
  that does not fit raises `ValueError`) and its inverse `num_rec(bits)`.
- `faestvc.vc`: GGM-tree vector commitments. `vector_commitment` expands a root seed
  into a tree with `2**depth` leaves and returns a `VectorCommitment` (`h`, `k`, `com`,
  `sd`). `vector_open` returns the co-path seeds and the commitment of the hidden leaf.
  `vector_reconstruction` rebuilds everything except the hidden leaf as a
  `VectorReconstruction` (`h`, `k`, `com`, `s`), and `vector_verify` returns that
  reconstruction when its `h` matches the expected one, otherwise `None`.
- `faestvc.vole`: VOLE commitments over `tau` trees described by `VoleParams`
  (`lam`, `tau`, `t0`, `k0`, `t1`, `k1`). `vole_commit` returns a `VoleCommitment`
  (`hcom`, `vec_coms`, `c`, `u`, `v`). `chal_dec` picks the bits of a challenge that
  belong to one tree, `convert_to_vole` turns leaf seeds into VOLE rows, and
  `vole_reconstruct` returns `(hcom, q)` on the verifier's side.

## Supplying the primitives

The pseudorandom generator and the random oracles H0 and H1 are passed in through a
`Primitives` object:

- `prg(key, iv, lam, out_len)` returns `out_len` bytes,
- `h0(seed, iv, lam)` returns a `(seed, commitment)` pair of `lam / 8` and `lam / 4` bytes,
- `h1(data, lam)` returns `lam / 4` bytes.

## What the package does not do

It ships no pseudorandom generator (such as an AES-CTR generator) and no fixed H0/H1
definitions, so on its own it does not reproduce any particular signature scheme's
outputs. It has no key generation, signing or verification of messages, and no
command-line tool. The primitives in the examples below are for illustration only.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

SHAKE output continues across calls to `squeeze`:

```python
from faestvc.shake import HashContext

ctx = HashContext(256)
ctx.update(bytes([0xAB, 0xCD]))
ctx.finalize()
first = ctx.squeeze(32)
second = ctx.squeeze(32)  # the next 32 bytes of the same stream
```

Tree helpers:

```python
from faestvc.tree import bit_dec, num_rec, node_index

bits = bit_dec(5, 4)          # (1, 0, 1, 0), least significant bit first
assert num_rec(bits) == 5
assert node_index(0, 0) == 0  # the root
```

Committing, opening and verifying with illustrative SHAKE-based primitives:

```python
from faestvc.shake import HashContext
from faestvc.tree import bit_dec
from faestvc.vc import Primitives, vector_commitment, vector_open, vector_verify

def prg(key, iv, lam, out_len):
    ctx = HashContext(lam)
    ctx.update(key + iv)
    ctx.finalize()
    return ctx.squeeze(out_len)

def h0(seed, iv, lam):
    ctx = HashContext.with_prefix(lam, 0)
    ctx.update(seed)
    ctx.update(iv)
    ctx.finalize()
    lb = lam // 8
    return ctx.squeeze(lb), ctx.squeeze(2 * lb)

def h1(data, lam):
    ctx = HashContext.with_prefix(lam, 1)
    ctx.update(data)
    ctx.finalize()
    return ctx.squeeze(lam // 4)

prims = Primitives(prg=prg, h0=h0, h1=h1)
root_seed = bytes(16)
iv = bytes(16)

vc = vector_commitment(root_seed, iv, 128, 4, prims)
b = bit_dec(5, 4)
cop, com_j = vector_open(vc.k, vc.com, b, 4, 16)
rec = vector_verify(iv, cop, com_j, b, 128, 4, vc.h, prims)
assert rec is not None and rec.h == vc.h
```

A VOLE commitment with the same primitives:

```python
from faestvc.vc import vector_open
from faestvc.vole import VoleParams, chal_dec, vole_commit, vole_reconstruct

params = VoleParams(lam=128, tau=2, t0=1, k0=3, t1=1, k1=2)
commitment = vole_commit(root_seed, iv, 64, params, prims)

chal = bytes([0b10110])
pdec, com_j = [], []
for i, vc in enumerate(commitment.vec_coms):
    depth = params.k0 if i < params.t0 else params.k1
    bits = chal_dec(chal, i, params.k0, params.t0, params.k1, params.t1)
    cop, cj = vector_open(vc.k, vc.com, bits, depth, 16)
    pdec.append(cop)
    com_j.append(cj)

hcom, q = vole_reconstruct(iv, chal, pdec, com_j, 64, params, prims)
assert hcom == commitment.hcom
```