import hashlib

import pytest

from faestvc.tree import bit_dec, num_rec
from faestvc.vc import Primitives, vector_open
from faestvc.vole import (
    VoleCommitment,
    VoleParams,
    chal_dec,
    convert_to_vole,
    vole_commit,
    vole_reconstruct,
)


def _prg(key, iv, lam, n):
    return hashlib.shake_256(b"prg" + bytes(key) + bytes(iv) + bytes([lam // 8])).digest(n)


def _h0(seed, iv, lam):
    lb = lam // 8
    out = hashlib.shake_256(b"h0" + bytes(seed) + bytes(iv)).digest(3 * lb)
    return out[:lb], out[lb:]


def _h1(data, lam):
    return hashlib.shake_256(b"h1" + bytes(data)).digest(lam // 4)


PRIMS = Primitives(prg=_prg, h0=_h0, h1=_h1)
IV = bytes(range(16))

PARAM_SETS = [
    VoleParams(lam=16, tau=5, t0=1, k0=4, t1=4, k1=3),
    VoleParams(lam=24, tau=8, t0=0, k0=4, t1=8, k1=3),
]


def _xor(a, b):
    return bytes(x ^ y for x, y in zip(a, b))


def _depths(params):
    return [params.k0 if i < params.t0 else params.k1 for i in range(params.tau)]


def _open_all(commitment, chal, params):
    lb = params.lam // 8
    pdec, com_j = [], []
    for i, depth in enumerate(_depths(params)):
        bits = chal_dec(chal, i, params.k0, params.t0, params.k1, params.t1)
        vc = commitment.vec_coms[i]
        cop, cj = vector_open(vc.k, vc.com, bits, depth, lb)
        pdec.append(cop)
        com_j.append(cj)
    return pdec, com_j


def test_chal_dec_reads_bits_lsb_first():
    chal = bytes([0b10110101])
    assert chal_dec(chal, 0, 3, 1, 2, 2) == (1, 0, 1)
    assert chal_dec(chal, 1, 3, 1, 2, 2) == (0, 1)
    assert chal_dec(chal, 2, 3, 1, 2, 2) == (1, 0)


def test_chal_dec_round_trip_with_bit_dec():
    k0, t0, k1, t1 = 4, 2, 3, 3
    indices = [5, 12, 3, 7, 0]
    bits = []
    for i, idx in enumerate(indices):
        bits.extend(bit_dec(idx, k0 if i < t0 else k1))
    chal = bytearray((len(bits) + 7) // 8)
    for pos, bit in enumerate(bits):
        chal[pos // 8] |= bit << (pos % 8)
    decoded = [num_rec(chal_dec(bytes(chal), i, k0, t0, k1, t1)) for i in range(t0 + t1)]
    assert decoded == indices


def test_chal_dec_rejects_out_of_range_index():
    with pytest.raises(ValueError):
        chal_dec(bytes(4), 3, 3, 1, 2, 2)


def test_chal_dec_rejects_short_challenge():
    with pytest.raises(ValueError):
        chal_dec(bytes(1), 2, 4, 1, 4, 2)


@pytest.mark.parametrize("depth", [1, 2, 4])
@pytest.mark.parametrize("idx_seed", [0, 1, 3])
def test_convert_to_vole_correlation(depth, idx_seed):
    n = 1 << depth
    idx = idx_seed % n
    seeds = [bytes([i, 7]) for i in range(n)]
    u, v = convert_to_vole(IV, seeds, False, 16, depth, 5, _prg)
    shifted = [bytes(2)] + [seeds[j ^ idx] for j in range(1, n)]
    none_u, q = convert_to_vole(IV, shifted, True, 16, depth, 5, _prg)
    assert none_u is None
    assert len(v) == len(q) == depth
    for j, bit in enumerate(bit_dec(idx, depth)):
        assert q[j] == (_xor(v[j], u) if bit else v[j])


def test_convert_to_vole_output_sizes():
    seeds = [bytes([i, i]) for i in range(8)]
    u, v = convert_to_vole(IV, seeds, False, 16, 3, 9, _prg)
    assert len(u) == 9
    assert [len(row) for row in v] == [9, 9, 9]


def test_convert_to_vole_rejects_wrong_seed_count():
    with pytest.raises(ValueError):
        convert_to_vole(IV, [bytes(2)] * 3, False, 16, 2, 4, _prg)


@pytest.mark.parametrize("params", PARAM_SETS)
def test_commit_shapes(params):
    root_key = bytes(range(params.lam // 8))
    com = vole_commit(root_key, IV, 20, params, PRIMS)
    assert isinstance(com, VoleCommitment)
    assert len(com.u) == 3
    assert len(com.c) == params.tau - 1
    assert len(com.v) == sum(_depths(params))
    assert len(com.hcom) == params.lam // 4


@pytest.mark.parametrize("params", PARAM_SETS)
@pytest.mark.parametrize("chal_fill", [0x00, 0xA5, 0xFF])
def test_commit_reconstruct_round_trip(params, chal_fill):
    root_key = bytes(range(1, params.lam // 8 + 1))
    ellhat = 20
    com = vole_commit(root_key, IV, ellhat, params, PRIMS)
    chal = bytes([chal_fill]) * 4
    pdec, com_j = _open_all(com, chal, params)
    hcom, q = vole_reconstruct(IV, chal, pdec, com_j, ellhat, params, PRIMS)
    assert hcom == com.hcom
    assert len(q) == len(com.v)

    row = 0
    for i, depth in enumerate(_depths(params)):
        u_i = com.u if i == 0 else _xor(com.u, com.c[i - 1])
        bits = chal_dec(chal, i, params.k0, params.t0, params.k1, params.t1)
        for j in range(depth):
            expected = _xor(com.v[row], u_i) if bits[j] else com.v[row]
            assert q[row] == expected
            row += 1


def test_tampered_opening_changes_commitment():
    params = PARAM_SETS[0]
    com = vole_commit(bytes(2), IV, 16, params, PRIMS)
    chal = bytes([0x3C]) * 3
    pdec, com_j = _open_all(com, chal, params)
    bad = bytearray(pdec[0])
    bad[0] ^= 1
    pdec[0] = bytes(bad)
    hcom, _ = vole_reconstruct(IV, chal, pdec, com_j, 16, params, PRIMS)
    assert hcom != com.hcom
    assert len(hcom) == len(com.hcom)


def test_commit_is_deterministic_and_key_dependent():
    params = PARAM_SETS[0]
    a = vole_commit(b"\x01\x02", IV, 16, params, PRIMS)
    b = vole_commit(b"\x01\x02", IV, 16, params, PRIMS)
    c = vole_commit(b"\x02\x01", IV, 16, params, PRIMS)
    assert a == b
    assert a.hcom != c.hcom


def test_commit_rejects_wrong_key_length():
    with pytest.raises(ValueError):
        vole_commit(bytes(3), IV, 16, PARAM_SETS[0], PRIMS)


def test_reconstruct_rejects_wrong_number_of_openings():
    params = PARAM_SETS[0]
    with pytest.raises(ValueError):
        vole_reconstruct(IV, bytes(4), [bytes(8)], [bytes(4)], 16, params, PRIMS)


def test_commit_rejects_nonpositive_ellhat():
    with pytest.raises(ValueError):
        vole_commit(bytes(2), IV, 0, PARAM_SETS[0], PRIMS)


@pytest.mark.parametrize(
    "kwargs",
    [
        dict(lam=12, tau=2, t0=1, k0=6, t1=1, k1=6),
        dict(lam=16, tau=3, t0=1, k0=4, t1=1, k1=4),
        dict(lam=16, tau=2, t0=1, k0=0, t1=1, k1=4),
    ],
)
def test_params_validation(kwargs):
    with pytest.raises(ValueError):
        VoleParams(**kwargs)