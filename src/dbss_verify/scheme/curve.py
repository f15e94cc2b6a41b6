"""BLS12-381 helpers on top of py_ecc's optimized backend.

Points use the 48-byte (G1) and 96-byte (G2) compressed encodings; scalars are
32-byte big-endian integers strictly below the group order.
"""
from __future__ import annotations

import hashlib
import secrets
from typing import Any, Iterable

from py_ecc.bls.g2_primitives import (
    G1_to_pubkey,
    G2_to_signature,
    pubkey_to_G1,
    signature_to_G2,
    subgroup_check,
)
from py_ecc.optimized_bls12_381 import (
    G1,
    G2,
    Z1,
    add,
    curve_order,
    field_modulus,
    multiply,
    pairing,
)

G1_BYTES = 48
G2_BYTES = 96
SCALAR_BYTES = 32

Point = Any  # py_ecc optimized Jacobian point
GT = Any  # py_ecc FQ12


class SchemeDecodeError(ValueError):
    pass


def random_scalar() -> int:
    return secrets.randbelow(curve_order - 1) + 1


def inverse(k: int) -> int:
    return pow(k % curve_order, -1, curve_order)


def g1_mul(point: Point, k: int) -> Point:
    # py_ecc's multiply only terminates for non-negative scalars
    return multiply(point, k % curve_order)


def g1_msm(terms: Iterable[tuple[Point, int]]) -> Point:
    acc = Z1
    for point, k in terms:
        acc = add(acc, g1_mul(point, k))
    return acc


def g2_generator_mul(k: int) -> Point:
    return multiply(G2, k % curve_order)


def g1_generator_mul(k: int) -> Point:
    return multiply(G1, k % curve_order)


def pair(q: Point, p: Point) -> GT:
    """e(p, q) for p in G1 and q in G2 (py_ecc takes the G2 argument first)."""
    return pairing(q, p)


def encode_g1(point: Point) -> bytes:
    return bytes(G1_to_pubkey(point))


def encode_g2(point: Point) -> bytes:
    return bytes(G2_to_signature(point))


def decode_g1(data: Any, name: str) -> Point:
    if not isinstance(data, bytes) or len(data) != G1_BYTES:
        raise SchemeDecodeError(f"{name}: expected {G1_BYTES} bytes")
    try:
        point = pubkey_to_G1(data)
    except ValueError as e:
        raise SchemeDecodeError(f"{name}: {e}") from e
    if not subgroup_check(point):
        raise SchemeDecodeError(f"{name}: point not in G1 subgroup")
    return point


def decode_g2(data: Any, name: str) -> Point:
    if not isinstance(data, bytes) or len(data) != G2_BYTES:
        raise SchemeDecodeError(f"{name}: expected {G2_BYTES} bytes")
    try:
        point = signature_to_G2(data)
    except ValueError as e:
        raise SchemeDecodeError(f"{name}: {e}") from e
    if not subgroup_check(point):
        raise SchemeDecodeError(f"{name}: point not in G2 subgroup")
    return point


def encode_scalar(k: int) -> bytes:
    return (k % curve_order).to_bytes(SCALAR_BYTES, "big")


def decode_scalar(data: Any, name: str) -> int:
    if not isinstance(data, bytes) or len(data) != SCALAR_BYTES:
        raise SchemeDecodeError(f"{name}: expected {SCALAR_BYTES} bytes")
    k = int.from_bytes(data, "big")
    if k >= curve_order:
        raise SchemeDecodeError(f"{name}: scalar out of range")
    return k


def encode_gt(value: GT) -> bytes:
    return b"".join(
        (int(getattr(c, "n", c)) % field_modulus).to_bytes(G1_BYTES, "big")
        for c in value.coeffs
    )


def hash_to_scalar(*parts: bytes) -> int:
    h = hashlib.sha256()
    for part in parts:
        h.update(len(part).to_bytes(4, "big"))
        h.update(part)
    return int.from_bytes(h.digest(), "big") % curve_order


__all__ = [
    "G1",
    "G2",
    "G1_BYTES",
    "G2_BYTES",
    "SCALAR_BYTES",
    "SchemeDecodeError",
    "curve_order",
    "random_scalar",
    "inverse",
    "g1_mul",
    "g1_msm",
    "g1_generator_mul",
    "g2_generator_mul",
    "pair",
    "encode_g1",
    "encode_g2",
    "decode_g1",
    "decode_g2",
    "encode_scalar",
    "decode_scalar",
    "encode_gt",
    "hash_to_scalar",
]
