"""Distributed group keys.

Every group manager ``j`` holds a secret share ``gamma_j`` and publishes the
partial key ``w_j = g2 * gamma_j``. The combined issuing key is
``w = sum(w_j)`` so no single manager can issue member credentials alone.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import msgpack
from py_ecc.optimized_bls12_381 import Z2, add, eq

from .curve import (
    Point,
    SchemeDecodeError,
    decode_g1,
    decode_g2,
    encode_g1,
    encode_g2,
    g1_generator_mul,
    g1_mul,
    g2_generator_mul,
    inverse,
    random_scalar,
)


def _sum_g2(points: Iterable[Point]) -> Point:
    acc = Z2
    for p in points:
        acc = add(acc, p)
    return acc


@dataclass(frozen=True, eq=False)
class ManagerKey:
    index: int
    w: Point

    def to_wire(self) -> tuple[int, bytes]:
        return (self.index, encode_g2(self.w))

    @classmethod
    def from_wire(cls, obj: Any, position: int = 0) -> "ManagerKey":
        if not isinstance(obj, (list, tuple)) or len(obj) != 2:
            raise SchemeDecodeError(f"managers[{position}]: expected [index, w]")
        index, w = obj
        if not isinstance(index, int) or isinstance(index, bool) or index < 0:
            raise SchemeDecodeError(f"managers[{position}]: index must be a non-negative int")
        return cls(index=index, w=decode_g2(w, f"managers[{position}].w"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ManagerKey):
            return NotImplemented
        return self.index == other.index and eq(self.w, other.w)


@dataclass(frozen=True, eq=False)
class GroupPublicKey:
    h: Point
    u: Point
    v: Point
    w: Point
    managers: tuple[ManagerKey, ...]

    def combined_w(self) -> Point:
        return _sum_g2(m.w for m in self.managers)

    def to_wire(self) -> tuple:
        return (
            encode_g1(self.h),
            encode_g1(self.u),
            encode_g1(self.v),
            encode_g2(self.w),
            tuple(m.to_wire() for m in self.managers),
        )

    @classmethod
    def from_wire(cls, obj: Any) -> "GroupPublicKey":
        if not isinstance(obj, (list, tuple)) or len(obj) != 5:
            raise SchemeDecodeError("gpk: expected [h, u, v, w, managers]")
        h, u, v, w, managers = obj
        if not isinstance(managers, (list, tuple)):
            raise SchemeDecodeError("gpk: managers must be an array")
        return cls(
            h=decode_g1(h, "h"),
            u=decode_g1(u, "u"),
            v=decode_g1(v, "v"),
            w=decode_g2(w, "w"),
            managers=tuple(ManagerKey.from_wire(m, i) for i, m in enumerate(managers)),
        )

    def to_bytes(self) -> bytes:
        return msgpack.packb(self.to_wire(), use_bin_type=True)

    @classmethod
    def from_bytes(cls, data: bytes) -> "GroupPublicKey":
        try:
            obj = msgpack.unpackb(data, raw=False, use_list=False)
        except (ValueError, msgpack.UnpackException) as e:
            raise SchemeDecodeError(f"gpk: not MessagePack ({e})") from e
        return cls.from_wire(obj)

    def to_json(self) -> str:
        from .models import GroupPublicKeyDocument

        return GroupPublicKeyDocument.from_key(self).model_dump_json()

    @classmethod
    def from_json(cls, text: str) -> "GroupPublicKey":
        from .models import GroupPublicKeyDocument

        return GroupPublicKeyDocument.parse(text).to_key()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GroupPublicKey):
            return NotImplemented
        return self.to_wire() == other.to_wire()


@dataclass(frozen=True)
class ManagerSecret:
    index: int
    gamma: int

    def public_key(self) -> ManagerKey:
        return ManagerKey(index=self.index, w=g2_generator_mul(self.gamma))


@dataclass(frozen=True)
class MemberKey:
    """Member credential ``(A, x)`` with ``A = g1 * 1/(gamma + x)``."""

    a: Point
    x: int


def combine_public_key(h: Point, u: Point, v: Point, managers: Sequence[ManagerKey]) -> GroupPublicKey:
    return GroupPublicKey(h=h, u=u, v=v, w=_sum_g2(m.w for m in managers), managers=tuple(managers))


def setup_group(managers: int = 3) -> tuple[GroupPublicKey, list[ManagerSecret]]:
    """Generate a group with ``managers`` independent manager shares."""
    if managers < 1:
        raise ValueError("a group needs at least one manager")
    h = g1_generator_mul(random_scalar())
    xi1, xi2 = random_scalar(), random_scalar()
    u = g1_mul(h, inverse(xi1))
    v = g1_mul(h, inverse(xi2))
    shares = [ManagerSecret(index=i, gamma=random_scalar()) for i in range(managers)]
    gpk = combine_public_key(h, u, v, [s.public_key() for s in shares])
    return gpk, shares


def issue_member_key(shares: Sequence[ManagerSecret]) -> MemberKey:
    # Dealer-style issuance; every manager share must take part
    gamma = sum(s.gamma for s in shares)
    while True:
        x = random_scalar()
        try:
            a = g1_generator_mul(inverse(gamma + x))
        except ValueError:
            continue
        return MemberKey(a=a, x=x)


__all__ = [
    "ManagerKey",
    "GroupPublicKey",
    "ManagerSecret",
    "MemberKey",
    "combine_public_key",
    "setup_group",
    "issue_member_key",
]
