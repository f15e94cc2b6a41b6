"""BBS04 short group signatures under a combined multi-manager key.

Signing proves knowledge of a member credential ``(A, x)`` with
``e(A, w + g2*x) == e(g1, g2)`` without revealing ``A``:

    T1 = u*alpha, T2 = v*beta, T3 = A + h*(alpha + beta)

followed by a Fiat-Shamir proof over ``(alpha, beta, x, x*alpha, x*beta)``.
The pairing term is computed as a product of two pairings by bilinearity.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import msgpack
from py_ecc.optimized_bls12_381 import G1, G2, eq

from .curve import (
    Point,
    SchemeDecodeError,
    curve_order,
    decode_g1,
    decode_scalar,
    encode_g1,
    encode_g2,
    encode_gt,
    encode_scalar,
    g1_msm,
    g1_mul,
    hash_to_scalar,
    pair,
    random_scalar,
)
from .keys import GroupPublicKey, MemberKey

DOMAIN_TAG = b"dbss-verify/bbs04/v1"

_SCALAR_FIELDS = ("c", "s_alpha", "s_beta", "s_x", "s_delta1", "s_delta2")


@dataclass(frozen=True, eq=False)
class Signature:
    t1: Point
    t2: Point
    t3: Point
    c: int
    s_alpha: int
    s_beta: int
    s_x: int
    s_delta1: int
    s_delta2: int

    def to_wire(self) -> tuple[bytes, ...]:
        return (
            encode_g1(self.t1),
            encode_g1(self.t2),
            encode_g1(self.t3),
            *(encode_scalar(getattr(self, name)) for name in _SCALAR_FIELDS),
        )

    @classmethod
    def from_wire(cls, obj: Any) -> "Signature":
        if not isinstance(obj, (list, tuple)) or len(obj) != 3 + len(_SCALAR_FIELDS):
            raise SchemeDecodeError(
                f"signature: expected an array of {3 + len(_SCALAR_FIELDS)} fields"
            )
        t1, t2, t3 = (decode_g1(obj[i], f"t{i + 1}") for i in range(3))
        scalars = {
            name: decode_scalar(value, name) for name, value in zip(_SCALAR_FIELDS, obj[3:])
        }
        return cls(t1=t1, t2=t2, t3=t3, **scalars)

    def to_bytes(self) -> bytes:
        return msgpack.packb(self.to_wire(), use_bin_type=True)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Signature":
        try:
            obj = msgpack.unpackb(data, raw=False, use_list=False)
        except (ValueError, msgpack.UnpackException) as e:
            raise SchemeDecodeError(f"signature: not MessagePack ({e})") from e
        return cls.from_wire(obj)

    def to_json(self) -> str:
        from .models import SignatureDocument

        return SignatureDocument.from_signature(self).model_dump_json()

    @classmethod
    def from_json(cls, text: str) -> "Signature":
        from .models import SignatureDocument

        return SignatureDocument.parse(text).to_signature()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Signature):
            return NotImplemented
        return self.to_wire() == other.to_wire()


def _challenge(
    message: bytes,
    gpk: GroupPublicKey,
    t1: Point,
    t2: Point,
    t3: Point,
    r1: Point,
    r2: Point,
    r3: Any,
    r4: Point,
    r5: Point,
) -> int:
    return hash_to_scalar(
        DOMAIN_TAG,
        message,
        encode_g1(gpk.h),
        encode_g1(gpk.u),
        encode_g1(gpk.v),
        encode_g2(gpk.w),
        encode_g1(t1),
        encode_g1(t2),
        encode_g1(t3),
        encode_g1(r1),
        encode_g1(r2),
        encode_gt(r3),
        encode_g1(r4),
        encode_g1(r5),
    )


def sign(message: bytes, member: MemberKey, gpk: GroupPublicKey) -> Signature:
    alpha, beta = random_scalar(), random_scalar()
    t1 = g1_mul(gpk.u, alpha)
    t2 = g1_mul(gpk.v, beta)
    t3 = g1_msm([(member.a, 1), (gpk.h, alpha + beta)])
    delta1 = member.x * alpha
    delta2 = member.x * beta

    r_alpha, r_beta, r_x, r_delta1, r_delta2 = (random_scalar() for _ in range(5))
    r1 = g1_mul(gpk.u, r_alpha)
    r2 = g1_mul(gpk.v, r_beta)
    # e(T3,g2)^rx * e(h,w)^-(ra+rb) * e(h,g2)^-(rd1+rd2)
    r3 = pair(G2, g1_msm([(t3, r_x), (gpk.h, -(r_delta1 + r_delta2))])) * pair(
        gpk.w, g1_mul(gpk.h, -(r_alpha + r_beta))
    )
    r4 = g1_msm([(t1, r_x), (gpk.u, -r_delta1)])
    r5 = g1_msm([(t2, r_x), (gpk.v, -r_delta2)])

    c = _challenge(message, gpk, t1, t2, t3, r1, r2, r3, r4, r5)
    return Signature(
        t1=t1,
        t2=t2,
        t3=t3,
        c=c,
        s_alpha=(r_alpha + c * alpha) % curve_order,
        s_beta=(r_beta + c * beta) % curve_order,
        s_x=(r_x + c * member.x) % curve_order,
        s_delta1=(r_delta1 + c * delta1) % curve_order,
        s_delta2=(r_delta2 + c * delta2) % curve_order,
    )


def check(message: bytes, signature: Signature, gpk: GroupPublicKey) -> bool:
    """Recompute the proof commitments and compare challenges."""
    if not gpk.managers or not eq(gpk.w, gpk.combined_w()):
        return False
    s, c = signature, signature.c
    r1 = g1_msm([(gpk.u, s.s_alpha), (s.t1, -c)])
    r2 = g1_msm([(gpk.v, s.s_beta), (s.t2, -c)])
    r3 = pair(G2, g1_msm([(s.t3, s.s_x), (gpk.h, -(s.s_delta1 + s.s_delta2)), (G1, -c)])) * pair(
        gpk.w, g1_msm([(gpk.h, -(s.s_alpha + s.s_beta)), (s.t3, c)])
    )
    r4 = g1_msm([(s.t1, s.s_x), (gpk.u, -s.s_delta1)])
    r5 = g1_msm([(s.t2, s.s_x), (gpk.v, -s.s_delta2)])
    return _challenge(message, gpk, s.t1, s.t2, s.t3, r1, r2, r3, r4, r5) == c


__all__ = ["Signature", "sign", "check", "DOMAIN_TAG"]
