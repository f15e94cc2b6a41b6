"""Canonical single-envelope requests.

The whole buffer is one MessagePack map::

    {"message": bin, "signature": [...], "gpk": [...]}

MessagePack is length-prefixed, so message bytes never interfere with framing.
"""
from __future__ import annotations

from typing import Any

import msgpack

from ..errors import EnvelopeDecodeError
from ..request import VerificationRequest
from ..scheme import GroupPublicKey, Signature
from .base import load_sub_object

FIELDS = ("message", "signature", "gpk")


class EnvelopeCodec:
    name = "envelope"

    def decode(self, data: bytes) -> VerificationRequest:
        try:
            obj = msgpack.unpackb(data, raw=False, use_list=False)
        except (ValueError, msgpack.UnpackException) as e:
            raise EnvelopeDecodeError(f"not a MessagePack envelope ({e})") from e
        if not isinstance(obj, dict):
            raise EnvelopeDecodeError(f"envelope must be a map, got {type(obj).__name__}")
        if set(obj) != set(FIELDS):
            raise EnvelopeDecodeError(
                f"envelope fields must be {list(FIELDS)}, got {sorted(map(str, obj))}"
            )
        message = obj["message"]
        if not isinstance(message, bytes):
            raise EnvelopeDecodeError("envelope message must be binary")
        return VerificationRequest(message=message, signature=obj["signature"], gpk=obj["gpk"])

    def encode(self, request: VerificationRequest) -> bytes:
        return msgpack.packb(
            {"message": request.message, "signature": request.signature, "gpk": request.gpk},
            use_bin_type=True,
        )

    def load_signature(self, blob: Any) -> Signature:
        return load_sub_object("signature", blob, Signature.from_wire)

    def load_gpk(self, blob: Any) -> GroupPublicKey:
        return load_sub_object("gpk", blob, GroupPublicKey.from_wire)

    def dump_signature(self, signature: Signature) -> tuple:
        return signature.to_wire()

    def dump_gpk(self, gpk: GroupPublicKey) -> tuple:
        return gpk.to_wire()


__all__ = ["EnvelopeCodec", "FIELDS"]
