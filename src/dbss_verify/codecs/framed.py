"""Legacy newline-framed requests.

Layout::

    {signature}\\n
    {gpk}\\n
    {message ...}

Only the first two ``\\n`` bytes are separators; the message is the verbatim
remainder and may itself contain newlines.
"""
from __future__ import annotations

import base64
import binascii

from ..errors import SubObject, SubObjectDecodeError, TooFewFields
from ..request import VerificationRequest
from ..scheme import GroupPublicKey, Signature
from .base import load_sub_object

SEPARATOR = b"\n"


def split_frame(data: bytes) -> VerificationRequest:
    parts = data.split(SEPARATOR, 2)
    if len(parts) < 3:
        raise TooFewFields(len(parts))
    sig_part, gpk_part, message = parts
    return VerificationRequest(
        message=message,
        signature=sig_part.decode("utf-8", errors="replace"),
        gpk=gpk_part.decode("utf-8", errors="replace"),
    )


def join_frame(request: VerificationRequest) -> bytes:
    for name in ("signature", "gpk"):
        text = getattr(request, name)
        if not isinstance(text, str):
            raise TypeError(f"{name} must be text for a framed request")
        if "\n" in text:
            raise ValueError(f"{name} text must not contain a newline")
    return b"".join(
        [
            request.signature.encode("utf-8"),
            SEPARATOR,
            request.gpk.encode("utf-8"),
            SEPARATOR,
            request.message,
        ]
    )


def _b64_to_bytes(which: SubObject, text: str) -> bytes:
    try:
        return base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as e:
        raise SubObjectDecodeError(which, f"invalid base64 ({e})") from e


class FramedCodec:
    """Sub-objects as base64 of their MessagePack form."""

    name = "framed"

    def decode(self, data: bytes) -> VerificationRequest:
        return split_frame(data)

    def encode(self, request: VerificationRequest) -> bytes:
        return join_frame(request)

    def load_signature(self, blob: str) -> Signature:
        return load_sub_object("signature", _b64_to_bytes("signature", blob), Signature.from_bytes)

    def load_gpk(self, blob: str) -> GroupPublicKey:
        return load_sub_object("gpk", _b64_to_bytes("gpk", blob), GroupPublicKey.from_bytes)

    def dump_signature(self, signature: Signature) -> str:
        return base64.b64encode(signature.to_bytes()).decode("ascii")

    def dump_gpk(self, gpk: GroupPublicKey) -> str:
        return base64.b64encode(gpk.to_bytes()).decode("ascii")


class FramedJsonCodec:
    """Sub-objects as single-line JSON documents."""

    name = "framed-json"

    def decode(self, data: bytes) -> VerificationRequest:
        return split_frame(data)

    def encode(self, request: VerificationRequest) -> bytes:
        return join_frame(request)

    def load_signature(self, blob: str) -> Signature:
        return load_sub_object("signature", blob, Signature.from_json)

    def load_gpk(self, blob: str) -> GroupPublicKey:
        return load_sub_object("gpk", blob, GroupPublicKey.from_json)

    def dump_signature(self, signature: Signature) -> str:
        return signature.to_json()

    def dump_gpk(self, gpk: GroupPublicKey) -> str:
        return gpk.to_json()


__all__ = ["FramedCodec", "FramedJsonCodec", "split_frame", "join_frame"]
