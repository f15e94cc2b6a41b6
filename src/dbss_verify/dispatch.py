"""Single verification operation: decode, convert sub-objects, delegate.

``MALFORMED`` (the request could not be parsed) and ``REJECTED`` (it parsed but
the signature did not verify) are kept apart all the way to the exit status.
"""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from .codecs import Codec, get_codec
from .errors import DecodeError
from .scheme import DistributedBBSVerifier, GroupSignatureVerifier, VerificationError
from .settings import get_settings

log = logging.getLogger(__name__)


class Verdict(str, enum.Enum):
    VERIFIED = "verified"
    REJECTED = "rejected"
    MALFORMED = "malformed"


@dataclass(frozen=True)
class VerifyOutcome:
    verdict: Verdict
    reason: str | None = None

    @classmethod
    def verified(cls) -> "VerifyOutcome":
        return cls(Verdict.VERIFIED)

    @classmethod
    def rejected(cls, reason: str | None = None) -> "VerifyOutcome":
        return cls(Verdict.REJECTED, reason)

    @classmethod
    def malformed(cls, reason: str) -> "VerifyOutcome":
        return cls(Verdict.MALFORMED, reason)

    @property
    def ok(self) -> bool:
        return self.verdict is Verdict.VERIFIED


def verify(
    request_bytes: bytes,
    *,
    codec: Codec | None = None,
    verifier: GroupSignatureVerifier | None = None,
) -> VerifyOutcome:
    codec = codec or get_codec(get_settings().dbss_wire_format)
    verifier = verifier or DistributedBBSVerifier()
    try:
        request = codec.decode(request_bytes)
        signature = codec.load_signature(request.signature)
        gpk = codec.load_gpk(request.gpk)
    except DecodeError as e:
        log.debug("malformed %s request: %s", codec.name, e)
        return VerifyOutcome.malformed(str(e))
    try:
        verifier.verify(request.message, signature, gpk)
    except VerificationError as e:
        log.info("signature rejected: %s", e)
        return VerifyOutcome.rejected(str(e))
    return VerifyOutcome.verified()


__all__ = ["Verdict", "VerifyOutcome", "verify"]
