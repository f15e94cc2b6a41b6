from __future__ import annotations

import logging
from typing import Protocol

from .bbs import Signature, check
from .keys import GroupPublicKey

log = logging.getLogger(__name__)


class VerificationError(Exception):
    """The signature was not accepted for the given message and group key."""


class GroupSignatureVerifier(Protocol):
    def verify(self, message: bytes, signature: Signature, gpk: GroupPublicKey) -> None:
        """Return on success, raise :class:`VerificationError` otherwise."""
        ...


class DistributedBBSVerifier:
    """Verifier for BBS04 signatures under a combined multi-manager key."""

    def verify(self, message: bytes, signature: Signature, gpk: GroupPublicKey) -> None:
        try:
            ok = check(message, signature, gpk)
        except (AssertionError, ValueError, ArithmeticError) as e:
            log.debug("bbs check raised: %s", e)
            raise VerificationError(f"verification failed: {e}") from e
        if not ok:
            raise VerificationError("verification failed")


__all__ = ["VerificationError", "GroupSignatureVerifier", "DistributedBBSVerifier"]
