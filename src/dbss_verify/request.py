from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class VerificationRequest:
    """One decoded request.

    ``signature`` and ``gpk`` stay in the encoded form of the codec that
    produced the request (line text for the framed codecs, the nested
    MessagePack value for the envelope). ``message`` is passed through as-is.
    """

    message: bytes
    signature: Any
    gpk: Any


__all__ = ["VerificationRequest"]
