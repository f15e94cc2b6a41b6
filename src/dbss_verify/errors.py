"""Error taxonomy for request decoding.

``DecodeError`` and its subclasses mean the request could not be parsed and map
to the ``MALFORMED`` verdict. A rejected signature is not an error here; it is
reported by the verifier through :class:`dbss_verify.scheme.VerificationError`.
"""
from __future__ import annotations

from typing import Literal

SubObject = Literal["signature", "gpk"]


class DbssError(Exception):
    pass


class InputReadError(DbssError):
    """Standard input could not be read to completion."""


class DecodeError(DbssError):
    pass


class TooFewFields(DecodeError):
    def __init__(self, found: int, expected: int = 3):
        super().__init__(f"not enough inputs: found {found} of {expected} fields")
        self.found = found
        self.expected = expected


class EnvelopeDecodeError(DecodeError):
    pass


class SubObjectDecodeError(DecodeError):
    def __init__(self, which: SubObject, detail: str):
        super().__init__(f"failed to decode {which}: {detail}")
        self.which = which
        self.detail = detail


__all__ = [
    "DbssError",
    "InputReadError",
    "DecodeError",
    "TooFewFields",
    "EnvelopeDecodeError",
    "SubObjectDecodeError",
]
