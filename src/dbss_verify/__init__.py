"""dbss_verify: verify distributed BBS group signatures from a serialized request.

The package decodes ``{message, signature, gpk}`` from one of the supported wire
formats and reports a three-way outcome (verified, rejected, malformed). The
group signature mathematics lives in :mod:`dbss_verify.scheme` and is reached
only through :class:`~dbss_verify.scheme.GroupSignatureVerifier`.
"""
from .dispatch import Verdict, VerifyOutcome, verify  # noqa: F401
from .request import VerificationRequest  # noqa: F401

__version__ = "0.3.0"
