"""Distributed BBS group signature scheme over BLS12-381.

The request dispatcher only needs the decoders and :class:`GroupSignatureVerifier`;
key setup and signing exist for producing test material.
"""
from .bbs import Signature, check, sign  # noqa: F401
from .curve import SchemeDecodeError  # noqa: F401
from .keys import (  # noqa: F401
    GroupPublicKey,
    ManagerKey,
    ManagerSecret,
    MemberKey,
    combine_public_key,
    issue_member_key,
    setup_group,
)
from .verifier import DistributedBBSVerifier, GroupSignatureVerifier, VerificationError  # noqa: F401
