from __future__ import annotations

from typing import Any, Callable, Protocol, TypeVar

from ..errors import SubObject, SubObjectDecodeError
from ..request import VerificationRequest
from ..scheme import GroupPublicKey, SchemeDecodeError, Signature

T = TypeVar("T")


class Codec(Protocol):
    """Wire encoding of a :class:`VerificationRequest` and its sub-objects."""

    name: str

    def decode(self, data: bytes) -> VerificationRequest: ...

    def encode(self, request: VerificationRequest) -> bytes: ...

    def load_signature(self, blob: Any) -> Signature: ...

    def load_gpk(self, blob: Any) -> GroupPublicKey: ...

    def dump_signature(self, signature: Signature) -> Any: ...

    def dump_gpk(self, gpk: GroupPublicKey) -> Any: ...


def load_sub_object(which: SubObject, blob: Any, loader: Callable[[Any], T]) -> T:
    try:
        return loader(blob)
    except SchemeDecodeError as e:
        raise SubObjectDecodeError(which, str(e)) from e
