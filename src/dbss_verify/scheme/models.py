"""JSON documents for the legacy text encoding of signatures and group keys.

Byte fields are lowercase hex; the documents serialize to a single line so
they can travel inside a newline-framed request.
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .bbs import Signature
from .curve import SchemeDecodeError
from .keys import GroupPublicKey

_HEX = r"^[0-9a-f]*$"


class _Document(BaseModel):
    model_config = ConfigDict(extra="forbid")

    @classmethod
    def parse(cls, text: str):
        try:
            return cls.model_validate_json(text)
        except ValidationError as e:
            raise SchemeDecodeError(f"{cls.__name__}: {e.error_count()} validation error(s)") from e


class SignatureDocument(_Document):
    t1: str = Field(pattern=_HEX)
    t2: str = Field(pattern=_HEX)
    t3: str = Field(pattern=_HEX)
    c: str = Field(pattern=_HEX)
    s_alpha: str = Field(pattern=_HEX)
    s_beta: str = Field(pattern=_HEX)
    s_x: str = Field(pattern=_HEX)
    s_delta1: str = Field(pattern=_HEX)
    s_delta2: str = Field(pattern=_HEX)

    @classmethod
    def from_signature(cls, sig: Signature) -> "SignatureDocument":
        return cls(**dict(zip(cls.model_fields, (b.hex() for b in sig.to_wire()))))

    def to_signature(self) -> Signature:
        # odd-length hex still fails here
        try:
            wire = tuple(bytes.fromhex(getattr(self, name)) for name in type(self).model_fields)
        except ValueError as e:
            raise SchemeDecodeError(f"signature: {e}") from e
        return Signature.from_wire(wire)


class ManagerKeyDocument(_Document):
    index: int = Field(ge=0)
    w: str = Field(pattern=_HEX)


class GroupPublicKeyDocument(_Document):
    h: str = Field(pattern=_HEX)
    u: str = Field(pattern=_HEX)
    v: str = Field(pattern=_HEX)
    w: str = Field(pattern=_HEX)
    managers: list[ManagerKeyDocument]

    @classmethod
    def from_key(cls, gpk: GroupPublicKey) -> "GroupPublicKeyDocument":
        h, u, v, w, managers = gpk.to_wire()
        return cls(
            h=h.hex(),
            u=u.hex(),
            v=v.hex(),
            w=w.hex(),
            managers=[ManagerKeyDocument(index=i, w=mw.hex()) for i, mw in managers],
        )

    def to_key(self) -> GroupPublicKey:
        try:
            wire = (
                bytes.fromhex(self.h),
                bytes.fromhex(self.u),
                bytes.fromhex(self.v),
                bytes.fromhex(self.w),
                tuple((m.index, bytes.fromhex(m.w)) for m in self.managers),
            )
        except ValueError as e:
            raise SchemeDecodeError(f"gpk: {e}") from e
        return GroupPublicKey.from_wire(wire)


__all__ = ["SignatureDocument", "ManagerKeyDocument", "GroupPublicKeyDocument"]
