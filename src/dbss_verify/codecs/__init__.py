"""Request codecs, selected by name; formats are never sniffed."""
from __future__ import annotations

from .base import Codec
from .envelope import EnvelopeCodec
from .framed import FramedCodec, FramedJsonCodec

CODECS: dict[str, Codec] = {
    codec.name: codec for codec in (EnvelopeCodec(), FramedCodec(), FramedJsonCodec())
}


def get_codec(name: str) -> Codec:
    try:
        return CODECS[name]
    except KeyError:
        raise KeyError(f"unknown wire format {name!r}; expected one of {sorted(CODECS)}") from None


__all__ = ["Codec", "CODECS", "get_codec", "EnvelopeCodec", "FramedCodec", "FramedJsonCodec"]
