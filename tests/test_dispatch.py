import logging

import pytest

from dbss_verify.codecs import EnvelopeCodec, FramedCodec, FramedJsonCodec
from dbss_verify.dispatch import Verdict, VerifyOutcome, verify
from dbss_verify.request import VerificationRequest
from dbss_verify.scheme import VerificationError
from dbss_verify.settings import get_settings


class ScriptedVerifier:
    def __init__(self, accept: bool):
        self.accept = accept
        self.calls = []

    def verify(self, message, signature, gpk):
        self.calls.append((message, signature, gpk))
        if not self.accept:
            raise VerificationError("scripted reject")


def _request(codec, gpk, signature, message=b"hoge"):
    return codec.encode(
        VerificationRequest(
            message=message,
            signature=codec.dump_signature(signature),
            gpk=codec.dump_gpk(gpk),
        )
    )


@pytest.mark.parametrize("codec", [EnvelopeCodec(), FramedCodec(), FramedJsonCodec()])
def test_scripted_accept_and_reject(codec, gpk, hoge_signature):
    data = _request(codec, gpk, hoge_signature, message=b"msg\nwith newline")
    yes = ScriptedVerifier(True)
    assert verify(data, codec=codec, verifier=yes) == VerifyOutcome.verified()
    message, signature, key = yes.calls[0]
    assert message == b"msg\nwith newline"
    assert signature == hoge_signature
    assert key == gpk

    outcome = verify(data, codec=codec, verifier=ScriptedVerifier(False))
    assert outcome.verdict is Verdict.REJECTED
    assert not outcome.ok


@pytest.mark.parametrize(
    "codec,data",
    [
        (FramedCodec(), b"a single line with no separators"),
        (FramedCodec(), b"@@@\n@@@\nmessage"),
        (FramedJsonCodec(), b"{}\n{}\nmessage"),
        (EnvelopeCodec(), b"\x81\xa7"),
    ],
)
def test_malformed_never_reaches_verifier(codec, data):
    fake = ScriptedVerifier(True)
    outcome = verify(data, codec=codec, verifier=fake)
    assert outcome.verdict is Verdict.MALFORMED
    assert outcome.reason
    assert fake.calls == []


def test_corrupted_signature_is_malformed_not_rejected(gpk, hoge_signature):
    codec = FramedCodec()
    data = b"!!notbase64\n" + codec.dump_gpk(gpk).encode() + b"\nhoge"
    outcome = verify(data, codec=codec, verifier=ScriptedVerifier(False))
    assert outcome.verdict is Verdict.MALFORMED
    assert "signature" in outcome.reason


def test_malformed_logged_below_warning(caplog):
    caplog.set_level(logging.DEBUG, logger="dbss_verify.dispatch")
    outcome = verify(b"no separators", codec=FramedCodec(), verifier=ScriptedVerifier(True))
    assert outcome.verdict is Verdict.MALFORMED
    records = [r for r in caplog.records if r.name == "dbss_verify.dispatch"]
    assert [r.levelno for r in records] == [logging.DEBUG]
    assert "not enough inputs" in records[0].getMessage()


def test_default_codec_follows_settings(monkeypatch, gpk, hoge_signature):
    monkeypatch.setattr(get_settings(), "dbss_wire_format", "framed")
    data = _request(FramedCodec(), gpk, hoge_signature)
    assert verify(data, verifier=ScriptedVerifier(True)).ok


def test_real_verifier_end_to_end(gpk, hoge_signature):
    codec = EnvelopeCodec()
    ok = _request(codec, gpk, hoge_signature, message=b"hoge")
    ng = _request(codec, gpk, hoge_signature, message=b"fuga")
    assert verify(ok, codec=codec) == VerifyOutcome.verified()
    assert verify(ng, codec=codec).verdict is Verdict.REJECTED


def test_verify_is_deterministic(gpk, hoge_signature):
    codec = FramedCodec()
    data = _request(codec, gpk, hoge_signature, message=b"fuga")
    first = verify(data, codec=codec)
    assert verify(data, codec=codec) == first
