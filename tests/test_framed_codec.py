import base64

import pytest

from dbss_verify.codecs import FramedCodec, FramedJsonCodec, get_codec
from dbss_verify.errors import SubObjectDecodeError, TooFewFields
from dbss_verify.request import VerificationRequest


def _sample():
    return VerificationRequest(message=b"someMessage", signature="someSignature", gpk="someGpk")


def test_convert_to_correct_bytes():
    assert FramedCodec().encode(_sample()) == b"someSignature\nsomeGpk\nsomeMessage"


def test_can_parse_params():
    codec = FramedCodec()
    data = codec.encode(_sample())
    assert codec.decode(data) == _sample()
    assert codec.encode(codec.decode(data)) == data


def test_message_keeps_newlines_and_raw_bytes():
    codec = FramedCodec()
    data = b"sig\ngpk\nline one\nline two\n\x00\xff\n"
    req = codec.decode(data)
    assert req.signature == "sig"
    assert req.gpk == "gpk"
    assert req.message == b"line one\nline two\n\x00\xff\n"
    assert codec.decode(codec.encode(req)) == req


def test_empty_message_after_two_separators():
    req = FramedCodec().decode(b"sig\ngpk\n")
    assert req.message == b""


@pytest.mark.parametrize("data", [b"", b"single line", b"sig\ngpk"])
def test_too_few_fields(data):
    with pytest.raises(TooFewFields):
        FramedCodec().decode(data)


def test_invalid_utf8_is_replaced_not_rejected():
    req = FramedCodec().decode(b"\xffsig\ngpk\nmsg")
    assert req.signature == "\ufffdsig"


def test_encode_refuses_newline_in_text_field():
    req = VerificationRequest(message=b"m", signature="a\nb", gpk="g")
    with pytest.raises(ValueError):
        FramedCodec().encode(req)


def test_invalid_base64_signature_is_sub_object_error():
    with pytest.raises(SubObjectDecodeError) as exc:
        FramedCodec().load_signature("not base64 !!")
    assert exc.value.which == "signature"


def test_base64_of_garbage_is_sub_object_error():
    blob = base64.b64encode(b"\x93\x01\x02\x03").decode()
    with pytest.raises(SubObjectDecodeError) as exc:
        FramedCodec().load_gpk(blob)
    assert exc.value.which == "gpk"


def test_base64_of_non_msgpack_is_sub_object_error():
    blob = base64.b64encode(b"\xc1").decode()
    with pytest.raises(SubObjectDecodeError):
        FramedCodec().load_signature(blob)


def test_sub_objects_roundtrip(gpk, hoge_signature):
    codec = FramedCodec()
    sig_text = codec.dump_signature(hoge_signature)
    gpk_text = codec.dump_gpk(gpk)
    assert "\n" not in sig_text and "\n" not in gpk_text
    assert codec.load_signature(sig_text) == hoge_signature
    assert codec.load_gpk(gpk_text) == gpk


def test_json_sub_objects_roundtrip(gpk, hoge_signature):
    codec = FramedJsonCodec()
    data = codec.encode(
        VerificationRequest(
            message=b"hoge",
            signature=codec.dump_signature(hoge_signature),
            gpk=codec.dump_gpk(gpk),
        )
    )
    req = codec.decode(data)
    assert codec.load_signature(req.signature) == hoge_signature
    assert codec.load_gpk(req.gpk) == gpk


@pytest.mark.parametrize("text", ["{", "[]", '{"t1": "zz"}'])
def test_bad_json_signature_is_sub_object_error(text):
    with pytest.raises(SubObjectDecodeError) as exc:
        FramedJsonCodec().load_signature(text)
    assert exc.value.which == "signature"


def test_codecs_are_looked_up_by_name():
    assert get_codec("framed").name == "framed"
    assert get_codec("framed-json").name == "framed-json"
    with pytest.raises(KeyError):
        get_codec("auto")
