import pytest

from blake3_session.core.encoding import decode_hex, encode_hex


def test_encode_hex_lowercase():
    assert encode_hex(b"\x00\xab\xff") == "00abff"


def test_encode_hex_empty():
    assert encode_hex(b"") == ""


def test_encode_hex_accepts_bytearray():
    assert encode_hex(bytearray(b"\x10")) == "10"


@pytest.mark.parametrize("text", ["00ABff", " 00abff\n"])
def test_decode_hex(text):
    assert decode_hex(text) == b"\x00\xab\xff"


def test_decode_hex_odd_length():
    with pytest.raises(ValueError, match="even length"):
        decode_hex("abc")


@pytest.mark.parametrize("text", ["zz", "0g", "éé"])
def test_decode_hex_invalid_characters(text):
    with pytest.raises(ValueError, match="Invalid hex"):
        decode_hex(text)
