import pytest

from soapbridge.codec.charset import CharsetCodec, from_wire, get_codec, normalize_charset, to_wire
from soapbridge.utils.exceptions import ConfigurationError


def test_utf8_native_charset_is_identity_in_both_directions() -> None:
    codec = CharsetCodec("UTF-8")
    assert codec.identity is True
    assert codec.to_wire("Jöhn") == "Jöhn"
    assert codec.from_wire("Jöhn") == "Jöhn"
    assert codec.to_wire(b"raw") == b"raw"


def test_charset_aliases_are_case_insensitive() -> None:
    assert normalize_charset("UTF8") == "utf-8"
    assert normalize_charset("utf_8") == "utf-8"
    assert normalize_charset("ISO-8859-1") == normalize_charset("latin-1")
    assert CharsetCodec("Utf8").identity is True


def test_latin1_round_trip_between_native_bytes_and_wire_text() -> None:
    codec = CharsetCodec("iso-8859-1")
    assert codec.identity is False
    assert codec.to_wire(b"J\xf6hn") == "Jöhn"
    assert codec.from_wire("Jöhn") == b"J\xf6hn"


def test_ascii_survives_round_trip_under_single_byte_charset() -> None:
    codec = CharsetCodec("iso-8859-1")
    assert codec.from_wire(codec.to_wire(b"plain ascii 123")) == b"plain ascii 123"


def test_str_input_is_taken_as_text_on_the_way_out() -> None:
    assert CharsetCodec("iso-8859-1").to_wire("Jöhn") == "Jöhn"


def test_unrepresentable_characters_are_transliterated_not_fatal() -> None:
    codec = CharsetCodec("ascii")
    assert codec.from_wire("Café “quoted” – Łódź") == b'Cafe "quoted" - Lodz'
    assert codec.from_wire("ﬁne") == b"fine"
    assert codec.from_wire("Ω") == b"?"


def test_latin1_keeps_what_it_can_represent() -> None:
    codec = CharsetCodec("iso-8859-1")
    assert codec.from_wire("Straße €5") == "Straße EUR5".encode("iso-8859-1")


def test_undecodable_native_bytes_are_substituted() -> None:
    assert CharsetCodec("ascii").to_wire(b"a\xffb") == "a�b"


def test_unknown_charset_is_rejected() -> None:
    with pytest.raises(ConfigurationError) as err:
        CharsetCodec("klingon-8")
    assert err.value.code == "CONFIG_ERROR"
    assert err.value.details == {"field": "charset"}


def test_module_helpers_reuse_cached_codecs() -> None:
    assert get_codec("iso-8859-1") is get_codec("iso-8859-1")
    assert to_wire(b"\xe9", "iso-8859-1") == "é"
    assert from_wire("é", "iso-8859-1") == b"\xe9"
    assert from_wire("é", "utf-8") == "é"
