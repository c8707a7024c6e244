"""Tests for individual codec strategies."""

import base64
import json
import zlib

import msgpack
import pytest
from lzstring import LZString

from save_codec.domain.configuration import CodecConfig
from save_codec.domain.errors import EncodeFailure, StrategyInapplicable
from save_codec.domain.models import FormatTag, MimeType
from save_codec.infrastructure.codecs import (
    RPGMV_HEADER_LENGTH,
    Base64JsonStrategy,
    Base64ZlibJsonStrategy,
    LzBase64JsonStrategy,
    LzRawJsonStrategy,
    MessagePackStrategy,
    PlainJsonStrategy,
    ZlibJsonStrategy,
    default_strategies,
    strip_rpgmv_header,
)

ALL_STRATEGIES = [
    PlainJsonStrategy,
    Base64JsonStrategy,
    Base64ZlibJsonStrategy,
    LzBase64JsonStrategy,
    LzRawJsonStrategy,
    ZlibJsonStrategy,
    MessagePackStrategy,
]


def test_default_strategies_follow_probe_order():
    tags = [strategy.tag for strategy in default_strategies()]
    assert tags == [
        FormatTag.PLAIN_JSON,
        FormatTag.BASE64_JSON,
        FormatTag.BASE64_ZLIB_JSON,
        FormatTag.LZ_BASE64_JSON,
        FormatTag.LZ_RAW_JSON,
        FormatTag.ZLIB_JSON,
        FormatTag.MESSAGEPACK,
    ]


def test_default_strategies_receive_config():
    strategies = default_strategies(CodecConfig(max_decoded_bytes=99, json_indent=2))
    assert all(strategy.max_decoded_bytes == 99 for strategy in strategies)
    assert isinstance(strategies, tuple)


@pytest.mark.parametrize("strategy_cls", ALL_STRATEGIES)
def test_strategy_decodes_its_own_output(strategy_cls, sample_save):
    strategy = strategy_cls()
    assert strategy.decode(strategy.encode(sample_save)) == sample_save


SCALAR_PAYLOADS = {
    PlainJsonStrategy: b"42",
    Base64JsonStrategy: base64.b64encode(b"42"),
    Base64ZlibJsonStrategy: base64.b64encode(zlib.compress(b"42")),
    LzBase64JsonStrategy: LZString().compressToBase64("42").encode("ascii"),
    LzRawJsonStrategy: LZString().compress("42").encode("utf-8", "surrogatepass"),
    ZlibJsonStrategy: zlib.compress(b"42"),
    MessagePackStrategy: msgpack.packb(42),
}


@pytest.mark.parametrize("strategy_cls", ALL_STRATEGIES)
def test_strategy_rejects_scalar_payloads(strategy_cls):
    with pytest.raises(StrategyInapplicable):
        strategy_cls().decode(SCALAR_PAYLOADS[strategy_cls])


@pytest.mark.parametrize("strategy_cls", ALL_STRATEGIES)
@pytest.mark.parametrize("value", [42, "gold", None, True])
def test_strategy_refuses_to_encode_scalars(strategy_cls, value):
    with pytest.raises(EncodeFailure, match="expected object or array"):
        strategy_cls().encode(value)


def test_messagepack_rejects_bin_values():
    payload = msgpack.packb({"hp": 80, "blob": b"\x00\x01"}, use_bin_type=True)
    with pytest.raises(StrategyInapplicable, match="bytes value"):
        MessagePackStrategy().decode(payload)


def test_messagepack_rejects_integer_keys():
    payload = msgpack.packb({1: "a", 2: "b"})
    with pytest.raises(StrategyInapplicable, match="map key of type int"):
        MessagePackStrategy().decode(payload)


def test_messagepack_rejects_nested_ext_values():
    payload = msgpack.packb({"party": [{"tag": msgpack.ExtType(5, b"\x01")}]})
    with pytest.raises(StrategyInapplicable, match="ExtType"):
        MessagePackStrategy().decode(payload)


def test_plain_json_encoding_is_compact_and_stable():
    strategy = PlainJsonStrategy()
    assert strategy.encode({"gold": 100}) == b'{"gold":100}'
    assert strategy.encode({"title": "Café"}) == '{"title":"Café"}'.encode("utf-8")


def test_plain_json_honours_indent():
    strategy = PlainJsonStrategy(json_indent=2)
    assert strategy.encode({"gold": 100}) == b'{\n  "gold": 100\n}'


def test_plain_json_rejects_non_standard_constants():
    with pytest.raises(StrategyInapplicable, match="invalid JSON"):
        PlainJsonStrategy().decode(b'{"hp": NaN}')


def test_plain_json_rejects_binary():
    with pytest.raises(StrategyInapplicable, match="not UTF-8"):
        PlainJsonStrategy().decode(b"\x78\x9c\xff")


def test_base64_json_ignores_whitespace_and_missing_padding():
    encoded = base64.b64encode(b'{"gold":100}').decode("ascii").rstrip("=")
    wrapped = (encoded[:6] + "\n" + encoded[6:] + "\n").encode("ascii")
    assert Base64JsonStrategy().decode(wrapped) == {"gold": 100}


def test_base64_json_rejects_non_alphabet():
    with pytest.raises(StrategyInapplicable, match="invalid base64"):
        Base64JsonStrategy().decode(b'{"gold":100}')


def test_base64_json_rejects_compressed_payload():
    payload = base64.b64encode(zlib.compress(b'{"gold":100}'))
    with pytest.raises(StrategyInapplicable):
        Base64JsonStrategy().decode(payload)


def test_base64_zlib_json_decodes_deflated_payload():
    payload = base64.b64encode(zlib.compress(b'{"gold":100}'))
    assert Base64ZlibJsonStrategy().decode(payload) == {"gold": 100}


def test_lz_base64_matches_reference_compressor():
    text = json.dumps({"gold": 100})
    payload = LZString().compressToBase64(text).encode("ascii")
    assert LzBase64JsonStrategy().decode(payload) == {"gold": 100}


def test_lz_base64_rejects_plain_json():
    with pytest.raises(StrategyInapplicable):
        LzBase64JsonStrategy().decode(b'{"gold":100}')


def test_lz_raw_output_is_text():
    encoded = LzRawJsonStrategy().encode({"gold": 100, "title": "Café ☕"})
    text = encoded.decode("utf-8", "surrogatepass")
    assert json.loads(LZString().decompress(text)) == {"gold": 100, "title": "Café ☕"}


def test_lz_strategies_reject_empty_input():
    for strategy in (LzBase64JsonStrategy(), LzRawJsonStrategy()):
        with pytest.raises(StrategyInapplicable, match="empty"):
            strategy.decode(b"   ")


def test_zlib_json_strips_rpgmv_header(rpgmv_header):
    payload = rpgmv_header + zlib.compress(b'{"level":5}')
    assert ZlibJsonStrategy().decode(payload) == {"level": 5}


def test_zlib_json_encode_never_adds_header():
    encoded = ZlibJsonStrategy().encode({"level": 5})
    assert not encoded.startswith(b"RPGMV")
    assert zlib.decompress(encoded) == b'{"level":5}'


def test_zlib_json_rejects_truncated_stream():
    payload = zlib.compress(b'{"level":5, "party": [1, 2, 3, 4, 5, 6, 7, 8]}')
    with pytest.raises(StrategyInapplicable):
        ZlibJsonStrategy().decode(payload[:-6])


def test_zlib_json_enforces_size_cap():
    payload = zlib.compress(json.dumps({"blob": "x" * 1000}).encode("utf-8"))
    with pytest.raises(StrategyInapplicable, match="size limit"):
        ZlibJsonStrategy(max_decoded_bytes=100).decode(payload)


def test_lz_enforces_size_cap():
    payload = LzBase64JsonStrategy().encode({"blob": "x" * 1000})
    with pytest.raises(StrategyInapplicable, match="size limit"):
        LzBase64JsonStrategy(max_decoded_bytes=100).decode(payload)


def test_strip_rpgmv_header_rules(rpgmv_header):
    assert strip_rpgmv_header(rpgmv_header + b"x") == b"x"
    assert strip_rpgmv_header(rpgmv_header) == rpgmv_header
    assert strip_rpgmv_header(b"NOTMV" + bytes(RPGMV_HEADER_LENGTH)) == b"NOTMV" + bytes(RPGMV_HEADER_LENGTH)


def test_messagepack_decodes_map():
    payload = msgpack.packb({"hp": 80, "mp": 20})
    assert MessagePackStrategy().decode(payload) == {"hp": 80, "mp": 20}


def test_messagepack_rejects_trailing_bytes():
    payload = msgpack.packb({"hp": 80}) + b"\x00"
    with pytest.raises(StrategyInapplicable, match="MessagePack"):
        MessagePackStrategy().decode(payload)


def test_messagepack_rejects_nil():
    with pytest.raises(StrategyInapplicable, match="NoneType"):
        MessagePackStrategy().decode(msgpack.packb(None))


def test_messagepack_encode_failure_is_wrapped():
    with pytest.raises(EncodeFailure) as excinfo:
        MessagePackStrategy().encode({"items": {1, 2}})
    assert excinfo.value.tag is FormatTag.MESSAGEPACK


@pytest.mark.parametrize("strategy_cls", [PlainJsonStrategy, ZlibJsonStrategy, LzRawJsonStrategy])
def test_json_encode_failure_is_wrapped(strategy_cls):
    with pytest.raises(EncodeFailure):
        strategy_cls().encode({"ratio": float("nan")})
    with pytest.raises(EncodeFailure):
        strategy_cls().encode({"handle": object()})


def test_mime_types():
    assert PlainJsonStrategy.mime_type == MimeType.JSON
    assert Base64JsonStrategy.mime_type == MimeType.TEXT
    assert Base64ZlibJsonStrategy.mime_type == MimeType.TEXT
    assert LzBase64JsonStrategy.mime_type == MimeType.TEXT
    assert LzRawJsonStrategy.mime_type == MimeType.TEXT
    assert ZlibJsonStrategy.mime_type == MimeType.BINARY
    assert MessagePackStrategy.mime_type == MimeType.BINARY
