import pytest

from crypto_tools.encoding import (
    b64_decode,
    b64_encode,
    hex_decode,
    hex_encode,
    url_decode,
    url_encode,
)
from crypto_tools.errors import InvalidEncodingError
from crypto_tools.models import FailureKind


UNICODE_SAMPLES = [
    "",
    "Hello Kartik",
    "héllo wörld",
    "日本語のテキスト",
    "emoji 🌍🔐 outside the BMP",
    "line one\nline two\ttabbed\x00nul",
    "a b&c=d/e?f#g%h+i",
]


class TestBase64:
    """Test suite for the Unicode-safe Base64 codec"""

    def test_encode_ascii(self):
        """Test encoding plain ASCII"""
        assert b64_encode("Hello Kartik") == "SGVsbG8gS2FydGlr"

    def test_encode_multibyte(self):
        """Test that multi-byte characters are encoded from their UTF-8 bytes"""
        assert b64_encode("é") == "w6k="

    def test_encode_empty(self):
        """Test encoding the empty string"""
        assert b64_encode("") == ""

    @pytest.mark.parametrize("text", UNICODE_SAMPLES)
    def test_round_trip(self, text):
        """Test that decoding an encoded string gives it back"""
        assert b64_decode(b64_encode(text)) == text

    def test_decode_padded(self):
        """Test decoding input with padding"""
        assert b64_decode("w6k=") == "é"

    @pytest.mark.parametrize("bad", [
        "not base64!!",
        "abc",
        "SGVsbG8=SGVs",
        "SGVs bG8=",
        "=SGV",
        "SGVsbG8-",
        "w6k=é",
    ])
    def test_decode_malformed(self, bad):
        """Test that bad alphabet, padding or length is rejected"""
        with pytest.raises(InvalidEncodingError) as exc_info:
            b64_decode(bad)
        assert exc_info.value.kind == FailureKind.INVALID_ENCODING

    def test_decode_not_utf8(self):
        """Test that well-formed Base64 of non UTF-8 bytes is rejected"""
        with pytest.raises(InvalidEncodingError, match="not valid UTF-8"):
            b64_decode("/w==")

    def test_encode_lone_surrogate(self):
        """Test that text with an unpaired surrogate is rejected"""
        with pytest.raises(InvalidEncodingError):
            b64_encode("bad \ud800 text")


class TestUrl:
    """Test suite for the URL codec"""

    def test_unreserved_untouched(self):
        """Test that the unreserved characters are left alone"""
        unreserved = "AZaz09-_.!~*'()"
        assert url_encode(unreserved) == unreserved

    def test_reserved_escaped(self):
        """Test that reserved characters are escaped with uppercase hex"""
        assert url_encode("a b&c=d/e?") == "a%20b%26c%3Dd%2Fe%3F"
        assert url_encode("#+%") == "%23%2B%25"

    def test_multibyte_escaped(self):
        """Test that non-ASCII characters are escaped per UTF-8 byte"""
        assert url_encode("é") == "%C3%A9"
        assert url_encode("🌍") == "%F0%9F%8C%8D"

    @pytest.mark.parametrize("text", UNICODE_SAMPLES)
    def test_round_trip(self, text):
        """Test that decoding an encoded string gives it back"""
        assert url_decode(url_encode(text)) == text

    def test_decode_lowercase_escapes(self):
        """Test that lowercase hex digits are accepted"""
        assert url_decode("%c3%a9") == "é"

    def test_decode_plus_is_literal(self):
        """Test that '+' is not treated as a space"""
        assert url_decode("a+b") == "a+b"

    def test_decode_passes_plain_text(self):
        """Test that text without escapes is returned as is"""
        assert url_decode("héllo") == "héllo"

    @pytest.mark.parametrize("bad", ["%", "%2", "abc%zz", "100%", "%G1"])
    def test_decode_malformed_escape(self, bad):
        """Test that a % without two hex digits is rejected"""
        with pytest.raises(InvalidEncodingError, match="percent-escape"):
            url_decode(bad)

    def test_decode_not_utf8(self):
        """Test that escapes forming invalid UTF-8 are rejected"""
        with pytest.raises(InvalidEncodingError, match="not valid UTF-8"):
            url_decode("%FF%FE")


class TestHex:
    """Test suite for the hex codec"""

    def test_encode(self):
        """Test encoding to lowercase hex"""
        assert hex_encode("hi") == "6869"
        assert hex_encode("é") == "c3a9"

    @pytest.mark.parametrize("text", UNICODE_SAMPLES)
    def test_round_trip(self, text):
        """Test that decoding an encoded string gives it back"""
        assert hex_decode(hex_encode(text)) == text

    def test_decode_uppercase(self):
        """Test that uppercase hex digits are accepted"""
        assert hex_decode("C3A9") == "é"

    @pytest.mark.parametrize("bad", ["zz", "abc", "68 69", "0x6869", "68\n"])
    def test_decode_malformed(self, bad):
        """Test that odd length, separators and non-hex digits are rejected"""
        with pytest.raises(InvalidEncodingError, match="hex digits"):
            hex_decode(bad)

    def test_decode_not_utf8(self):
        """Test that bytes which are not UTF-8 are rejected"""
        with pytest.raises(InvalidEncodingError, match="not valid UTF-8"):
            hex_decode("ff")
