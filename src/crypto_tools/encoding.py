import base64
import re
import urllib.parse

from crypto_tools.errors import InvalidEncodingError


TEXT_ENCODING = "utf-8"

# quote() always leaves letters, digits and "_.-~" alone.
URL_SAFE_CHARS = "!*'()"

_HEX_PATTERN = re.compile(r"(?:[0-9a-fA-F]{2})*")
_BAD_PERCENT_ESCAPE = re.compile(r"%(?![0-9a-fA-F]{2})")


def as_bytes(text: str) -> bytes:
    """Encode text as UTF-8. Lone surrogates are not valid Unicode text."""
    try:
        return text.encode(TEXT_ENCODING)
    except UnicodeEncodeError as e:
        raise InvalidEncodingError(f"Input is not valid Unicode text: {e.reason}") from e


def as_text(data: bytes, source: str) -> str:
    """Decode bytes produced by a decoder, refusing anything but UTF-8."""
    try:
        return data.decode(TEXT_ENCODING)
    except UnicodeDecodeError as e:
        raise InvalidEncodingError(f"Decoded {source} is not valid UTF-8 text") from e


def b64_encode(text: str) -> str:
    """UTF-8 encode the text and return standard, padded Base64."""
    return base64.b64encode(as_bytes(text)).decode("ascii")


def b64_decode_bytes(b64_text: str) -> bytes:
    """Strictly decode standard Base64: alphabet, padding and length are all checked."""
    try:
        return base64.b64decode(b64_text, validate=True)
    except ValueError as e:
        # binascii.Error for bad digits/padding, plain ValueError for non-ASCII input.
        raise InvalidEncodingError(f"Invalid Base64 input: {e}") from e


def b64_decode(b64_text: str) -> str:
    return as_text(b64_decode_bytes(b64_text), "Base64")


def url_encode(text: str) -> str:
    """Percent-encode everything outside A-Z a-z 0-9 - _ . ! ~ * ' ( )."""
    return urllib.parse.quote(as_bytes(text), safe=URL_SAFE_CHARS)


def url_decode(text: str) -> str:
    """Reverse percent-escapes. Every % must start a two digit hex escape."""
    bad = _BAD_PERCENT_ESCAPE.search(text)
    if bad:
        raise InvalidEncodingError(f"Malformed percent-escape at position {bad.start()}")
    return as_text(urllib.parse.unquote_to_bytes(as_bytes(text)), "URL escape")


def hex_encode(text: str) -> str:
    return as_bytes(text).hex()


def hex_decode(hex_text: str) -> str:
    """Decode an even length hex string, either case, with no separators."""
    if not _HEX_PATTERN.fullmatch(hex_text):
        raise InvalidEncodingError("Invalid hex input: expected pairs of hex digits")
    return as_text(bytes.fromhex(hex_text), "hex")
