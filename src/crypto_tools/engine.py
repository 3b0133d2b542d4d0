"""Stateless dispatch from a TransformRequest to the codec and cipher functions.

Every call builds its own intermediate values and discards them; nothing is
cached between calls. Library errors are turned into Failure results here, so
callers only ever see a Success or a Failure.
"""
from typing import Callable, Dict, Optional

from pydantic import ValidationError
import structlog

from crypto_tools import crypto, digest, encoding
from crypto_tools.errors import MissingPassphraseError, TransformError
from crypto_tools.models import (
    Failure,
    FailureKind,
    Operation,
    Success,
    TransformRequest,
    TransformResult,
)


log = structlog.get_logger()

TextFn = Callable[[str], str]
CipherFn = Callable[[str, str], str]

UNICODE_ERROR_TYPE = "string_unicode"

TEXT_OPERATIONS: Dict[Operation, TextFn] = {
    Operation.BASE64_ENCODE: encoding.b64_encode,
    Operation.BASE64_DECODE: encoding.b64_decode,
    Operation.URL_ENCODE: encoding.url_encode,
    Operation.URL_DECODE: encoding.url_decode,
    Operation.HEX_ENCODE: encoding.hex_encode,
    Operation.HEX_DECODE: encoding.hex_decode,
    Operation.SHA256: digest.sha256,
}

CIPHER_OPERATIONS: Dict[Operation, CipherFn] = {
    Operation.AES_ENCRYPT: crypto.encrypt,
    Operation.AES_DECRYPT: crypto.decrypt,
}


def _apply(request: TransformRequest) -> str:
    operation = request.operation
    if operation.requires_passphrase:
        if not request.passphrase:
            raise MissingPassphraseError(f"{operation} requires a passphrase")
        return CIPHER_OPERATIONS[operation](request.payload, request.passphrase)
    return TEXT_OPERATIONS[operation](request.payload)


def transform(request: TransformRequest) -> TransformResult:
    """Run a single transformation and return its tagged outcome."""
    try:
        text = _apply(request)
    except TransformError as e:
        log.info(
            "transform failed",
            operation=str(request.operation),
            payload_len=len(request.payload),
            kind=str(e.kind),
        )
        return Failure(kind=e.kind, message=e.message)

    log.debug(
        "transformed",
        operation=str(request.operation),
        payload_len=len(request.payload),
        output_len=len(text),
    )
    return Success(text=text)


def run(operation: Operation | str, payload: str, passphrase: Optional[str] = None) -> TransformResult:
    """Build a request from plain arguments and transform it.

    Text pydantic cannot read as Unicode (lone surrogates) is an InvalidEncoding
    failure. Any other validation error, such as an unknown operation, is raised.
    """
    try:
        request = TransformRequest(operation=operation, payload=payload, passphrase=passphrase)
    except ValidationError as e:
        if not all(error["type"] == UNICODE_ERROR_TYPE for error in e.errors()):
            raise
        log.info(
            "transform failed",
            operation=str(operation),
            kind=str(FailureKind.INVALID_ENCODING),
        )
        return Failure(kind=FailureKind.INVALID_ENCODING, message="Input is not valid Unicode text")
    return transform(request)
