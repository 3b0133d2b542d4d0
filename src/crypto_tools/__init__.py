"""Text encoding, hashing and passphrase AES transformations."""
import structlog

from crypto_tools.config import configure_logging

if not structlog.is_configured():
    configure_logging()

from crypto_tools.engine import run, transform  # noqa: E402
from crypto_tools.models import (  # noqa: E402
    Failure,
    FailureKind,
    Operation,
    Success,
    TransformRequest,
    TransformResult,
)

__all__ = [
    "Failure",
    "FailureKind",
    "Operation",
    "Success",
    "TransformRequest",
    "TransformResult",
    "configure_logging",
    "run",
    "transform",
]
