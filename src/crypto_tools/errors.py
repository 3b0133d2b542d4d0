from crypto_tools.models import FailureKind


class TransformError(ValueError):
    """Base class for failures of a single transformation call."""

    kind: FailureKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class InvalidEncodingError(TransformError):
    kind = FailureKind.INVALID_ENCODING


class MissingPassphraseError(TransformError):
    kind = FailureKind.MISSING_PASSPHRASE


class WrongKeyOrCorruptCiphertextError(TransformError):
    kind = FailureKind.WRONG_KEY_OR_CORRUPT_CIPHERTEXT
