from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field


class Operation(str, Enum):
    BASE64_ENCODE = "base64-encode"
    BASE64_DECODE = "base64-decode"
    URL_ENCODE = "url-encode"
    URL_DECODE = "url-decode"
    HEX_ENCODE = "hex-encode"
    HEX_DECODE = "hex-decode"
    SHA256 = "sha256"
    AES_ENCRYPT = "aes-encrypt"
    AES_DECRYPT = "aes-decrypt"

    def __str__(self):
        return self.value

    @property
    def requires_passphrase(self) -> bool:
        return self in (Operation.AES_ENCRYPT, Operation.AES_DECRYPT)


class FailureKind(str, Enum):
    INVALID_ENCODING = "invalid-encoding"
    WRONG_KEY_OR_CORRUPT_CIPHERTEXT = "wrong-key-or-corrupt-ciphertext"
    MISSING_PASSPHRASE = "missing-passphrase"

    def __str__(self):
        return self.value


class TransformRequest(BaseModel):
    operation: Operation
    payload: str
    passphrase: Optional[str] = None


class Success(BaseModel):
    status: Literal["success"] = "success"
    text: str

    @property
    def ok(self) -> bool:
        return True


class Failure(BaseModel):
    status: Literal["failure"] = "failure"
    kind: FailureKind
    message: str

    @property
    def ok(self) -> bool:
        return False


TransformResult = Annotated[Union[Success, Failure], Field(discriminator="status")]
