from dataclasses import dataclass
from typing import Dict, Optional

from crypto_tools.models import Operation, TransformRequest


@dataclass(frozen=True, slots=True)
class Example:
    """A ready-made request used to show what a tool does."""

    title: str
    operation: Operation
    payload: str
    passphrase: Optional[str] = None

    def request(self) -> TransformRequest:
        return TransformRequest(
            operation=self.operation,
            payload=self.payload,
            passphrase=self.passphrase,
        )


EXAMPLES: Dict[str, Example] = {
    "base64": Example("Base64 Example", Operation.BASE64_ENCODE, "Hello Kartik"),
    "aes": Example("AES Example", Operation.AES_ENCRYPT, "Secret text", "mypassword"),
    "sha256": Example("SHA256 Example", Operation.SHA256, "password"),
}
