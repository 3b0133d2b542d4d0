from cryptography.hazmat.primitives import hashes


def sha256(text: str) -> str:
    """ Returns the SHA-256 digest of the UTF-8 encoded text as 64 lowercase hex chars.
    Never fails: lone surrogates are hashed as their surrogatepass encoding.
    """
    digest = hashes.Hash(hashes.SHA256())
    digest.update(text.encode("utf-8", "surrogatepass"))
    return digest.finalize().hex()
