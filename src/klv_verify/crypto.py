from nacl.exceptions import BadSignatureError
from nacl.signing import SigningKey, VerifyKey

from klv_core.checksum import Checksum
from klv_core.errors import ChecksumMismatch


class Ed25519Signature(Checksum):
    """Detached Ed25519 signature as the envelope trailer.

    Sealing needs the signing key. Opening works with either key; with only
    the public key there is nothing to recompute, so a failure reports
    ``computed=None``.
    """

    name = "ed25519"
    width = 64

    def __init__(self, signing_key: bytes | None = None, verify_key: bytes | None = None):
        if signing_key is None and verify_key is None:
            raise ValueError("Ed25519Signature needs a signing key or a verify key")
        self.signing_key = SigningKey(signing_key) if signing_key is not None else None
        if verify_key is not None:
            self.verify_key = VerifyKey(verify_key)
        else:
            self.verify_key = self.signing_key.verify_key

    def compute(self, payload: bytes) -> bytes:
        if self.signing_key is None:
            raise ValueError("Signing requires the Ed25519 private seed")
        return self.signing_key.sign(bytes(payload)).signature

    def verify(self, payload: bytes, trailer: bytes) -> None:
        try:
            self.verify_key.verify(bytes(payload), bytes(trailer))
        except BadSignatureError:
            computed = self.compute(payload) if self.signing_key is not None else None
            raise ChecksumMismatch(trailer, computed) from None
