import hashlib

import pytest

from klv_core.checksum import Checksum, Crc16A, Crc32, MisbBcc, Sha256Digest, get_checksum
from klv_core.envelope import open_envelope, seal_envelope
from klv_core.errors import ChecksumMismatch, TruncatedEnvelope
from klv_verify.crypto import Ed25519Signature

PAYLOAD = b"TESTDATA00000000\x0a\x01\x7f\x3c\x03abc"


@pytest.mark.parametrize(
    "checksum, expected",
    [
        (Crc32(), "cbf43926"),
        (Crc16A(), "bf05"),
        (Sha256Digest(4), hashlib.sha256(b"123456789").hexdigest()[:8]),
    ],
)
def test_checksum_check_values(checksum, expected):
    assert checksum.compute(b"123456789").hex() == expected


def test_misb_bcc_reference_vector():
    assert MisbBcc().compute(bytes.fromhex("060e2b34020081bb")) == b"\xb4\xfd"


@pytest.mark.parametrize("name", ["crc32", "crc16-a", "misb-bcc", "sha256"])
def test_round_trip_every_registered_checksum(name):
    checksum = get_checksum(name)
    sealed = seal_envelope(PAYLOAD, checksum)
    assert len(sealed) == len(PAYLOAD) + checksum.width
    assert open_envelope(sealed, checksum) == PAYLOAD


def test_default_is_four_byte_crc32():
    sealed = seal_envelope(PAYLOAD)
    assert sealed[-4:] == Crc32().compute(PAYLOAD)
    assert open_envelope(sealed) == PAYLOAD


def test_empty_payload():
    assert seal_envelope(b"") == b"\x00\x00\x00\x00"
    assert open_envelope(b"\x00\x00\x00\x00") == b""


def test_every_single_byte_flip_is_detected():
    sealed = seal_envelope(PAYLOAD)
    for i in range(len(sealed)):
        corrupted = bytearray(sealed)
        corrupted[i] ^= 0xFF
        with pytest.raises(ChecksumMismatch):
            open_envelope(bytes(corrupted))


def test_mismatch_carries_both_values():
    sealed = bytearray(seal_envelope(PAYLOAD))
    sealed[0] ^= 0x01
    with pytest.raises(ChecksumMismatch) as exc:
        open_envelope(bytes(sealed))
    assert exc.value.expected == bytes(sealed[-4:])
    assert exc.value.computed == Crc32().compute(bytes(sealed[:-4]))


def test_truncated_envelope():
    with pytest.raises(TruncatedEnvelope):
        open_envelope(b"\x00\x01\x02")


def test_unknown_checksum_name():
    with pytest.raises(ValueError):
        get_checksum("md5")
    with pytest.raises(ValueError):
        Sha256Digest(33)


def test_checksum_must_honour_its_width():
    class Liar(Checksum):
        name = "liar"
        width = 4

        def compute(self, payload):
            return b"\x00"

    with pytest.raises(ValueError):
        seal_envelope(PAYLOAD, Liar())


SEED = bytes(range(32))


def test_ed25519_seal_and_open_with_public_key():
    signer = Ed25519Signature(signing_key=SEED)
    sealed = seal_envelope(PAYLOAD, signer)
    assert len(sealed) == len(PAYLOAD) + 64

    verifier = Ed25519Signature(verify_key=bytes(signer.verify_key))
    assert open_envelope(sealed, verifier) == PAYLOAD


def test_ed25519_tamper_reports_mismatch():
    signer = Ed25519Signature(signing_key=SEED)
    sealed = bytearray(seal_envelope(PAYLOAD, signer))
    sealed[3] ^= 0x10

    verifier = Ed25519Signature(verify_key=bytes(signer.verify_key))
    with pytest.raises(ChecksumMismatch) as exc:
        open_envelope(bytes(sealed), verifier)
    assert exc.value.computed is None

    with pytest.raises(ChecksumMismatch) as exc:
        open_envelope(bytes(sealed), signer)
    assert exc.value.computed == signer.compute(bytes(sealed[:-64]))


def test_ed25519_needs_a_key():
    with pytest.raises(ValueError):
        Ed25519Signature()


def test_checksum_base_is_abstract():
    with pytest.raises(TypeError):
        Checksum()
