import json
import subprocess
import sys
from pathlib import Path

import pyarrow.parquet as pq
from click.testing import CliRunner

from klv_compile.cli import main as compile_main
from klv_core.envelope import seal_envelope
from klv_core.fields import pack_fields
from klv_verify.cli import main as verify_main
from klv_verify.crypto import Ed25519Signature

KEY = bytes.fromhex("060e2b34020b01010e01030101000000")
PAYLOAD = KEY + pack_fields([(2, b"\x00" * 8), (65, b"\x01"), (200, b"xyz")])

REPO = Path(__file__).resolve().parents[1]


def write_packet(tmp_path: Path, data: bytes) -> Path:
    p = tmp_path / "packet.klv"
    p.write_bytes(data)
    return p


def test_verify_pass_reports_fields(tmp_path):
    p = write_packet(tmp_path, seal_envelope(PAYLOAD))
    r = CliRunner().invoke(verify_main, ["packet", str(p), "--key", KEY.hex()])
    assert r.exit_code == 0, r.output
    result = json.loads(r.output)
    assert result["status"] == "PASS"
    assert result["universal_key"].startswith("06.0E.2B.34")
    assert [f["tag"] for f in result["fields"]] == [2, 65, 200]


def test_verify_wrong_key(tmp_path):
    p = write_packet(tmp_path, seal_envelope(PAYLOAD))
    r = CliRunner().invoke(verify_main, ["packet", str(p), "--key", "06.0E.2B.34.00.00.00.00.00.00.00.00.00.00.00.00"])
    assert r.exit_code == 1
    assert json.loads(r.output)["errors"][0]["code"] == "E_KEY_MISMATCH"


def test_corrupted_packet_fails_checksum(tmp_path):
    p = write_packet(tmp_path, seal_envelope(PAYLOAD))
    r = subprocess.run(
        [sys.executable, str(REPO / "scripts" / "corrupt_one_byte.py"), str(p)],
        check=False,
        capture_output=True,
        text=True,
    )
    assert r.returncode == 0, r.stderr + r.stdout

    r = CliRunner().invoke(verify_main, ["packet", str(p), "--key-length", "16"])
    assert r.exit_code == 1
    error = json.loads(r.output)["errors"][0]
    assert error["code"] == "E_CHECKSUM_MISMATCH"
    assert error["checksum"] == "crc32"


def test_verify_signed_packet(tmp_path):
    signer = Ed25519Signature(signing_key=bytes(range(32)))
    p = write_packet(tmp_path, seal_envelope(PAYLOAD, signer))
    pub = bytes(signer.verify_key).hex()
    r = CliRunner().invoke(
        verify_main, ["packet", str(p), "--checksum", "ed25519", "--pubkey", pub, "--key-length", "16"]
    )
    assert r.exit_code == 0, r.output


def test_verify_needs_key_or_length(tmp_path):
    p = write_packet(tmp_path, seal_envelope(PAYLOAD))
    r = CliRunner().invoke(verify_main, ["packet", str(p)])
    assert r.exit_code != 0


def test_compile_writes_field_table(tmp_path):
    p = write_packet(tmp_path, seal_envelope(PAYLOAD))
    out = tmp_path / "out"
    r = CliRunner().invoke(compile_main, [str(p), str(out)])
    assert r.exit_code == 0, r.output
    assert "Fields: 3" in r.output

    table = pq.read_table(out / "fields.parquet").to_pydict()
    assert table["tag"] == [2, 65, 200]
    assert table["offset"] == [16, 26, 29]
    assert table["value_hex"][2] == b"xyz".hex()


def test_compile_fails_closed_on_bad_checksum(tmp_path):
    p = write_packet(tmp_path, PAYLOAD + b"\x00\x00\x00\x00")
    r = CliRunner().invoke(compile_main, [str(p), str(tmp_path / "out")])
    assert r.exit_code == 1
    assert r.output.startswith("FATAL:")
