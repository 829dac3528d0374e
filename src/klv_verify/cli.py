import json
from pathlib import Path
import click
from klv_core.checksum import CHECKSUMS, get_checksum
from klv_core.keys import key_from_hex
from .crypto import Ed25519Signature
from .logic import verify_packet

CHECKSUM_CHOICES = sorted(CHECKSUMS) + ["ed25519", "none"]

def _resolve_checksum(name: str, pubkey: str | None):
    if name == "none":
        return None
    if name == "ed25519":
        if pubkey is None:
            raise click.UsageError("--checksum ed25519 needs --pubkey")
        return Ed25519Signature(verify_key=bytes.fromhex(pubkey))
    return get_checksum(name)

@click.group()
def main():
    pass

@main.command("packet")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--checksum", "checksum_name", type=click.Choice(CHECKSUM_CHOICES), default="crc32", show_default=True)
@click.option("--key", "key_hex", help="Expected universal key as hex, e.g. 06.0E.2B.34...")
@click.option("--key-length", type=int, help="Universal key length when no --key is given")
@click.option("--pubkey", help="Ed25519 publisher key as hex")
def packet_cmd(path: Path, checksum_name: str, key_hex: str | None, key_length: int | None, pubkey: str | None):
    if key_hex is None and key_length is None:
        raise click.UsageError("Give --key or --key-length")
    checksum = _resolve_checksum(checksum_name, pubkey)
    expected = key_from_hex(key_hex) if key_hex else None
    result = verify_packet(path.read_bytes(), checksum, universal_key=expected, key_length=key_length)
    click.echo(json.dumps(result, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    if result["status"] != "PASS":
        raise SystemExit(1)

if __name__ == "__main__":
    main()
