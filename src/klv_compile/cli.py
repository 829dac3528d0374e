"""KLV Compile - packet to field table."""
from __future__ import annotations

from pathlib import Path

import click

from klv_core.checksum import CHECKSUMS, get_checksum
from klv_core.envelope import open_envelope
from klv_core.keys import format_key
from klv_core.protocol import SMPTE_UL_LEN
from klv_compile.streams import fields_frame, write_fields_parquet


def compile_packet(packet_path: Path, out_path: Path, key_length: int, checksum_name: str = "crc32") -> Path:
    """Verify a packet and write its field table."""
    buf = Path(packet_path).read_bytes()
    payload = buf if checksum_name == "none" else open_envelope(buf, get_checksum(checksum_name))

    df = fields_frame(payload, key_length)
    target = write_fields_parquet(df, out_path)

    click.echo(f"PASS: Field table written to {target}")
    click.echo(f"  Universal key: {format_key(payload[:key_length])}")
    click.echo(f"  Fields: {len(df)}")
    return target


@click.command()
@click.argument("packet", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("out", type=click.Path(path_type=Path))
@click.option("--key-length", type=int, default=SMPTE_UL_LEN, show_default=True, help="Universal key length in bytes")
@click.option(
    "--checksum",
    "checksum_name",
    type=click.Choice(sorted(CHECKSUMS) + ["none"]),
    default="crc32",
    show_default=True,
)
def main(packet: Path, out: Path, key_length: int, checksum_name: str) -> None:
    """Compile a KLV packet into a Parquet field table."""
    try:
        compile_packet(packet, out, key_length, checksum_name)
    except Exception as e:
        # Fail closed with a single-line reason.
        click.echo(f"FATAL: {e}")
        raise SystemExit(1)


if __name__ == "__main__":
    main()
