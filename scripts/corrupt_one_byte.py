import sys
from pathlib import Path

def main():
    if len(sys.argv) not in (2, 3):
        print("Usage: corrupt_one_byte.py <packet> [offset]")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    b = bytearray(p.read_bytes())
    if not b:
        print("Packet is empty, nothing to corrupt.")
        raise SystemExit(2)

    # Default to the first byte after a 16-byte universal key, which is the
    # first field tag in a SMPTE-keyed packet.
    idx = int(sys.argv[2]) if len(sys.argv) == 3 else min(16, len(b) - 1)
    b[idx] ^= 0x01
    p.write_bytes(bytes(b))
    print(f"Corrupted 1 byte at offset {idx} in {p}")

if __name__ == "__main__":
    main()
