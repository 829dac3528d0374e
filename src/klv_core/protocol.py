"""KLV protocol constants.

Single source of truth for wire-level markers and size limits.
Keep this file stable. Encoder and decoder must remain synchronized.
"""

# VarLen octets (BER definite-length rules)
SHORT_FORM_MAX = 127  # Largest value stored directly in one byte
LONG_FORM_FLAG = 0x80  # High bit set: low bits hold the byte count
LONG_FORM_MASK = 0x7F
INDEFINITE_OCTET = 0x80  # BER indefinite length, not used by KLV
RESERVED_OCTET = 0xFF  # BER reserved

# Decoded lengths and tags must fit in an unsigned 64-bit integer
MAX_LONG_FORM_OCTETS = 8
MAX_VARLEN_VALUE = (1 << (8 * MAX_LONG_FORM_OCTETS)) - 1

# SMPTE 336M universal labels are 16 bytes
SMPTE_UL_LEN = 16

# Envelope defaults
DEFAULT_CHECKSUM = "crc32"
CRC32_WIDTH = 4

# Duplicate tags: last occurrence wins unless strict decoding is requested
DEFAULT_STRICT = False
