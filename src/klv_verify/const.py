ERRORS = {
  "E_MALFORMED_LENGTH": "Variable-length header is truncated or invalid",
  "E_MALFORMED_TAG": "Field tag could not be decoded",
  "E_LENGTH_OVERFLOW": "Length or tag exceeds the 64-bit limit",
  "E_TRUNCATED_VALUE": "Field value runs past the end of the packet",
  "E_TRUNCATED_KEY": "Packet is shorter than its universal key",
  "E_TRUNCATED_ENVELOPE": "Packet is shorter than its checksum",
  "E_KEY_MISMATCH": "Universal key does not match the expected schema",
  "E_MISSING_FIELD": "Required field absent",
  "E_FIELD_CONVERSION": "Field value rejected by its converter",
  "E_CHECKSUM_MISMATCH": "Checksum does not match payload",
  "E_DUPLICATE_TAG": "Tag occurs more than once",
  "E_SCHEMA": "Record type is not a valid KLV schema",
  "E_KLV": "KLV decoding failed",
}
