from klv_core.checksum import Checksum
from klv_core.envelope import open_envelope
from klv_core.errors import KLVError, UniversalKeyMismatch
from klv_core.fields import inspect_packet
from klv_core.keys import format_key
from .const import ERRORS

def _fail(err: KLVError, **detail) -> dict:
    entry = {"code": err.code, "message": ERRORS.get(err.code, ERRORS["E_KLV"]), "detail": str(err)}
    entry.update(detail)
    return {"status": "FAIL", "error_count": 1, "errors": [entry], "fields": []}

def verify_packet(
    buf: bytes,
    checksum: Checksum | None,
    universal_key: bytes | None = None,
    key_length: int | None = None,
) -> dict:
    # Checksum first: a corrupted payload must never reach the field walker.
    if checksum is not None:
        try:
            payload = open_envelope(buf, checksum)
        except KLVError as e:
            return _fail(e, checksum=checksum.name)
    else:
        payload = bytes(buf)

    if universal_key is not None:
        key_length = len(universal_key)
    if key_length is None:
        raise ValueError("verify_packet needs universal_key or key_length")

    try:
        key, raw_fields = inspect_packet(payload, key_length)
    except KLVError as e:
        return _fail(e)

    if universal_key is not None and key != universal_key:
        return _fail(UniversalKeyMismatch(universal_key, key), expected=format_key(universal_key), actual=format_key(key))

    return {
        "status": "PASS",
        "error_count": 0,
        "errors": [],
        "universal_key": format_key(key),
        "fields": [{"tag": f.tag, "offset": f.offset, "length": f.length} for f in raw_fields],
    }
