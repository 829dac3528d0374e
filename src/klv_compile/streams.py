from __future__ import annotations

from pathlib import Path

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from klv_core.fields import inspect_packet

FIELDS_SCHEMA = pa.schema(
    [
        ("tag", pa.int64()),
        ("offset", pa.int64()),
        ("length", pa.int64()),
        ("value_hex", pa.string()),
    ]
)


def fields_frame(payload: bytes, key_length: int) -> pd.DataFrame:
    """One row per raw field, in wire order."""
    _, raw_fields = inspect_packet(payload, key_length)
    rows = [
        {
            "tag": int(f.tag),
            "offset": int(f.offset),
            "length": int(f.length),
            "value_hex": f.value.hex(),
        }
        for f in raw_fields
    ]
    return pd.DataFrame(rows, columns=FIELDS_SCHEMA.names)


def write_fields_parquet(df: pd.DataFrame, out_path: Path) -> Path:
    """Write ``out_path/fields.parquet`` and return its path."""
    out_path = Path(out_path)
    out_path.mkdir(parents=True, exist_ok=True)

    table = pa.Table.from_pandas(df, schema=FIELDS_SCHEMA, preserve_index=False)
    target = out_path / "fields.parquet"
    pq.write_table(table, target)
    return target
