# records.py
from typing import Dict, List, Optional, Sequence

Record = Dict[str, Optional[str]]


def rows_to_records(values: Optional[Sequence[Sequence[str]]]) -> List[Record]:
    """Turn a Sheets ``values`` grid into one dict per data row.

    The first row is the header. Cells are paired with header fields by
    position: a short row yields None for its missing trailing fields, and
    cells past the end of the header are dropped. Values are not coerced or
    trimmed. Repeated header names keep the last cell.
    """
    if not values:
        return []
    header = list(values[0])
    records = []
    for row in values[1:]:
        record = {}
        for i, field in enumerate(header):
            record[field] = row[i] if i < len(row) else None
        records.append(record)
    return records
