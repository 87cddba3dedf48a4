"""Record normalization utilities."""
from typing import Any

import pandas as pd


def normalize_value(v: Any) -> Any:
    """Normalize a cell to a JSON-serializable value."""
    if v is None or (isinstance(v, float) and pd.isna(v)):
        return ""
    if isinstance(v, str):
        return v.strip()
    if isinstance(v, (int, float, bool)):
        return v
    return str(v).strip()


def normalize_record(row: dict) -> dict[str, Any]:
    """Normalize a record dict keyed by column name."""
    return {str(k): normalize_value(v) for k, v in row.items()}
