"""Base loader interface."""
from abc import ABC, abstractmethod
from typing import Any

import pandas as pd

from email_waterfall_core.ingest.normalize import normalize_record


class BaseLoader(ABC):
    """Abstract base class for tabular file loaders."""

    name: str = ""

    @abstractmethod
    def detect(self, head: bytes, suffix: str) -> bool:
        """Detect if this loader can handle the file."""
        pass

    @abstractmethod
    def read(self, file_path: str, options: dict) -> pd.DataFrame:
        """Read the file into a string-typed frame."""
        pass

    def load_table(
        self, file_path: str, options: dict
    ) -> tuple[list[str], list[dict[str, Any]]]:
        """Load headers and all records from the file."""
        df = self.read(file_path, options).fillna("")
        headers = [str(c) for c in df.columns]
        records = [normalize_record(r) for r in df.to_dict("records")]
        # Drop rows where every cell is blank.
        records = [r for r in records if any(v != "" for v in r.values())]
        return headers, records
