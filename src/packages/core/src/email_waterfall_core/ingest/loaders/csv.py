"""CSV file loader."""
import csv

import pandas as pd

from email_waterfall_core.ingest.loaders.base import BaseLoader


class CSVLoader(BaseLoader):
    """Loader for CSV files."""

    name = "csv"

    def detect(self, head: bytes, suffix: str) -> bool:
        if suffix != ".csv":
            return False
        try:
            text = head.decode("utf-8", errors="replace")
            list(csv.reader([text.split("\n")[0]]))
            return True
        except csv.Error:
            return False

    def read(self, file_path: str, options: dict) -> pd.DataFrame:
        try:
            return pd.read_csv(
                file_path,
                dtype=str,
                keep_default_na=False,
                encoding=options.get("encoding", "utf-8"),
                skip_blank_lines=True,
                on_bad_lines="skip",
            )
        except pd.errors.EmptyDataError as e:
            raise ValueError("CSV file is empty") from e
        except Exception as e:
            raise ValueError(f"CSV parsing error: {e}") from e
