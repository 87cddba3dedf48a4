"""TSV file loader."""
import csv

import pandas as pd

from email_waterfall_core.ingest.loaders.base import BaseLoader


class TSVLoader(BaseLoader):
    """Loader for TSV (tab-separated values) files."""

    name = "tsv"

    def detect(self, head: bytes, suffix: str) -> bool:
        if suffix != ".tsv":
            return False
        text = head.decode("utf-8", errors="replace")
        first_line = text.split("\n")[0]
        # TSV should have at least one tab in the header
        if "\t" not in first_line:
            return False
        try:
            list(csv.reader([first_line], delimiter="\t"))
            return True
        except csv.Error:
            return False

    def read(self, file_path: str, options: dict) -> pd.DataFrame:
        try:
            return pd.read_csv(
                file_path,
                sep="\t",
                dtype=str,
                keep_default_na=False,
                encoding=options.get("encoding", "utf-8"),
                skip_blank_lines=True,
                on_bad_lines="skip",
            )
        except pd.errors.EmptyDataError as e:
            raise ValueError("TSV file is empty") from e
        except Exception as e:
            raise ValueError(f"TSV parsing error: {e}") from e
