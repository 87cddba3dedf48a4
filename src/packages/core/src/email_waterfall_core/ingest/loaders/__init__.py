"""File loaders for CSV and TSV."""
from email_waterfall_core.ingest.loaders.base import BaseLoader
from email_waterfall_core.ingest.loaders.csv import CSVLoader
from email_waterfall_core.ingest.loaders.tsv import TSVLoader

__all__ = ["BaseLoader", "CSVLoader", "TSVLoader"]
