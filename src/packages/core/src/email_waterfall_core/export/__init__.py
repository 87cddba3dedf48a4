"""Export of validated jobs."""
from email_waterfall_core.export.enriched import (
    ENRICHMENT_COLUMNS,
    enriched_file_name,
    enriched_rows,
    to_enriched_csv,
)

__all__ = ["ENRICHMENT_COLUMNS", "enriched_file_name", "enriched_rows", "to_enriched_csv"]
