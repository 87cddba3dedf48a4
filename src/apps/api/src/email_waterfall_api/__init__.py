"""HTTP API for email waterfall validation."""
