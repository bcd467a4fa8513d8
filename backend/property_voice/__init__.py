"""Voice-to-structured-data extraction for real estate listings."""
