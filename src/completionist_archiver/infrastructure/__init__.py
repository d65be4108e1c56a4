"""Infrastructure layer — remote reference data and recorded command streams."""
