"""Option schema and validation for list engines."""
