"""Data models used by iList."""
