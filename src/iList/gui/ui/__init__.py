"""Qt user interface for iList."""
