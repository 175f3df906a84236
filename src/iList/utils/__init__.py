"""Small helpers shared by the command line and GUI entry points."""
