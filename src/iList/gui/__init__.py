"""Presentation layer: pure view-models and their Qt host widgets."""
