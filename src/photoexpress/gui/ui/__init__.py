"""Widgets, controllers and workers of the main window."""
