"""Utility helpers for PhotoExpress."""
