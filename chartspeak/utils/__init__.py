"""Utility helpers for the ChartSpeak backend."""

from .text import strip_markup, to_data_url

__all__ = ["strip_markup", "to_data_url"]
