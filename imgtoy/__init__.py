"""Randomised image effect settings, palettes and dither patterns resolved from configuration data."""

__version__ = "0.1.0"