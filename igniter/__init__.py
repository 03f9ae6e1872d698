"""Igniter restaurant ordering platform."""

__version__ = "0.1.0"
