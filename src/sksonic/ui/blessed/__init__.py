"""Blessed-based full-screen interface."""

from .app import run_interface

__all__ = ["run_interface"]
