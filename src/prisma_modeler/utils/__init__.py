"""Utility functions for common operations."""

from .state_io import dump_state_json, load_state_from_json, save_state_to_json

__all__ = ["dump_state_json", "load_state_from_json", "save_state_to_json"]
