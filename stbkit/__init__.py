"""Skyline rectangle packing and a headless text-editing engine with undo/redo."""

__version__ = "0.1.0"
__all__ = ["rectpack", "buffer", "undo", "layout", "editor"]