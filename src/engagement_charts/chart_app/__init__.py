"""Standalone NiceGUI app rendering the three engagement charts."""
