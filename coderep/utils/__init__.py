"""Utility modules for coderep."""
