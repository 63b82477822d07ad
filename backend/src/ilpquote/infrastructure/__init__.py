"""
Infrastructure package - adapters for data files and wire formats.
"""
