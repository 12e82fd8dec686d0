"""
Date parsing and normalization module.

Handles locale resolution, shortcut and free-form date parsing, canonical
timestamp encoding, relative navigation and display formatting.
"""
