"""
Webooks - bookmark manager access control and cache versioning.
"""

__version__ = "0.1.0"
