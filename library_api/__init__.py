"""
Top‑level package for the Library Book API.

All functionality lives in submodules under ``app``; the package
itself provides no public exports.
"""

__all__ = []
