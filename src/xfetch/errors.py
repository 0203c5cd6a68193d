"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Error types raised by xfetch.
"""

from __future__ import annotations


class XFetchError(RuntimeError):
    """Base class for xfetch errors."""


class XFetchConfigError(XFetchError, ValueError):
    """Raised when an entry or settings parameter is out of range."""
