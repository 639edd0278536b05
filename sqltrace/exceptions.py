"""Exceptions raised by sqltrace."""

from __future__ import annotations

__all__ = ['SqlTraceConfigError']


class SqlTraceConfigError(ValueError):
    """Error raised when there is a problem with the sqltrace configuration."""
