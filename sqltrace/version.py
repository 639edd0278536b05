"""The version of the sqltrace package."""

from __future__ import annotations

VERSION = '0.1.0'
