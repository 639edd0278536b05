"""**sqltrace** configures what an OpenTelemetry database tracing middleware records."""

from __future__ import annotations

from ._internal.config_params import load_trace_options
from ._internal.options import (
    TRACE_ALL,
    TraceOption,
    TraceOptions,
    apply_trace_options,
    with_allow_root,
    with_last_insert_id,
    with_options,
    with_ping,
    with_query,
    with_query_params,
    with_rows_affected,
    with_rows_close,
    with_rows_next,
    with_transaction,
)
from .exceptions import SqlTraceConfigError
from .version import VERSION

__version__ = VERSION

__all__ = (
    'TRACE_ALL',
    'TraceOption',
    'TraceOptions',
    'apply_trace_options',
    'with_options',
    'with_allow_root',
    'with_transaction',
    'with_ping',
    'with_rows_next',
    'with_rows_close',
    'with_rows_affected',
    'with_last_insert_id',
    'with_query',
    'with_query_params',
    'load_trace_options',
    'SqlTraceConfigError',
    '__version__',
)
