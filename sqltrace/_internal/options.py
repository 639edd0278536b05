from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Callable, Iterable

from typing_extensions import TypeAlias


@dataclass
class TraceOptions:
    """Options for the sqltrace tracing middleware.

    All options default to `False` when creating a wrapped driver. That is the most sensible default
    with both performance and security in mind: nothing is traced and no query data is captured
    until explicitly opted in.

    Treat instances as immutable once built, see [`apply_trace_options`][sqltrace.apply_trace_options].
    """

    allow_root: bool = False
    """Allow the creation of root spans in absence of an existing parent span.

    By default database calls are not traced if no parent span is found in the current context,
    or when using driver methods which don't take a context.
    """

    transaction: bool = False
    """Create spans for the duration of database transactions.

    All spans created by the transaction's scoped queries become children of the transaction span.
    """

    ping: bool = False
    """Create spans on ping requests."""

    rows_next: bool = False
    """Create spans for each step of iterating over a result set. This can result in many spans."""

    rows_close: bool = False
    """Create spans when a result set is closed."""

    rows_affected: bool = False
    """Create spans on rows affected calls."""

    last_insert_id: bool = False
    """Create spans on last insert id calls."""

    query: bool = False
    """Record SQL queries on spans.

    Only enable this if it is safe to have queries recorded with respect to security.
    """

    query_params: bool = False
    """Record the parameters used with parametrized queries.

    Only enable this if it is safe to have parameters recorded with respect to security.
    This setting is a noop if `query` is `False`.
    """

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        """Names of all the options, in declaration order."""
        return tuple(f.name for f in dataclasses.fields(cls))

    def enabled(self) -> tuple[str, ...]:
        """Names of the options that are set to `True`."""
        return tuple(name for name in self.field_names() if getattr(self, name))


TraceOption: TypeAlias = Callable[[TraceOptions], None]
"""Adjusts a `TraceOptions` accumulator in place. Create these with the `with_*` functions."""

TRACE_ALL = TraceOptions(
    allow_root=True,
    transaction=True,
    ping=True,
    rows_next=True,
    rows_close=True,
    rows_affected=True,
    last_insert_id=True,
    query=True,
    query_params=True,
)
"""`TraceOptions` with every option enabled."""


def apply_trace_options(options: Iterable[TraceOption] = (), base: TraceOptions | None = None) -> TraceOptions:
    """Build the effective `TraceOptions` from a sequence of options.

    Each option is applied in order to a copy of `base`, so later options override earlier ones
    on the fields they both touch. Neither `base` nor any value passed to `with_options` is modified.

    Combinations of options are not checked here, e.g. `with_query_params(True)` without
    `with_query(True)` is accepted and simply has no effect on what gets recorded.

    Args:
        options: The options to apply.
        base: The value to start from. Defaults to `TraceOptions()`, i.e. everything disabled.
    """
    result = dataclasses.replace(base) if base is not None else TraceOptions()
    for option in options:
        option(result)
    return result


def with_options(options: TraceOptions) -> TraceOption:
    """Set all the options at once from a single `TraceOptions` object, e.g. `with_options(TRACE_ALL)`."""

    def apply(o: TraceOptions) -> None:
        for name in TraceOptions.field_names():
            setattr(o, name, getattr(options, name))

    return apply


def _field_setter(name: str, value: bool) -> TraceOption:
    def apply(o: TraceOptions) -> None:
        setattr(o, name, value)

    return apply


def with_allow_root(b: bool) -> TraceOption:
    """If `True`, allow the creation of root spans in absence of an existing parent span.

    By default database calls are not traced if no parent span is found in the current context,
    or when using driver methods which don't take a context.
    """
    return _field_setter('allow_root', b)


def with_transaction(b: bool) -> TraceOption:
    """If `True`, create spans for the duration of database transactions.

    All spans created by the transaction's scoped queries become children of the transaction span.
    """
    return _field_setter('transaction', b)


def with_ping(b: bool) -> TraceOption:
    """If `True`, create spans on ping requests."""
    return _field_setter('ping', b)


def with_rows_next(b: bool) -> TraceOption:
    """If `True`, create spans for each step of iterating over a result set. This can result in many spans."""
    return _field_setter('rows_next', b)


def with_rows_close(b: bool) -> TraceOption:
    """If `True`, create spans when a result set is closed."""
    return _field_setter('rows_close', b)


def with_rows_affected(b: bool) -> TraceOption:
    """If `True`, create spans on rows affected calls."""
    return _field_setter('rows_affected', b)


def with_last_insert_id(b: bool) -> TraceOption:
    """If `True`, create spans on last insert id calls."""
    return _field_setter('last_insert_id', b)


def with_query(b: bool) -> TraceOption:
    """If `True`, record SQL queries on spans.

    Only enable this if it is safe to have queries recorded with respect to security.
    """
    return _field_setter('query', b)


def with_query_params(b: bool) -> TraceOption:
    """If `True`, record the parameters used with parametrized queries.

    Only enable this if it is safe to have parameters recorded with respect to security.
    This is a noop unless `with_query(True)` is also applied.
    """
    return _field_setter('query_params', b)
