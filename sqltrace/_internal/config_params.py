from __future__ import annotations as _annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sqltrace.exceptions import SqlTraceConfigError

from . import options as options_module
from .options import TRACE_ALL, TraceOption, TraceOptions, apply_trace_options, with_options
from .utils import logger, read_toml_file

slots_true = {'slots': True} if sys.version_info >= (3, 10) else {}

ENV_PREFIX = 'SQLTRACE_'


@dataclass(**slots_true)
class ConfigParam:
    """A boolean parameter that can be configured for the tracing middleware."""

    env_vars: list[str]
    """Environment variables to check for the parameter."""
    default: bool | None = None
    """Default value if no other value is found. `None` means the option isn't set at all."""


TRACE_ALL_PARAM = ConfigParam(env_vars=[f'{ENV_PREFIX}TRACE_ALL'], default=False)
"""Whether to start from `TRACE_ALL` instead of everything disabled."""

CONFIG_PARAMS: dict[str, ConfigParam] = {
    'trace_all': TRACE_ALL_PARAM,
    **{name: ConfigParam(env_vars=[f'{ENV_PREFIX}{name.upper()}']) for name in TraceOptions.field_names()},
}


@dataclass
class ParamManager:
    """Resolve trace options from runtime values, environment variables and `pyproject.toml`."""

    config_from_file: dict[str, Any]
    """Config loaded from the `[tool.sqltrace]` table of the config file."""

    @classmethod
    def create(cls, config_dir: Path | None = None) -> ParamManager:
        config_dir = Path(config_dir or os.getenv('SQLTRACE_CONFIG_DIR') or '.')
        config_from_file = _load_config_from_file(config_dir)
        return ParamManager(config_from_file=config_from_file)

    def load_param(self, name: str, runtime: Any = None) -> bool | None:
        """Load a parameter given its name.

        The parameter is loaded in the following order:
        1. From the runtime argument, if provided.
        2. From the environment variables.
        3. From the config file.

        If none of the above is found, the default value is returned.
        Every value found is checked to be a boolean.

        Args:
            name: Name of the parameter.
            runtime: Value provided at runtime.

        Returns:
            The value of the parameter.
        """
        if runtime is not None:
            return _check_bool(runtime, name)

        param = CONFIG_PARAMS[name]
        for env_var in param.env_vars:
            value = os.getenv(env_var)
            # `None` (unset) and `''` (empty string) are generally considered the same
            if value:
                logger.debug('Using %s=%r from environment variable %s', name, value, env_var)
                return _check_bool(value, name)

        value = self.config_from_file.get(name)
        if value is not None:
            logger.debug('Using %s=%r from config file', name, value)
            return _check_bool(value, name)

        return param.default

    def trace_options(self, **runtime: bool | None) -> TraceOptions:
        """Build the effective `TraceOptions`.

        If `trace_all` is enabled the result starts from `TRACE_ALL`, then every option which has
        a value from any source overrides it individually.

        Args:
            **runtime: Values which take precedence over the environment and the config file,
                keyed by parameter name. `None` means not provided.
        """
        _check_known_options(runtime)

        trace_options: list[TraceOption] = []
        if self.load_param('trace_all', runtime.get('trace_all')):
            trace_options.append(with_options(TRACE_ALL))
        for name in TraceOptions.field_names():
            value = self.load_param(name, runtime.get(name))
            if value is not None:
                trace_options.append(getattr(options_module, f'with_{name}')(value))

        result = apply_trace_options(trace_options)
        logger.debug('Trace options enabled: %s', ', '.join(result.enabled()) or 'none')
        return result


def _check_known_options(names: Any) -> None:
    for name in names:
        if name not in CONFIG_PARAMS:
            raise SqlTraceConfigError(f'Unknown trace option: {name}')


def _check_bool(value: Any, name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value.lower() in ('1', 'true', 't'):
            return True
        if value.lower() in ('0', 'false', 'f'):
            return False
    raise SqlTraceConfigError(f'Expected {name} to be a boolean, got {value!r}')


def _load_config_from_file(config_dir: Path) -> dict[str, Any]:
    config_file = config_dir / 'pyproject.toml'
    if not config_file.exists():
        return {}
    try:
        data = read_toml_file(config_file)
        config = data.get('tool', {}).get('sqltrace', {})
    except Exception as exc:
        raise SqlTraceConfigError(f'Invalid config file: {config_file}') from exc
    if not isinstance(config, dict):
        raise SqlTraceConfigError(f'Invalid config file: {config_file}')
    _check_known_options(config)
    return config


def load_trace_options(config_dir: Path | str | None = None, **runtime: bool | None) -> TraceOptions:
    """Load `TraceOptions` from the environment and the `[tool.sqltrace]` table of `pyproject.toml`.

    Each option is read from `SQLTRACE_<NAME>` (e.g. `SQLTRACE_QUERY_PARAMS`), then from the config file.
    Set `trace_all` (or `SQLTRACE_TRACE_ALL`) to start from `TRACE_ALL`.

    Args:
        config_dir: Directory containing `pyproject.toml`.
            Defaults to the `SQLTRACE_CONFIG_DIR` environment variable, then the current directory.
        **runtime: Values which take precedence over the environment and the config file.

    Raises:
        SqlTraceConfigError: If a value isn't a valid boolean, the config file can't be parsed
            or names an unknown option, or an unknown option is passed.
    """
    return ParamManager.create(Path(config_dir) if config_dir else None).trace_options(**runtime)
