"""
Common CLI utilities and decorators for consistent command behavior.
"""

import logging
import sys
from functools import wraps
from pathlib import Path
from typing import Any, Dict, Optional

import click

from .config import load_config
from .database import Database, QueryContext
from .errors import InconsistencyError, InvalidArgumentError, ModIndexError, NotFoundError
from .exit_codes import SUCCESS, CommandError, ConfigError, get_exit_code_for_exception
from .format_utils import FORMATS
from .output import emit, emit_error

logger = logging.getLogger(__name__)


def get_config() -> Dict[str, Any]:
    """Configuration loaded by the cli group, or freshly loaded."""
    ctx = click.get_current_context(silent=True)
    if ctx is not None and isinstance(ctx.obj, dict) and 'config' in ctx.obj:
        return ctx.obj['config']
    return load_config()


def get_db_override() -> Optional[Path]:
    """Database path given with --db, which takes precedence over MODINDEX_DB."""
    ctx = click.get_current_context(silent=True)
    if ctx is not None and isinstance(ctx.obj, dict):
        return ctx.obj.get('db_path')
    return None


def make_query_context(config: Dict[str, Any], timeout: Any = None) -> QueryContext:
    """QueryContext with the command-line timeout, or the configured one (0 = none)."""
    if timeout is None:
        timeout = config.get('query', {}).get('timeout_seconds', 0)
    try:
        seconds = float(timeout)
    except (TypeError, ValueError):
        raise ConfigError(f"invalid query.timeout_seconds: {timeout!r}")
    return QueryContext(timeout=seconds if seconds > 0 else None)


def _log_failure(exc: Exception) -> None:
    if isinstance(exc, (NotFoundError, InvalidArgumentError)):
        logger.debug(str(exc))
    elif isinstance(exc, InconsistencyError):
        logger.error(f"Data inconsistency: {exc}")
    else:
        logger.error(f"Command failed: {exc}")


def standard_command(func):
    """
    Decorator that provides standard CLI behavior:
    - Opens the index read-only and injects it as ``db``
    - Injects a QueryContext as ``qctx`` (deadline from --timeout or config)
    - Emits the returned items as JSONL (or --format / --pretty)
    - Maps errors to JSON on stderr and a specific exit code
    """

    @wraps(func)
    def wrapper(*args, **kwargs):
        pretty = kwargs.pop('pretty', False)
        output_format = kwargs.pop('format', None)
        fields_str = kwargs.pop('fields', None)
        timeout = kwargs.pop('timeout', None)
        fields = fields_str.split(',') if fields_str else None

        try:
            config = get_config()
            if output_format is None:
                output_format = config.get('output', {}).get('format', 'jsonl')
            if output_format not in FORMATS:
                raise CommandError(f"unknown output format: {output_format}")

            qctx = make_query_context(config, timeout)
            with Database(db_path=get_db_override(), config=config, read_only=True) as db:
                result = func(*args, db=db, qctx=qctx, **kwargs)
                items = result if isinstance(result, (list, tuple)) else [result]
                emit(items, pretty=pretty, format=output_format, fields=fields)

        except KeyboardInterrupt as e:
            emit_error("Interrupted by user", type="KeyboardInterrupt")
            sys.exit(get_exit_code_for_exception(e))
        except click.ClickException:
            # Click exceptions already have their exit code
            raise
        except CommandError as e:
            logger.error(str(e))
            emit_error(str(e), type=type(e).__name__, exit_code=e.exit_code)
            sys.exit(e.exit_code)
        except ModIndexError as e:
            code = get_exit_code_for_exception(e)
            _log_failure(e)
            emit_error(str(e), type=type(e).__name__, exit_code=code)
            sys.exit(code)

        sys.exit(SUCCESS)

    return wrapper


# Standard options that many commands share
common_options = {
    'pretty': click.option('--pretty', is_flag=True,
                           help='Display results as a formatted table'),
    'format': click.option('-f', '--format',
                           type=click.Choice(list(FORMATS)),
                           help='Output format (default: jsonl, or output.format from config)'),
    'fields': click.option('--fields',
                           help='Comma-separated list of fields to include (for CSV/TSV)'),
    'timeout': click.option('--timeout', type=float,
                            help='Query deadline in seconds (default: query.timeout_seconds)'),
}


def add_common_options(*option_names):
    """
    Decorator to add common options to a command.

    Example:
        @add_common_options('pretty', 'format')
        def my_command(pretty, format):
            ...
    """
    def decorator(func):
        for name in reversed(option_names):
            if name in common_options:
                func = common_options[name](func)
        return func
    return decorator
