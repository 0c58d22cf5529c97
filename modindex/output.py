"""
Output module for modindex.

Provides consistent output formatting across all commands:
- Structured (default): JSONL, or json/yaml/csv/tsv via format_utils
- Pretty: Human-readable tables using Rich

Usage:
    from modindex.output import emit, emit_error

    emit(versions, pretty=True)
    emit_error("package not found", type="NotFoundError", context={"path": "x"})
"""

import json
import sys
from typing import Any, Dict, Iterable, List, Optional

from rich.console import Console
from rich.table import Table

from .format_utils import format_output


def to_record(item: Any) -> Dict[str, Any]:
    """Convert a domain object, dict, or scalar to an output record."""
    if hasattr(item, 'to_dict'):
        return item.to_dict()
    if isinstance(item, dict):
        return item
    return {'value': str(item)}


def emit(
    items: Iterable[Any],
    pretty: bool = False,
    format: str = 'jsonl',
    columns: Optional[List[str]] = None,
    fields: Optional[List[str]] = None,
) -> None:
    """
    Emit items as structured text or a pretty table.

    Args:
        items: Items to emit (domain objects with to_dict(), or dicts)
        pretty: If True, render as table
        format: Structured format when not pretty (jsonl, json, yaml, csv, tsv)
        columns: Column names for table (auto-detected if None)
        fields: Fields to include for csv/tsv
    """
    records = (to_record(item) for item in items)
    if pretty:
        _emit_table(list(records), columns)
    else:
        for line in format_output(records, format, fields):
            print(line, flush=True)


def _emit_table(rows: List[Dict[str, Any]], columns: Optional[List[str]] = None) -> None:
    """Emit rows as a Rich table."""
    console = Console()
    if not rows:
        console.print("[yellow]No results found[/yellow]")
        return

    if not columns:
        columns = _auto_columns(rows)

    table = Table(show_header=True, header_style="bold")
    for col in columns:
        table.add_column(col)
    for row in rows:
        table.add_row(*[_format_value(row.get(col, '')) for col in columns])

    console.print(table)


def _auto_columns(rows: List[Dict]) -> List[str]:
    """Auto-detect columns from rows."""
    preferred = ['path', 'module_path', 'version', 'version_type', 'commit_time', 'name', 'type', 'file_path']

    all_keys = set(rows[0].keys())
    columns = [col for col in preferred if col in all_keys]
    for key in sorted(all_keys):
        if key not in columns:
            columns.append(key)

    # Limit to reasonable number
    return columns[:8]


def _format_value(value: Any, max_len: int = 50) -> str:
    """Format a value for table display."""
    if value is None:
        return ''
    if isinstance(value, bool):
        return 'Yes' if value else 'No'
    if isinstance(value, list):
        s = ', '.join(
            v.get('file_path', '{...}') if isinstance(v, dict) else str(v)
            for v in value[:3]
        )
        if len(value) > 3:
            s += f' (+{len(value) - 3} more)'
        return s
    if isinstance(value, dict):
        return '{...}'

    s = str(value)
    if len(s) > max_len:
        return s[:max_len-3] + '...'
    return s


def emit_error(
    error: str,
    type: str = "error",
    context: Optional[Dict[str, Any]] = None,
    exit_code: Optional[int] = None,
) -> None:
    """
    Emit error to stderr as JSON.

    Args:
        error: Error message
        type: Error type (e.g., "NotFoundError")
        context: Additional context dict
        exit_code: Exit code the command is about to return
    """
    obj: Dict[str, Any] = {
        'error': error,
        'type': type
    }
    if exit_code is not None:
        obj['exit_code'] = exit_code
    if context:
        obj['context'] = context

    print(json.dumps(obj, ensure_ascii=False), file=sys.stderr, flush=True)
