"""
Output format utilities for modindex CLI commands.

Provides functions to format data as CSV, TSV, YAML, JSON, and JSONL.
"""

import csv
import io
import json
from typing import Any, Dict, Iterator, List, Optional

import yaml

FORMATS = ('json', 'jsonl', 'csv', 'tsv', 'yaml')


def format_output(data: Iterator[Dict[str, Any]], format: str,
                  fields: Optional[List[str]] = None) -> Iterator[str]:
    """
    Format data according to the specified format.

    Args:
        data: Iterator of dictionaries to format
        format: Output format (json, jsonl, csv, tsv, yaml)
        fields: Optional list of fields to include (for CSV/TSV)

    Yields:
        Formatted strings for output
    """
    if format == "jsonl":
        yield from format_jsonl(data)
    elif format == "json":
        yield from format_json(data)
    elif format == "csv":
        yield from format_delimited(data, fields, delimiter=',')
    elif format == "tsv":
        yield from format_delimited(data, fields, delimiter='\t')
    elif format == "yaml":
        yield from format_yaml(data)
    else:
        raise ValueError(f"Unknown format: {format}")


def format_jsonl(data: Iterator[Dict[str, Any]]) -> Iterator[str]:
    """Format data as JSON Lines (one JSON object per line)."""
    for item in data:
        yield json.dumps(item, ensure_ascii=False, default=str)


def format_json(data: Iterator[Dict[str, Any]]) -> Iterator[str]:
    """Format data as a single JSON array."""
    yield json.dumps(list(data), ensure_ascii=False, indent=2, default=str)


def format_yaml(data: Iterator[Dict[str, Any]]) -> Iterator[str]:
    """Format data as YAML."""
    yield yaml.safe_dump(list(data), default_flow_style=False, allow_unicode=True, sort_keys=False)


def format_delimited(data: Iterator[Dict[str, Any]], fields: Optional[List[str]] = None,
                     delimiter: str = ',') -> Iterator[str]:
    """
    Format data as CSV or TSV.

    Args:
        data: Iterator of dictionaries
        fields: Optional list of fields to include. If None, uses every
            (flattened) field seen in the data, sorted.
        delimiter: Field delimiter
    """
    rows = [flatten_dict(item) for item in data]
    if not rows:
        return

    if fields is None:
        all_fields: set[str] = set()
        for row in rows:
            all_fields.update(row.keys())
        fields = sorted(all_fields)

    output = io.StringIO()
    writer = csv.DictWriter(output, fieldnames=fields, delimiter=delimiter, extrasaction='ignore')
    writer.writeheader()
    writer.writerows(rows)
    yield output.getvalue()


def flatten_dict(d: Dict[str, Any], parent_key: str = '', sep: str = '.') -> Dict[str, Any]:
    """
    Flatten a nested dictionary.

    Example:
        {'a': {'b': 1, 'c': 2}} -> {'a.b': 1, 'a.c': 2}

    Lists of scalars become comma-separated strings; lists of objects become
    a ``<key>_count`` column.
    """
    items: list[tuple[str, Any]] = []
    for k, v in d.items():
        new_key = f"{parent_key}{sep}{k}" if parent_key else k

        if isinstance(v, dict):
            items.extend(flatten_dict(v, new_key, sep=sep).items())
        elif isinstance(v, list):
            if v and not isinstance(v[0], (dict, list)):
                items.append((new_key, ', '.join(str(item) for item in v)))
            else:
                items.append((new_key + '_count', len(v)))
        else:
            items.append((new_key, v))

    return dict(items)
