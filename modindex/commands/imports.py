"""
Import commands for modindex.
"""

import click

from ..cli_utils import add_common_options, standard_command
from ..database import get_imported_by, get_imports


@click.command('imports')
@click.argument('path')
@click.argument('version')
@add_common_options('pretty', 'format', 'fields', 'timeout')
@standard_command
def imports_handler(path: str, version: str, db, qctx):
    """
    List the packages imported by PATH at VERSION.

    \b
    Examples:
        modindex imports example.com/mod/foo v1.2.0
    """
    return get_imports(db, path, version, ctx=qctx)


@click.command('importedby')
@click.argument('path')
@add_common_options('pretty', 'format', 'fields', 'timeout')
@standard_command
def importedby_handler(path: str, db, qctx):
    """
    List the packages that import PATH.

    \b
    Examples:
        modindex importedby example.com/mod/foo
    """
    return [{'path': from_path} for from_path in get_imported_by(db, path, ctx=qctx)]
