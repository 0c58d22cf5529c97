"""
Info command for modindex.

Shows where the index lives and how much it holds.
"""

import sys

import click

from ..cli_utils import get_config, get_db_override
from ..database import get_database_info
from ..errors import StorageError
from ..exit_codes import get_exit_code_for_exception
from ..output import emit, emit_error


@click.command('info')
@click.option('--pretty', is_flag=True, help='Display as a formatted table')
def info_handler(pretty: bool):
    """
    Show database location, schema version and row counts.

    \b
    Examples:
        modindex info
        MODINDEX_DB=/tmp/index.db modindex info --pretty
    """
    try:
        info = get_database_info(get_config(), db_path=get_db_override())
    except StorageError as e:
        code = get_exit_code_for_exception(e)
        emit_error(str(e), type=type(e).__name__, exit_code=code)
        sys.exit(code)
    emit([info], pretty=pretty)
