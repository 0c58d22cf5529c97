"""
Version commands for modindex.

List the version history of a package across its module series, and show a
single module version.
"""

from typing import Tuple

import click

from ..cli_utils import add_common_options, standard_command
from ..database import get_version, list_versions
from ..domain.query import PSEUDO_VERSION_TYPES, TAGGED_VERSION_TYPES
from ..domain.version import VersionType


@click.command('versions')
@click.argument('path')
@click.option('--pseudo', is_flag=True, help='List the 10 most recent pseudo-versions')
@click.option('--type', '-t', 'version_types', multiple=True,
              type=click.Choice([vt.value for vt in VersionType]),
              help='Version types to list (repeatable; overrides --pseudo)')
@add_common_options('pretty', 'format', 'fields', 'timeout')
@standard_command
def versions_handler(path: str, pseudo: bool, version_types: Tuple[str, ...], db, qctx):
    """
    List versions of PATH and of the same package in other major versions.

    By default lists tagged versions (releases and prereleases), newest first.
    example.com/mod/foo and example.com/mod/v2/foo share one history.

    \b
    Examples:
        modindex versions example.com/mod/v2/foo
        modindex versions example.com/mod/foo --pseudo
        modindex versions example.com/mod/foo -t release --pretty
    """
    if version_types:
        types = [VersionType(vt) for vt in version_types]
    elif pseudo:
        types = list(PSEUDO_VERSION_TYPES)
    else:
        types = list(TAGGED_VERSION_TYPES)
    return list_versions(db, path, types, ctx=qctx)


@click.command('module')
@click.argument('module_path')
@click.argument('version')
@add_common_options('pretty', 'format', 'fields', 'timeout')
@standard_command
def module_handler(module_path: str, version: str, db, qctx):
    """
    Show one module version.

    \b
    Examples:
        modindex module example.com/mod v1.2.0
    """
    return get_version(db, module_path, version, ctx=qctx)
