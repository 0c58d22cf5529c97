"""
Package commands for modindex.

Look up a package at a version (or its latest version), every package of the
module version containing it, and the licenses that apply to it.
"""

from typing import Optional

import click

from ..cli_utils import add_common_options, standard_command
from ..database import get_latest_package, get_licenses, get_package, get_version_for_package


@click.command('package')
@click.argument('path')
@click.argument('version', required=False)
@add_common_options('pretty', 'format', 'fields', 'timeout')
@standard_command
def package_handler(path: str, version: Optional[str], db, qctx):
    """
    Show a package at VERSION, or at its latest version.

    \b
    Examples:
        modindex package example.com/mod/foo v1.2.0
        modindex package example.com/mod/v2/foo      # latest
    """
    if version is None:
        return get_latest_package(db, path, ctx=qctx)
    return get_package(db, path, version, ctx=qctx)


@click.command('packages')
@click.argument('path')
@click.argument('version')
@click.option('--flat', is_flag=True, help='One record per package instead of one per version')
@add_common_options('pretty', 'format', 'fields', 'timeout')
@standard_command
def packages_handler(path: str, version: str, flat: bool, db, qctx):
    """
    Show the module version containing PATH with all of its packages.

    Packages are listed in ascending path order.

    \b
    Examples:
        modindex packages example.com/mod/foo v1.2.0
        modindex packages example.com/mod/foo v1.2.0 --flat --pretty
    """
    module_version = get_version_for_package(db, path, version, ctx=qctx)
    if flat:
        return list(module_version.packages)
    return module_version


@click.command('licenses')
@click.argument('path')
@click.argument('version')
@click.option('--contents', is_flag=True, help='Include license file contents')
@add_common_options('pretty', 'format', 'fields', 'timeout')
@standard_command
def licenses_handler(path: str, version: str, contents: bool, db, qctx):
    """
    List the licenses of a package, most specific license file first.

    \b
    Examples:
        modindex licenses example.com/mod/foo v1.2.0
        modindex licenses example.com/mod/foo v1.2.0 --contents
    """
    licenses = get_licenses(db, path, version, ctx=qctx)
    if contents:
        return licenses
    return [lic.metadata for lic in licenses]
