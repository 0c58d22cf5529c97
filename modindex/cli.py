#!/usr/bin/env python3

from pathlib import Path
from typing import Optional

import click

from modindex.config import configure_logging, load_config
from modindex.commands.packages import package_handler, packages_handler, licenses_handler
from modindex.commands.versions import versions_handler, module_handler
from modindex.commands.imports import imports_handler, importedby_handler
from modindex.commands.info import info_handler


@click.group()
@click.version_option(package_name='modindex')
@click.option('--db', 'db_path', type=click.Path(dir_okay=False),
              help='Path to the index database (overrides MODINDEX_DB and database.path)')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, db_path: Optional[str], debug: bool):
    """modindex - Version resolution over a module package index.

    Answers "what is the latest version", lists tagged and pseudo versions
    across major-version module series, and shows package licenses, all
    read-only from a SQLite index.
    """
    config = load_config()
    configure_logging(config, debug=debug)
    ctx.obj = {
        'config': config,
        'db_path': Path(db_path).expanduser() if db_path else None,
    }


# Lookups
cli.add_command(package_handler)
cli.add_command(packages_handler)
cli.add_command(module_handler)
cli.add_command(versions_handler)
cli.add_command(licenses_handler)
cli.add_command(imports_handler)
cli.add_command(importedby_handler)

# Index
cli.add_command(info_handler)


def main():
    cli()

if __name__ == "__main__":
    main()
