"""Version information command"""

import platform
import sys
from importlib.metadata import PackageNotFoundError, version as package_version

import click

from ... import __version__

DEPENDENCIES = ['click', 'aiohttp', 'tenacity', 'PyYAML', 'python-dotenv']


@click.command()
def version():
    """Show scangate version and system information"""
    click.echo("SCANGATE")
    click.echo("=" * 50)

    click.echo(f"\nVersion Information:")
    click.echo(f"   scangate Version: {__version__}")

    click.echo(f"\nSystem Information:")
    click.echo(f"   Python Version: {sys.version.split()[0]}")
    click.echo(f"   Platform: {platform.platform()}")
    click.echo(f"   Architecture: {platform.architecture()[0]}")

    click.echo(f"\nDependencies:")
    for name in DEPENDENCIES:
        try:
            click.echo(f"   - {name}: {package_version(name)}")
        except PackageNotFoundError:
            click.echo(f"   - {name}: missing")
