"""scangate CLI Main Entry Point"""

import logging

import click

from ..config.settings import ScannerConfig
from ..core.exceptions import ConfigurationError
from .console import fatal
from .commands.extract import extract
from .commands.check import check
from .commands.scan import scan
from .commands.config import config_cmd
from .commands.version import version


def setup_logging(level: str):
    """Setup logging configuration"""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


@click.group()
@click.option('--log-level', help='Logging level (default: SCANGATE_LOG_LEVEL or INFO)')
@click.option('--env-file', help='Configuration .env file path')
@click.pass_context
def cli(ctx, log_level, env_file):
    """scangate - container image extraction and vulnerability gating

    Unpacks container image archives safely and fails scans whose reported
    vulnerabilities reach the severity threshold without being whitelisted.
    """
    try:
        config = ScannerConfig.from_env(env_file)
    except ConfigurationError as e:
        fatal("Invalid configuration", e)
    if log_level:
        config.log_level = log_level
    setup_logging(config.log_level)

    ctx.ensure_object(dict)
    ctx.obj['config'] = config


# Register commands
cli.add_command(extract)
cli.add_command(check)
cli.add_command(scan)
cli.add_command(config_cmd, name='config')
cli.add_command(version)


if __name__ == '__main__':
    cli()
