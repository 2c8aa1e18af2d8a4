"""Configuration management commands"""

import os
import click

from ...config.settings import ScannerConfig
from ...core.exceptions import ConfigurationError
from ...scoring.severity import DEFAULT_SEVERITY_TABLE
from ..console import fatal


@click.command('config')
@click.option('--show-env', is_flag=True, help='Show all environment variables')
@click.option('--validate', is_flag=True, help='Validate configuration')
@click.option('--env-file', help='Specify custom .env file path')
def config_cmd(show_env, validate, env_file):
    """Show current scangate configuration

    Example:
        scangate config
        scangate config --show-env
        scangate config --validate
        scangate config --env-file /path/to/custom.env
    """
    try:
        config = ScannerConfig.from_env(env_file)
    except ConfigurationError as e:
        fatal("Invalid configuration", e)

    click.echo("SCANGATE CONFIGURATION")
    click.echo("=" * 50)

    click.echo(f"\nPolicy:")
    click.echo(f"   Severity Threshold: {config.threshold}")
    click.echo(f"   Whitelist File: {config.whitelist_file or 'Not Set'}")

    click.echo(f"\nRuntime:")
    click.echo(f"   Report Timeout: {config.report_timeout}s")
    click.echo(f"   Scratch Prefix: {config.tmp_prefix}")
    click.echo(f"   Log Level: {config.log_level}")

    click.echo(f"\nSeverity Ranking:")
    for label in DEFAULT_SEVERITY_TABLE.labels():
        click.echo(f"   {DEFAULT_SEVERITY_TABLE.rank(label)}. {label}")

    if show_env:
        click.echo(f"\nEnvironment Variables:")
        env_vars = [
            'SCANGATE_THRESHOLD',
            'SCANGATE_WHITELIST',
            'SCANGATE_REPORT_TIMEOUT',
            'SCANGATE_TMP_PREFIX',
            'SCANGATE_LOG_LEVEL',
        ]
        for var in env_vars:
            click.echo(f"   {var}: {os.getenv(var) or 'Not Set'}")

    if validate:
        click.echo(f"\nConfiguration Validation:")
        issues = config.validate()

        if not issues:
            click.echo("   Configuration looks good!")
        else:
            click.echo("   Issues found:")
            for issue in issues:
                click.echo(f"      - {issue}")
            raise SystemExit(1)
