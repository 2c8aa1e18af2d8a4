"""Colored console messages for CLI commands"""

import sys

import click

from .formatters.colors import ERROR_COLOR, INFO_COLOR, NOTICE_COLOR, WARNING_COLOR, colorize


def info(message: str):
    click.echo(colorize(INFO_COLOR, message))


def notice(message: str):
    click.echo(colorize(NOTICE_COLOR, message))


def warning(message: str):
    click.echo(colorize(WARNING_COLOR, message), err=True)


def fatal(operation: str, error: Exception, exit_code: int = 1):
    """Report a fatal error naming the failing operation and exit"""
    click.echo(colorize(ERROR_COLOR, f"{operation}: {error}"), err=True)
    sys.exit(exit_code)
