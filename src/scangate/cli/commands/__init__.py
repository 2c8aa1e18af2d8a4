"""CLI commands package"""

from .extract import extract
from .check import check
from .scan import scan
from .config import config_cmd
from .version import version

__all__ = ['extract', 'check', 'scan', 'config_cmd', 'version']
