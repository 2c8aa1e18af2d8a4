"""scangate configuration management with .env file support"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from ..core.exceptions import ConfigurationError
from ..scoring.severity import DEFAULT_SEVERITY_TABLE

logger = logging.getLogger(__name__)


@dataclass
class ScannerConfig:
    """scangate configuration"""
    threshold: str = "Unknown"
    whitelist_file: Optional[str] = None
    report_timeout: float = 30.0
    tmp_prefix: str = "scangate-"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> 'ScannerConfig':
        """Load configuration from environment variables and .env file"""
        if env_file:
            env_path = Path(env_file)
        else:
            # Look for .env in current directory and up to 3 parent directories
            current_dir = Path.cwd()
            env_path = None
            for path in [current_dir] + list(current_dir.parents)[:3]:
                potential_env = path / ".env"
                if potential_env.exists():
                    env_path = potential_env
                    break

        if env_path and env_path.exists():
            load_dotenv(env_path)
            logger.debug(f"Loaded configuration from {env_path}")
        elif env_file:
            logger.warning(f"Specified .env file not found: {env_file}")

        raw_timeout = os.getenv('SCANGATE_REPORT_TIMEOUT', '30.0')
        try:
            report_timeout = float(raw_timeout)
        except ValueError:
            raise ConfigurationError(f"SCANGATE_REPORT_TIMEOUT must be a number, got {raw_timeout!r}") from None

        return cls(
            threshold=os.getenv('SCANGATE_THRESHOLD', 'Unknown'),
            whitelist_file=os.getenv('SCANGATE_WHITELIST') or None,
            report_timeout=report_timeout,
            tmp_prefix=os.getenv('SCANGATE_TMP_PREFIX', 'scangate-'),
            log_level=os.getenv('SCANGATE_LOG_LEVEL', 'INFO'),
        )

    def validate(self) -> list[str]:
        """Validate configuration and return list of issues"""
        issues = []

        if self.threshold not in DEFAULT_SEVERITY_TABLE:
            labels = ", ".join(DEFAULT_SEVERITY_TABLE.labels())
            issues.append(f"Invalid severity threshold {self.threshold!r} (expected one of: {labels})")

        if self.whitelist_file and not Path(self.whitelist_file).is_file():
            issues.append(f"Whitelist file not found: {self.whitelist_file}")

        if self.report_timeout <= 0:
            issues.append("Report timeout must be positive")

        if not self.tmp_prefix:
            issues.append("Temporary directory prefix must not be empty")

        return issues
