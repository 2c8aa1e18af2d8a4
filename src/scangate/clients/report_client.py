"""Analysis service report client"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, List

from aiohttp import ClientError, ClientSession, ClientTimeout
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from ..config.settings import ScannerConfig
from ..core.exceptions import ReportError
from ..core.models import Vulnerability

logger = logging.getLogger(__name__)


def is_url(source: str) -> bool:
    return source.startswith(('http://', 'https://'))


def parse_vulnerability(item: Any) -> Vulnerability:
    """Build a Vulnerability from one report object"""
    if not isinstance(item, dict):
        raise ReportError(f"Invalid vulnerability entry: {item!r}")

    vuln_id = item.get('vulnerability')
    severity = item.get('severity')
    if not vuln_id or not severity:
        raise ReportError(f"Vulnerability entry missing 'vulnerability' or 'severity': {item!r}")

    return Vulnerability(
        vulnerability_id=str(vuln_id),
        severity=str(severity),
        feature_name=str(item.get('featurename') or ''),
        feature_version=item.get('featureversion'),
        namespace=item.get('namespace'),
        description=item.get('description'),
        link=item.get('link'),
        fixed_by=item.get('fixedby'),
    )


def parse_report(data: Any) -> List[Vulnerability]:
    """Parse a decoded report document into vulnerabilities"""
    if isinstance(data, dict):
        data = data.get('vulnerabilities')
        if data is None:
            return []
    if not isinstance(data, list):
        raise ReportError("Report must be a list of vulnerabilities or an object with a 'vulnerabilities' list")
    return [parse_vulnerability(item) for item in data]


class ReportClient:
    """Load vulnerability reports from a file or from the analysis service"""

    def __init__(self, session: ClientSession, config: ScannerConfig):
        self.session = session
        self.config = config

    async def load(self, source: str) -> List[Vulnerability]:
        if is_url(source):
            data = await self.fetch(source)
        else:
            data = self.read(source)
        vulnerabilities = parse_report(data)
        logger.info(f"Loaded {len(vulnerabilities)} vulnerabilities from {source}")
        return vulnerabilities

    def read(self, path: str) -> Any:
        try:
            with open(Path(path), 'r', encoding='utf-8') as f:
                return json.load(f)
        except OSError as e:
            raise ReportError(f"Could not read report {path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ReportError(f"Report {path} is not valid JSON: {e}") from e

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=8),
        retry=retry_if_exception_type((ClientError, asyncio.TimeoutError)),
        reraise=True,
    )
    async def fetch(self, url: str) -> Any:
        """Fetch a report document from the analysis service"""
        logger.info(f"Fetching vulnerability report from {url}...")
        timeout = ClientTimeout(total=self.config.report_timeout)

        async with self.session.get(url, timeout=timeout) as response:
            logger.debug(f"Report response status: {response.status}")

            if response.status == 200:
                text = await response.text()
                try:
                    return json.loads(text)
                except json.JSONDecodeError as e:
                    raise ReportError(f"Report from {url} is not valid JSON: {e}") from e

            error_text = await response.text()
            if response.status >= 500:
                logger.warning(f"Analysis service error {response.status} - will retry")
                raise ClientError(f"Analysis service error {response.status}: {error_text}")

            raise ReportError(f"Could not fetch report from {url}: {response.status} {error_text}")
