"""Scan processor composing report loading and gating"""

import asyncio
import logging
from typing import List, Optional

import aiohttp
from aiohttp import ClientError, ClientSession, ClientTimeout

from ..clients.report_client import ReportClient
from ..config.settings import ScannerConfig
from ..config.whitelist import load_whitelist
from ..core.exceptions import ReportError
from ..core.models import GateResult, Vulnerability, Whitelist
from ..scoring.gate import VulnerabilityGate
from ..scoring.severity import DEFAULT_SEVERITY_TABLE, SeverityTable

logger = logging.getLogger(__name__)


class ScanProcessor:
    """Load a vulnerability report and gate it against policy"""

    def __init__(self, config: ScannerConfig, whitelist: Optional[Whitelist] = None,
                 severity_table: SeverityTable = DEFAULT_SEVERITY_TABLE):
        self.config = config
        if whitelist is None:
            whitelist = load_whitelist(config.whitelist_file) if config.whitelist_file else Whitelist.empty()
        self.gate = VulnerabilityGate(whitelist, config.threshold, severity_table)
        self.session: Optional[ClientSession] = None
        self.report_client: Optional[ReportClient] = None

    async def __aenter__(self):
        """Async context manager entry"""
        timeout = ClientTimeout(total=self.config.report_timeout * 3, connect=10)
        self.session = ClientSession(
            timeout=timeout,
            connector=aiohttp.TCPConnector(limit=4),
            headers={'User-Agent': 'scangate/1.0.0'}
        )
        self.report_client = ReportClient(self.session, self.config)
        logger.debug("Scan processor initialized")
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        if self.session:
            await self.session.close()
            logger.debug("Scan processor closed")

    async def load_report(self, source: str) -> List[Vulnerability]:
        try:
            return await self.report_client.load(source)
        except (ClientError, asyncio.TimeoutError) as e:
            raise ReportError(f"Could not fetch report from {source}: {e}") from e

    def evaluate(self, vulnerabilities: List[Vulnerability], image: str) -> GateResult:
        return self.gate.evaluate(vulnerabilities, image)

    async def process(self, source: str, image: str) -> GateResult:
        """Load the report for an image and gate it"""
        vulnerabilities = await self.load_report(source)
        return self.evaluate(vulnerabilities, image)
