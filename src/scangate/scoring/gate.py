"""Vulnerability gate: severity threshold plus whitelist"""

import logging
from typing import Iterable

from ..core.models import GateResult, Vulnerability, Whitelist
from .severity import DEFAULT_SEVERITY_TABLE, SeverityTable

logger = logging.getLogger(__name__)


class VulnerabilityGate:
    """Decide which reported vulnerabilities fail a scan.

    A vulnerability is unapproved when its severity is at or above the
    threshold and its identifier is not whitelisted, either generally or
    for the scanned image. The scan fails when anything is unapproved.
    """

    def __init__(self, whitelist: Whitelist, threshold: str,
                 severity_table: SeverityTable = DEFAULT_SEVERITY_TABLE):
        self.whitelist = whitelist
        self.threshold = threshold
        self.severity_table = severity_table
        self.threshold_rank = severity_table.validate_threshold(threshold)

    def is_whitelisted(self, vulnerability_id: str, image: str) -> bool:
        return self.whitelist.contains(vulnerability_id, image)

    def is_reportable(self, vulnerability: Vulnerability) -> bool:
        """True when the severity is at or above the threshold"""
        return self.severity_table.rank(vulnerability.severity) <= self.threshold_rank

    def evaluate(self, vulnerabilities: Iterable[Vulnerability], image: str) -> GateResult:
        vulnerabilities = tuple(vulnerabilities)
        unapproved = []
        whitelisted = 0
        below_threshold = 0

        for vuln in vulnerabilities:
            # Resolve every rank first so unknown labels surface even when whitelisted
            if not self.is_reportable(vuln):
                below_threshold += 1
            elif self.is_whitelisted(vuln.vulnerability_id, image):
                whitelisted += 1
            else:
                unapproved.append(vuln)

        logger.info(
            f"Gate for {image}: {len(vulnerabilities)} reported, {len(unapproved)} unapproved, "
            f"{whitelisted} whitelisted, {below_threshold} below {self.threshold}"
        )

        return GateResult(
            image=image,
            unapproved=tuple(unapproved),
            vulnerabilities=vulnerabilities,
            whitelisted=whitelisted,
            below_threshold=below_threshold,
            ranks=self.severity_table.as_mapping(),
        )
