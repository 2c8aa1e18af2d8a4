"""CSV format output formatter"""

import csv
import io
from typing import List

from ...core.models import GateResult, Vulnerability


class CSVFormatter:
    """CSV format output formatter"""

    @staticmethod
    def get_headers() -> List[str]:
        """Get CSV headers"""
        return [
            'image', 'vulnerability', 'severity', 'featurename', 'featureversion',
            'namespace', 'fixedby', 'link', 'approved', 'description'
        ]

    @staticmethod
    def format_row(image: str, vuln: Vulnerability, approved: bool) -> List[str]:
        """Format single vulnerability as CSV row"""
        return [
            image,
            vuln.vulnerability_id,
            vuln.severity,
            vuln.feature_name,
            vuln.feature_version or '',
            vuln.namespace or '',
            vuln.fixed_by or '',
            vuln.link or '',
            str(approved),
            (vuln.description or '').replace('\n', ' ').replace('\r', ' ')
        ]

    @staticmethod
    def format_result(result: GateResult, report_all: bool = False) -> str:
        unapproved = set(result.unapproved)
        vulnerabilities = result.vulnerabilities if report_all else result.unapproved

        buffer = io.StringIO()
        writer = csv.writer(buffer)
        writer.writerow(CSVFormatter.get_headers())
        for vuln in vulnerabilities:
            writer.writerow(CSVFormatter.format_row(result.image, vuln, vuln not in unapproved))
        return buffer.getvalue().strip()
