"""Table format output formatter"""

from typing import List

from ...core.models import GateResult, Vulnerability
from .colors import ERROR_COLOR, INFO_COLOR, NOTICE_COLOR, SEVERITY_COLORS, colorize


class TableFormatter:
    """Plain text report of gated vulnerabilities"""

    @staticmethod
    def format_vulnerability(vuln: Vulnerability, color: bool = True) -> List[str]:
        """Format one vulnerability as a header line plus details"""
        severity = colorize(SEVERITY_COLORS.get(vuln.severity, NOTICE_COLOR), vuln.severity, color)
        header = f"[{vuln.vulnerability_id}] {severity}"
        if vuln.feature_name:
            package = vuln.feature_name
            if vuln.feature_version:
                package += f" {vuln.feature_version}"
            header += f" - {package}"

        lines = [header]
        details = []
        if vuln.namespace:
            details.append(f"Namespace: {vuln.namespace}")
        if vuln.fixed_by:
            details.append(f"Fixed by: {vuln.fixed_by}")
        if vuln.link:
            details.append(f"Link: {vuln.link}")
        if details:
            lines.append(f"  {' | '.join(details)}")
        if vuln.description:
            desc = vuln.description[:100] + "..." if len(vuln.description) > 100 else vuln.description
            lines.append(f"  {desc}")
        return lines

    @staticmethod
    def format_result(result: GateResult, report_all: bool = False, color: bool = True) -> str:
        if report_all:
            vulnerabilities = list(result.vulnerabilities)
            title = "ALL VULNERABILITIES"
        else:
            vulnerabilities = result.sorted_unapproved()
            title = "UNAPPROVED VULNERABILITIES"

        lines = [f"{title} ({result.image})", "=" * 50, ""]

        if not vulnerabilities:
            lines.append(colorize(INFO_COLOR, "No vulnerabilities to report", color))
        for vuln in vulnerabilities:
            lines.extend(TableFormatter.format_vulnerability(vuln, color))
            lines.append("")

        lines.append("-" * 50)
        lines.append(f"Reported: {result.total}")
        lines.append(f"Whitelisted: {result.whitelisted}")
        lines.append(f"Below threshold: {result.below_threshold}")

        unapproved = f"Unapproved: {len(result.unapproved)}"
        lines.append(colorize(ERROR_COLOR, unapproved, color) if result.should_fail else unapproved)

        if report_all and result.unapproved:
            lines.append(f"Unapproved IDs: {', '.join(result.unapproved_ids)}")

        return "\n".join(lines)
