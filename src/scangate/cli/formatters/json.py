"""JSON format output formatter"""

import json
from dataclasses import asdict
from typing import Any, Dict

from ...core.models import GateResult, Vulnerability


class JSONFormatter:
    """JSON format output formatter"""

    @staticmethod
    def vulnerability_to_dict(vuln: Vulnerability) -> Dict[str, Any]:
        data = asdict(vuln)
        return {
            'vulnerability': data['vulnerability_id'],
            'severity': data['severity'],
            'featurename': data['feature_name'],
            'featureversion': data['feature_version'],
            'namespace': data['namespace'],
            'description': data['description'],
            'link': data['link'],
            'fixedby': data['fixed_by'],
        }

    @staticmethod
    def format_result(result: GateResult, report_all: bool = False) -> str:
        """Format a gate result in the analysis service report layout"""
        vulnerabilities = result.vulnerabilities if report_all else result.unapproved
        data = {
            'image': result.image,
            'unapproved': result.unapproved_ids,
            'vulnerabilities': [JSONFormatter.vulnerability_to_dict(v) for v in vulnerabilities],
        }
        return json.dumps(data, indent=2)
