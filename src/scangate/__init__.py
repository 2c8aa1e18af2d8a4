"""scangate - container image extraction and vulnerability gating"""

__version__ = "1.0.0"
__author__ = "scangate Development Team"
__description__ = "Safe image layer extraction and severity/whitelist gating for container vulnerability scans"
