"""Error taxonomy for scangate"""


class ScanGateError(Exception):
    """Base class for all scangate errors"""


class ConfigurationError(ScanGateError):
    """Invalid startup configuration; the caller should abort"""


class InvalidThresholdError(ConfigurationError):
    """Severity threshold is not one of the recognized labels"""

    def __init__(self, threshold: str):
        self.threshold = threshold
        super().__init__(f"Invalid CVE severity threshold {threshold!r} given")


class WhitelistError(ConfigurationError):
    """Whitelist file could not be read or parsed"""


class UnknownSeverityError(ScanGateError):
    """A vulnerability carries a severity label missing from the rank table"""

    def __init__(self, label: str):
        self.label = label
        super().__init__(f"Unknown severity label {label!r}")


class ExtractionError(ScanGateError):
    """Archive could not be extracted"""


class PathTraversalError(ExtractionError):
    """Archive entry would be written outside the destination directory"""

    def __init__(self, entry_name: str):
        self.entry_name = entry_name
        super().__init__(f"{entry_name}: illegal file path")


class ReportError(ScanGateError):
    """Vulnerability report could not be loaded or parsed"""
