"""Severity ranking table"""

from types import MappingProxyType
from typing import Iterator, List, Mapping, Optional

from ..core.exceptions import InvalidThresholdError, UnknownSeverityError
from ..core.models import Severity


class SeverityTable:
    """Immutable mapping of severity label to urgency rank (1 = most urgent)"""

    def __init__(self, ranks: Optional[Mapping[str, int]] = None):
        if ranks is None:
            ranks = {severity.value: rank for rank, severity in enumerate(Severity, start=1)}
        if len(set(ranks.values())) != len(ranks):
            raise ValueError("Severity ranks must be unique")
        self._ranks = MappingProxyType(dict(ranks))

    def rank(self, label: str) -> int:
        """Resolve a severity label to its rank"""
        try:
            return self._ranks[label]
        except KeyError:
            raise UnknownSeverityError(label) from None

    def validate_threshold(self, threshold: str) -> int:
        """Validate a configured threshold and return its rank"""
        if threshold not in self._ranks:
            raise InvalidThresholdError(threshold)
        return self._ranks[threshold]

    def labels(self) -> List[str]:
        """Labels ordered from most to least urgent"""
        return sorted(self._ranks, key=self._ranks.__getitem__)

    def as_mapping(self) -> Mapping[str, int]:
        return self._ranks

    def __contains__(self, label: object) -> bool:
        return label in self._ranks

    def __iter__(self) -> Iterator[str]:
        return iter(self.labels())

    def __len__(self) -> int:
        return len(self._ranks)


DEFAULT_SEVERITY_TABLE = SeverityTable()
