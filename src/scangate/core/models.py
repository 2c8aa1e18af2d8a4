"""Core data models for scangate"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional, Tuple


class Severity(Enum):
    """Vulnerability severity labels, most urgent first"""
    CRITICAL = "Critical"
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
    NEGLIGIBLE = "Negligible"
    UNKNOWN = "Unknown"


@dataclass(frozen=True)
class Vulnerability:
    """A single finding reported by the analysis service"""
    vulnerability_id: str
    severity: str
    feature_name: str = ""
    feature_version: Optional[str] = None
    namespace: Optional[str] = None
    description: Optional[str] = None
    link: Optional[str] = None
    fixed_by: Optional[str] = None


@dataclass(frozen=True)
class WhitelistEntry:
    """An accepted vulnerability, for every image or for a single image"""
    vulnerability_id: str
    image: Optional[str] = None
    justification: Optional[str] = None

    @property
    def is_general(self) -> bool:
        return self.image is None


class Whitelist:
    """Accepted vulnerability identifiers, partitioned by scope.

    The general set applies to every scanned image; the image mapping only
    applies when the scanned image name matches the key exactly. Instances
    are read-only once built.
    """

    def __init__(self, general: Iterable[str] = (), images: Optional[Mapping[str, Iterable[str]]] = None,
                 entries: Iterable[WhitelistEntry] = ()):
        self._general: FrozenSet[str] = frozenset(general)
        self._images: Mapping[str, FrozenSet[str]] = MappingProxyType(
            {image: frozenset(ids) for image, ids in (images or {}).items()}
        )
        self._entries: Tuple[WhitelistEntry, ...] = tuple(entries)

    @classmethod
    def empty(cls) -> 'Whitelist':
        return cls()

    @classmethod
    def from_entries(cls, entries: Iterable[WhitelistEntry]) -> 'Whitelist':
        """Build a whitelist from individual entries"""
        entries = list(entries)
        general = set()
        images: Dict[str, set] = {}
        for entry in entries:
            if entry.is_general:
                general.add(entry.vulnerability_id)
            else:
                images.setdefault(entry.image, set()).add(entry.vulnerability_id)
        return cls(general, images, entries)

    @property
    def general(self) -> FrozenSet[str]:
        return self._general

    @property
    def images(self) -> Mapping[str, FrozenSet[str]]:
        return self._images

    def entries(self) -> Tuple[WhitelistEntry, ...]:
        if self._entries:
            return self._entries
        entries = [WhitelistEntry(vuln_id) for vuln_id in sorted(self._general)]
        for image in sorted(self._images):
            entries.extend(WhitelistEntry(vuln_id, image) for vuln_id in sorted(self._images[image]))
        return tuple(entries)

    def contains(self, vulnerability_id: str, image: str) -> bool:
        """Check whether an identifier is accepted for the given image"""
        if vulnerability_id in self._general:
            return True
        return vulnerability_id in self._images.get(image, frozenset())

    def __len__(self) -> int:
        return len(self._general) + sum(len(ids) for ids in self._images.values())

    def __iter__(self) -> Iterator[WhitelistEntry]:
        return iter(self.entries())

    def __repr__(self) -> str:
        return f"Whitelist(general={len(self._general)}, images={len(self._images)})"


@dataclass(frozen=True)
class GateResult:
    """Outcome of gating one image's vulnerability list"""
    image: str
    unapproved: Tuple[Vulnerability, ...]
    vulnerabilities: Tuple[Vulnerability, ...] = ()
    whitelisted: int = 0
    below_threshold: int = 0
    ranks: Mapping[str, int] = field(default_factory=dict, compare=False, repr=False)

    @property
    def should_fail(self) -> bool:
        return len(self.unapproved) > 0

    @property
    def total(self) -> int:
        return len(self.vulnerabilities)

    @property
    def unapproved_ids(self) -> List[str]:
        return [vuln.vulnerability_id for vuln in self.unapproved]

    def sorted_unapproved(self) -> List[Vulnerability]:
        """Unapproved findings ordered by urgency, then identifier"""
        return sorted(
            self.unapproved,
            key=lambda vuln: (self.ranks.get(vuln.severity, len(self.ranks) + 1), vuln.vulnerability_id),
        )
