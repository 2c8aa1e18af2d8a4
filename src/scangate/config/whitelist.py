"""Whitelist file loading.

The whitelist is a YAML document with an optional ``generalwhitelist``
mapping (applies to every image) and an optional ``images`` mapping of image
name to its own accepted identifiers::

    generalwhitelist:
      CVE-2017-6055: XML
    images:
      ubuntu:
        CVE-2017-5230: XSX

Values are free-text justifications and may be left empty.
"""

import logging
from pathlib import Path
from typing import Any, List, Optional, Union

import yaml

from ..core.exceptions import WhitelistError
from ..core.models import Whitelist, WhitelistEntry

logger = logging.getLogger(__name__)

GENERAL_KEY = "generalwhitelist"
IMAGES_KEY = "images"


def _entries_from_section(section: Any, where: str, image: Optional[str] = None) -> List[WhitelistEntry]:
    if section is None:
        return []
    if not isinstance(section, dict):
        raise WhitelistError(f"Could not parse whitelist file, {where} must be a mapping")

    entries = []
    for vuln_id, justification in section.items():
        if not isinstance(vuln_id, str) or not vuln_id:
            raise WhitelistError(f"Could not parse whitelist file, invalid identifier {vuln_id!r} in {where}")
        entries.append(WhitelistEntry(
            vulnerability_id=vuln_id,
            image=image,
            justification=None if justification is None else str(justification),
        ))
    return entries


def parse_whitelist(content: str) -> Whitelist:
    """Parse whitelist YAML text"""
    try:
        document = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise WhitelistError(f"Could not parse whitelist file, could not unmarshal {e}") from e

    if document is None:
        return Whitelist.empty()
    if not isinstance(document, dict):
        raise WhitelistError("Could not parse whitelist file, top level must be a mapping")

    entries = _entries_from_section(document.get(GENERAL_KEY), GENERAL_KEY)

    images = document.get(IMAGES_KEY)
    if images is not None and not isinstance(images, dict):
        raise WhitelistError(f"Could not parse whitelist file, {IMAGES_KEY} must be a mapping")
    for image, section in (images or {}).items():
        entries.extend(_entries_from_section(section, f"{IMAGES_KEY}.{image}", image=str(image)))

    return Whitelist.from_entries(entries)


def load_whitelist(path: Union[str, Path]) -> Whitelist:
    """Read and parse a whitelist file"""
    try:
        content = Path(path).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise WhitelistError(f"Could not parse whitelist file, could not read file {e}") from e

    whitelist = parse_whitelist(content)
    logger.info(f"Loaded {len(whitelist)} whitelisted vulnerabilities from {path}")
    return whitelist
