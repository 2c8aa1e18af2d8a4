"""Shared fixtures for scangate tests"""

import io
import tarfile

import pytest

from scangate.core.models import Vulnerability, Whitelist


def build_tar(entries, mode="w"):
    """Build an in-memory tar from (name, data, perm) tuples.

    ``data`` of None makes a directory entry; a str makes a symlink to it.
    """
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode=mode) as tar:
        for name, data, perm in entries:
            info = tarfile.TarInfo(name)
            info.mode = perm
            if data is None:
                info.type = tarfile.DIRTYPE
                tar.addfile(info)
            elif isinstance(data, str):
                info.type = tarfile.SYMTYPE
                info.linkname = data
                tar.addfile(info)
            else:
                info.size = len(data)
                tar.addfile(info, io.BytesIO(data))
    buffer.seek(0)
    return buffer


@pytest.fixture
def sample_vulnerabilities():
    return [
        Vulnerability("CVE-2021-1", "Critical", "openssl"),
        Vulnerability("CVE-2021-2", "High", "zlib"),
        Vulnerability("CVE-2021-3", "Low", "bash"),
    ]


@pytest.fixture
def general_whitelist():
    return Whitelist(general={"CVE-2021-1"})


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for var in ('SCANGATE_THRESHOLD', 'SCANGATE_WHITELIST', 'SCANGATE_REPORT_TIMEOUT',
                'SCANGATE_TMP_PREFIX', 'SCANGATE_LOG_LEVEL'):
        monkeypatch.delenv(var, raising=False)
