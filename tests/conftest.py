"""Shared test fixtures for the malice-bitdefender test suite."""

import os
import stat
import sys

import pytest

from bitdefender.scanner import BitdefenderScanner
from bitdefender.signatures import SignatureStamp
from bitdefender.tool_manager import ToolManager

TEST_BUILD_TIME = "20180101"

EICAR_OUTPUT = """BitDefender Antivirus Scanner for Unices v7.90123 Linux-amd64
Copyright (C) 1996-2009 BitDefender. All rights reserved.
Trial key found. 30 days remaining.

Infected file action: ignore
Suspected file action: ignore
Loading plugins, please wait
Plugins loaded.

/malware/EICAR  infected: EICAR-Test-File (not a virus)


Results:
Folders: 0
Files: 1
Packed: 0
Archives: 0
Infected files: 1
Suspect files: 0
Warnings: 0
Identified viruses: 1
I/O errors: 0
"""

CLEAN_OUTPUT = """BitDefender Antivirus Scanner for Unices v7.90123 Linux-amd64
Copyright (C) 1996-2009 BitDefender. All rights reserved.
Trial key found. 30 days remaining.

Infected file action: ignore
Suspected file action: ignore
Loading plugins, please wait
Plugins loaded.



Results:
Folders: 0
Files: 1
Packed: 0
Archives: 0
Infected files: 0
Suspect files: 0
Warnings: 0
Identified viruses: 0
I/O errors: 0
"""


@pytest.fixture
def eicar_output():
    return EICAR_OUTPUT


@pytest.fixture
def clean_output():
    return CLEAN_OUTPUT


@pytest.fixture
def make_fake_bdscan(tmp_path):
    """Factory writing an executable stand-in for bdscan.

    The script prints ``stdout``, records its arguments in ``argv.txt`` next
    to itself, optionally sleeps, and exits with ``exit_code``.
    """

    def _make(stdout: str = "", exit_code: int = 0, sleep: float = 0) -> str:
        bin_dir = tmp_path / "bin"
        bin_dir.mkdir(exist_ok=True)
        script = bin_dir / "bdscan"
        argv_file = bin_dir / "argv.txt"
        script.write_text(
            f"#!{sys.executable}\n"
            "import sys, time\n"
            f"open({str(argv_file)!r}, 'w').write(' '.join(sys.argv[1:]))\n"
            f"time.sleep({sleep})\n"
            f"sys.stdout.write({stdout!r})\n"
            f"sys.exit({exit_code})\n"
        )
        script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return str(script)

    return _make


@pytest.fixture
def signature_stamp(tmp_path):
    """SignatureStamp pointing at a not-yet-existing sentinel file."""
    return SignatureStamp(TEST_BUILD_TIME, tmp_path / "UPDATED")


@pytest.fixture
def make_scanner(signature_stamp):
    """Factory for a BitdefenderScanner using the given bdscan path."""

    def _make(bdscan_path: str) -> BitdefenderScanner:
        tm = ToolManager({"tools": {"bdscan": {"path": bdscan_path}}})
        return BitdefenderScanner(tm, signature_stamp)

    return _make


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "sample.bin"
    path.write_bytes(b"X5O!P%@AP[4\\PZX54(P^)7CC)7}$EICAR")
    return str(path)


@pytest.fixture(autouse=True)
def _clear_malice_env(monkeypatch):
    """Keep MALICE_* variables from the host environment out of the tests."""
    for key in list(os.environ):
        if key.startswith("MALICE_"):
            monkeypatch.delenv(key)
