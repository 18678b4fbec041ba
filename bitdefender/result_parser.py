"""Parsing utilities for Bitdefender scanner output."""

import logging
from typing import Any, Dict

from .exceptions import ParseIntegrityError

logger = logging.getLogger(__name__)

INFECTED_MARKER = "infected:"
BANNER_MARKER = "Unices v"


class ResultParser:
    """Utility functions for parsing ``bdscan`` output text."""

    @staticmethod
    def parse_bdscan_output(text: str) -> Dict[str, Any]:
        """Parse Bitdefender bdscan stdout.

        Example output::

            BitDefender Antivirus Scanner for Unices v7.90123 Linux-amd64
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
            ...

        Returns dict with:
          - 'infected': True if a detection line was found
          - 'result': the signature name, or '' when clean
          - 'engine': the scanner engine version from the banner line

        Raises:
            ParseIntegrityError: a detection line carried no signature name.
        """
        parsed: Dict[str, Any] = {"infected": False, "result": "", "engine": ""}

        for line in text.split("\n"):
            if not line:
                continue

            # Detection lines: "/path/to/file  infected: SignatureName"
            if INFECTED_MARKER in line:
                name = ResultParser.extract_virus_name(line)
                if not name:
                    raise ParseIntegrityError(line)
                parsed["infected"] = True
                parsed["result"] = name

            # Banner: "BitDefender Antivirus Scanner for Unices v7.90123 Linux-amd64"
            elif BANNER_MARKER in line:
                for word in line.split():
                    if word.startswith("v"):
                        parsed["engine"] = word[1:]
                        break

        return parsed

    @staticmethod
    def extract_virus_name(line: str) -> str:
        """Return the stripped text following the last ``infected:`` marker."""
        return line.rsplit(INFECTED_MARKER, 1)[-1].strip()
