"""Signature freshness sentinel.

``bdscan --update`` does not report when definitions were last refreshed, so
the plugin records the date itself in a small file (``/opt/malice/UPDATED``).
Scans read it back verbatim. Reads and writes are not locked against each
other; an update racing a scan may be seen by either side.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from .exceptions import SignatureUpdateError

logger = logging.getLogger(__name__)

DEFAULT_UPDATED_PATH = "/opt/malice/UPDATED"
DATE_FORMAT = "%Y%m%d"


class SignatureStamp:
    """Reads and writes the signature-date sentinel file."""

    def __init__(
        self,
        build_time: str,
        path: Union[str, Path] = DEFAULT_UPDATED_PATH,
    ):
        self.path = Path(path)
        self.build_time = build_time

    def read(self) -> str:
        """Return the sentinel contents, or the build time if there is none."""
        if not self.path.exists():
            return self.build_time
        try:
            return self.path.read_bytes().decode("utf-8", errors="replace")
        except OSError as e:
            logger.warning(
                f"Could not read {self.path}, using build time {self.build_time}: {e}"
            )
            return self.build_time

    def write(self, when: Optional[datetime] = None) -> str:
        """Record ``when`` (default: now, local time) as YYYYMMDD."""
        stamp = (when or datetime.now()).strftime(DATE_FORMAT)
        try:
            self.path.write_text(stamp)
        except OSError as e:
            raise SignatureUpdateError(str(self.path), str(e)) from e
        logger.debug(f"Wrote signature date {stamp} to {self.path}")
        return stamp
