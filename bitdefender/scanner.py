"""Bitdefender scanner: signature-based antivirus scanning via bdscan.

bdscan returns exit code 1 when malware is found (not an error).
"""

import logging
from typing import List, Optional

from .models import PLUGIN_CATEGORY, PLUGIN_NAME, ScanResult
from .result_parser import ResultParser
from .scanner_base import ScannerBase
from .signatures import SignatureStamp
from .tool_manager import ToolManager

logger = logging.getLogger(__name__)


class BitdefenderScanner(ScannerBase):
    """Bitdefender antivirus scanner using the bdscan CLI."""

    @property
    def tool_name(self) -> str:
        return "bdscan"

    def __init__(
        self,
        tool_manager: ToolManager,
        signatures: SignatureStamp,
    ):
        super().__init__(tool_manager)
        self.signatures = signatures

    def build_command(self, target: str) -> List[str]:
        exe = str(self.tool_manager.get_tool_path(self.tool_name))
        return [exe, target]

    def parse_output(self, stdout: str) -> ScanResult:
        """Parse bdscan stdout and stamp it with the signature date."""
        parsed = ResultParser.parse_bdscan_output(stdout)
        return ScanResult(
            infected=parsed["infected"],
            result=parsed["result"],
            engine=parsed["engine"],
            updated=self.signatures.read(),
        )

    def _is_success_return_code(self, return_code: Optional[int]) -> bool:
        # bdscan: 0 = clean, 1 = infected
        return return_code == 1

    async def update_signatures(self, timeout: int) -> str:
        """Run ``bdscan --update`` and record today's date in the sentinel.

        Returns the date written.

        Raises:
            ScannerError: bdscan could not be run, failed or timed out.
            SignatureUpdateError: the sentinel file could not be written.
        """
        cmd = [self._tool_executable(), "--update"]
        self.logger.info("Updating Bitdefender signatures...")

        output = await self.execute(cmd, timeout)
        self.logger.debug(
            f"[{PLUGIN_NAME}/{PLUGIN_CATEGORY}] Bitdefender update: {output.stdout}"
        )

        stamp = self.signatures.write()
        self.logger.info(f"Bitdefender signatures updated ({stamp})")
        return stamp
