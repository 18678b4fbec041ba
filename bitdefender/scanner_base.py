"""Abstract base class for antivirus scanners.

Implements the template method pattern: subclasses override
build_command() and parse_output(), while run() handles the
common subprocess lifecycle.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional

from .exceptions import ScannerError, ScannerTimeoutError
from .models import ScanResult
from .tool_manager import ToolManager

logger = logging.getLogger(__name__)


@dataclass
class CommandOutput:
    return_code: Optional[int]
    stdout: str
    stderr: str


class ScannerBase(ABC):
    """Abstract base for antivirus scanners.

    Subclasses must implement:
      - tool_name: str property identifying the registered tool
      - build_command(target) -> list of CLI arguments
      - parse_output(stdout) -> ScanResult
    """

    def __init__(self, tool_manager: ToolManager):
        self.tool_manager = tool_manager
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    @abstractmethod
    def tool_name(self) -> str:
        """The registered tool name (e.g. 'bdscan')."""

    @abstractmethod
    def build_command(self, target: str) -> List[str]:
        """Build the CLI command that scans ``target``.

        Returns:
            Command list suitable for asyncio.create_subprocess_exec.
        """

    @abstractmethod
    def parse_output(self, stdout: str) -> ScanResult:
        """Parse the scanner's stdout into a ScanResult."""

    def is_available(self) -> bool:
        """Check if the tool is installed and usable."""
        try:
            tool = self.tool_manager.check_tool(self.tool_name)
            return tool.installed
        except KeyError:
            return False

    async def run(self, target: str, timeout: int) -> ScanResult:
        """Scan ``target``. This is the template method.

        1. Build command
        2. Execute subprocess with timeout
        3. Parse stdout into a ScanResult

        Raises:
            ScannerError: the scanner could not be started, failed or timed out.
            ParseIntegrityError: the output reported an unnamed infection.
        """
        cmd = self._build(target)
        self.logger.info(f"Running {self.tool_name}: {' '.join(cmd)}")

        output = await self.execute(cmd, timeout, path=target)
        self.logger.debug(
            f"[{self.tool_name}] path={target} output: {output.stdout}"
        )

        result = self.parse_output(output.stdout)
        self.logger.info(
            f"{self.tool_name} completed: infected={result.infected}, "
            f"exit code {output.return_code}"
        )
        return result

    async def execute(
        self,
        cmd: List[str],
        timeout: int,
        path: Optional[str] = None,
    ) -> CommandOutput:
        """Run ``cmd`` to completion or until ``timeout`` seconds elapse."""
        try:
            process = await asyncio.create_subprocess_exec(
                *cmd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ScannerError(
                f"Failed to start {self.tool_name}: {e}", command=cmd, path=path
            ) from e

        try:
            stdout_bytes, stderr_bytes = await asyncio.wait_for(
                process.communicate(),
                timeout=timeout,
            )
        except asyncio.TimeoutError:
            try:
                process.kill()
            except ProcessLookupError:
                pass
            await process.wait()
            raise ScannerTimeoutError(
                f"{self.tool_name} timed out after {timeout}s",
                command=cmd,
                path=path,
            )

        output = CommandOutput(
            return_code=process.returncode,
            stdout=stdout_bytes.decode("utf-8", errors="replace"),
            stderr=stderr_bytes.decode("utf-8", errors="replace"),
        )

        if output.return_code != 0 and not self._is_success_return_code(
            output.return_code
        ):
            raise ScannerError(
                f"{self.tool_name} exited with code {output.return_code}: "
                f"{output.stderr.strip()}",
                command=cmd,
                path=path,
                return_code=output.return_code,
            )
        return output

    def _build(self, target: str) -> List[str]:
        try:
            return self.build_command(target)
        except FileNotFoundError as e:
            raise ScannerError(str(e), path=target) from e

    def _tool_executable(self) -> str:
        try:
            return str(self.tool_manager.get_tool_path(self.tool_name))
        except FileNotFoundError as e:
            raise ScannerError(str(e)) from e

    def _is_success_return_code(self, return_code: Optional[int]) -> bool:
        """Override in subclasses where non-zero exit codes indicate findings, not errors."""
        return False
