"""Locates the external scanner binary."""

import logging
import shutil
from pathlib import Path
from typing import Any, Dict, Optional

from .models import ToolInfo

logger = logging.getLogger(__name__)

# Default tool registry. Paths can be overridden per tool via
# config["tools"][<name>]["path"].
DEFAULT_TOOLS: list[dict[str, Any]] = [
    {
        "name": "bdscan",
        "display_name": "BitDefender Antivirus Scanner for Unices",
        "exe_name": "bdscan",
    },
]


class ToolManager:
    """Resolves scanner binaries.

    Resolution order for finding a tool:
    1. Explicit path from config (tools.<name>.path)
    2. System PATH
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self._tools: Dict[str, ToolInfo] = {}
        self._register_default_tools()

    def _register_default_tools(self) -> None:
        tools_config = self.config.get("tools", {})
        for tool_def in DEFAULT_TOOLS:
            name = tool_def["name"]
            overrides = {
                k: v for k, v in tools_config.get(name, {}).items() if v is not None
            }
            self._tools[name] = ToolInfo(**{**tool_def, **overrides})

    def check_tool(self, tool_name: str) -> ToolInfo:
        """Check if a tool is installed and resolve its path."""
        if tool_name not in self._tools:
            raise KeyError(f"Unknown tool: {tool_name}")

        tool = self._tools[tool_name]

        if tool.path and tool.path.is_file():
            tool.installed = True
            logger.debug(f"{tool.display_name}: found at configured path {tool.path}")
            return tool

        system_path = shutil.which(tool.exe_name)
        if system_path:
            tool.path = Path(system_path).resolve()
            tool.installed = True
            logger.debug(f"{tool.display_name}: found on PATH at {tool.path}")
            return tool

        tool.installed = False
        logger.debug(f"{tool.display_name}: not found")
        return tool

    def get_tool_path(self, tool_name: str) -> Path:
        """Get resolved path to tool executable. Raises if not installed."""
        tool = self.check_tool(tool_name)
        if not tool.installed or tool.path is None:
            raise FileNotFoundError(
                f"{tool.display_name} ({tool.exe_name}) not found. "
                f"Install it or set bdscan_path in the plugin config."
            )
        return tool.path
