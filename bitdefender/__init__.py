"""Malice Bitdefender AntiVirus plugin.

Runs the ``bdscan`` command-line scanner against a file and republishes the
parsed result as JSON, a Markdown table, an Elasticsearch document, a webhook
callback, or over a small HTTP API.
"""

from .exceptions import (
    BitdefenderError,
    ParseIntegrityError,
    ScannerError,
    ScannerTimeoutError,
    SignatureUpdateError,
    StorageError,
    WebhookError,
)
from .models import (
    BUILD_TIME,
    PLUGIN_CATEGORY,
    PLUGIN_NAME,
    PluginConfig,
    PluginOutput,
    PluginResults,
    ScanResult,
    ToolInfo,
)
from .result_parser import ResultParser
from .scanner import BitdefenderScanner
from .signatures import SignatureStamp

__version__ = "0.1.0"
__all__ = [
    "BitdefenderError",
    "ParseIntegrityError",
    "ScannerError",
    "ScannerTimeoutError",
    "SignatureUpdateError",
    "StorageError",
    "WebhookError",
    "BUILD_TIME",
    "PLUGIN_CATEGORY",
    "PLUGIN_NAME",
    "PluginConfig",
    "PluginOutput",
    "PluginResults",
    "ScanResult",
    "ToolInfo",
    "ResultParser",
    "BitdefenderScanner",
    "SignatureStamp",
]
