"""Pydantic v2 models for scan results and plugin metadata."""

from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

PLUGIN_NAME = "bitdefender"
PLUGIN_CATEGORY = "av"
# Stamped at image build time; reported as the signature date until the
# first `bitdefender update`.
BUILD_TIME = "20261019"


class ToolInfo(BaseModel):
    """Metadata and resolved location for an external scanner binary."""

    name: str
    display_name: str
    exe_name: str
    path: Optional[Path] = None
    installed: bool = False


class ScanResult(BaseModel):
    """Parsed result of a single Bitdefender scan.

    ``result`` holds the signature name and ``markdown`` the optional rendered
    table. Instances are frozen; use :meth:`with_markdown` and
    :meth:`without_markdown` to get a copy with the table attached or cleared.
    """

    infected: bool = False
    result: str = ""
    engine: str = ""
    updated: str = ""
    markdown: str = ""

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_signature_name(self) -> "ScanResult":
        if self.infected and not self.result:
            raise ValueError("an infected result must carry a signature name")
        if not self.infected and self.result:
            raise ValueError("a clean result must not carry a signature name")
        return self

    def with_markdown(self, markdown: str) -> "ScanResult":
        return self.model_copy(update={"markdown": markdown})

    def without_markdown(self) -> "ScanResult":
        return self.model_copy(update={"markdown": ""})

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form; ``markdown`` is omitted when empty."""
        data = self.model_dump()
        if not data["markdown"]:
            del data["markdown"]
        return data


class PluginOutput(BaseModel):
    """The JSON document printed, POSTed and served over HTTP."""

    bitdefender: ScanResult = Field(default_factory=ScanResult)

    def to_dict(self) -> Dict[str, Any]:
        return {PLUGIN_NAME: self.bitdefender.to_dict()}


class PluginResults(BaseModel):
    """Document upserted into the Malice Elasticsearch index."""

    id: str
    name: str = PLUGIN_NAME
    category: str = PLUGIN_CATEGORY
    data: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_scan(cls, doc_id: str, result: ScanResult) -> "PluginResults":
        return cls(id=doc_id, data=result.without_markdown().to_dict())


class PluginConfig(BaseModel):
    timeout: int = 60
    elasticsearch_url: str = ""
    elasticsearch_index: str = "malice"
    endpoint: str = ""
    proxy: str = ""
    scanid: str = ""
    updated_file: str = "/opt/malice/UPDATED"
    build_time: str = BUILD_TIME
    bdscan_path: Optional[str] = None
    upload_dir: str = "/malware"
    host: str = "0.0.0.0"
    port: int = 3993
    log_level: str = "INFO"

    model_config = ConfigDict(extra="allow")
