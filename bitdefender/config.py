import os
import yaml
from pathlib import Path
from typing import Any, Dict, Optional

from .models import PluginConfig
from .signatures import SignatureStamp
from .tool_manager import ToolManager


class ConfigManager:
    """Loads plugin settings from an optional YAML file and MALICE_* env vars.

    Environment variables win over the file: ``MALICE_TIMEOUT=30`` sets
    ``timeout``, ``MALICE_ELASTICSEARCH_URL`` sets ``elasticsearch_url`` and
    so on.
    """

    env_prefix = "MALICE_"

    def __init__(self, config_path: Optional[str] = None):
        self.config_path = Path(config_path) if config_path else None
        self.config: Optional[PluginConfig] = None
        self.load_config()

    def load_config(self) -> PluginConfig:
        """Load configuration from file and environment"""
        config_data: Dict[str, Any] = {}
        if self.config_path is not None:
            if not self.config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {self.config_path}")
            with open(self.config_path, 'r') as f:
                config_data = yaml.safe_load(f) or {}

        config_data = self._merge_env_vars(config_data)
        self.config = PluginConfig(**config_data)
        return self.config

    def _merge_env_vars(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """Merge environment variables with configuration"""
        for key, value in os.environ.items():
            if key.startswith(self.env_prefix):
                config_key = key[len(self.env_prefix):].lower()
                config_data[config_key] = value
        return config_data

    def get_config(self) -> PluginConfig:
        """Get current configuration"""
        if self.config is None:
            self.load_config()
        return self.config

    def update_config(self, updates: Dict[str, Any]) -> PluginConfig:
        """Apply overrides (e.g. CLI options); ``None`` values are ignored"""
        config = self.get_config()
        values = {k: v for k, v in updates.items() if v is not None}
        self.config = config.model_copy(update=values)
        return self.config

    def tool_manager(self) -> ToolManager:
        config = self.get_config()
        return ToolManager({"tools": {"bdscan": {"path": config.bdscan_path}}})

    def signature_stamp(self) -> SignatureStamp:
        config = self.get_config()
        return SignatureStamp(config.build_time, config.updated_file)
