"""Configuration loading."""

import asyncio
import logging
from pathlib import Path
from typing import Any, Dict, Optional

from ruamel.yaml import YAML
from pydantic import ValidationError

from stratus.models.config import StratusConfig


logger = logging.getLogger(__name__)


class ConfigManager:
    """Loads adapter configuration from a YAML file."""

    def __init__(self, config_file: Path):
        """Initialize configuration manager."""
        self.config_file = Path(config_file)
        self.yaml = YAML(typ="safe")
        self.config: Optional[StratusConfig] = None

    async def load(self) -> StratusConfig:
        """Load and validate the configuration file."""
        logger.info(f"Loading configuration from {self.config_file}")

        if not self.config_file.exists():
            raise FileNotFoundError(f"Config not found: {self.config_file}")

        data = await self._read_yaml(self.config_file)
        try:
            self.config = StratusConfig(**(data or {}))
        except ValidationError as e:
            logger.error(f"Invalid config: {e}")
            raise

        logger.debug(f"Loaded config: {self.config_file}")
        return self.config

    async def _read_yaml(self, file_path: Path) -> Dict[str, Any]:
        """Read and parse YAML file."""
        content = await asyncio.to_thread(file_path.read_text)
        return self.yaml.load(content)


async def load_config(path: Path) -> StratusConfig:
    """Load adapter configuration from ``path``."""
    return await ConfigManager(path).load()
