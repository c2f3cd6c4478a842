"""
Configuration management for newsrank.
"""
import copy
import os
import json
import logging
import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

# Default configuration
DEFAULT_CONFIG = {
    "logging": {
        "level": "INFO",
        "file": None,
        "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    },
    "processing": {
        "max_concurrent": 8,
        "show_progress": True
    },
    "lexicon": {
        # category id -> keyword list, replaces the built-in list
        "categories": {},
        # category id -> subcategory id -> keyword list
        "subcategories": {}
    },
    "output": {
        "format": "json"
    }
}

class Config:
    """
    Configuration manager for newsrank.
    """
    def __init__(self, config_path: Optional[str] = None):
        """
        Initialize the Config.

        Args:
            config_path: Path to the configuration file
        """
        self.config_path = config_path
        self.config = self._load_config()

    def _load_config(self) -> Dict:
        """
        Load configuration from file or use defaults.

        Returns:
            Configuration dictionary
        """
        config = copy.deepcopy(DEFAULT_CONFIG)

        if self.config_path:
            try:
                user_config = self._read_file(Path(self.config_path))
                if user_config:
                    self._update_dict(config, user_config)
            except (OSError, ValueError, yaml.YAMLError) as e:
                logger.error(f"Error loading config from {self.config_path}: {e}")
                logger.warning("Using default configuration")

        # Override with environment variables
        self._override_from_env(config)

        return config

    def _read_file(self, path: Path) -> Optional[Dict]:
        if not path.exists():
            logger.warning(f"Config file {path} not found")
            return None
        if path.suffix.lower() in ['.yaml', '.yml']:
            with open(path, 'r') as f:
                user_config = yaml.safe_load(f)
        elif path.suffix.lower() == '.json':
            with open(path, 'r') as f:
                user_config = json.load(f)
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")
        if user_config is not None and not isinstance(user_config, dict):
            raise ValueError("Config file must contain a mapping at the top level")
        return user_config

    def _update_dict(self, target: Dict, source: Dict) -> None:
        """
        Recursively update a dictionary.

        Args:
            target: Target dictionary to update
            source: Source dictionary with new values
        """
        for key, value in source.items():
            if key in target and isinstance(target[key], dict) and isinstance(value, dict):
                self._update_dict(target[key], value)
            else:
                target[key] = value

    def _override_from_env(self, config: Dict, prefix: str = 'NEWSRANK_') -> None:
        """
        Override configuration with environment variables.

        ``NEWSRANK_PROCESSING_MAX_CONCURRENT=4`` sets ``processing.max_concurrent``.
        The first segment after the prefix names the section; the remainder
        is the key, so keys may contain underscores.

        Args:
            config: Configuration dictionary to update
            prefix: Prefix for environment variables
        """
        for key, value in os.environ.items():
            if not key.startswith(prefix) or key == f"{prefix}CONFIG_PATH":
                continue

            section, _, name = key[len(prefix):].lower().partition('_')
            if not name:
                continue

            current = config.setdefault(section, {})
            if not isinstance(current, dict):
                continue

            try:
                # Try to parse as JSON
                current[name] = json.loads(value)
            except json.JSONDecodeError:
                # If not valid JSON, use as string
                current[name] = value

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value.

        Args:
            key: Dot-separated key path (e.g., 'processing.max_concurrent')
            default: Default value if key not found

        Returns:
            Configuration value
        """
        parts = key.split('.')
        current = self.config

        for part in parts:
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]

        return current

    def save(self, path: Optional[str] = None) -> bool:
        """
        Save the current configuration to a file.

        Args:
            path: Path to save the configuration to

        Returns:
            True if successful, False otherwise
        """
        save_path = path or self.config_path
        if not save_path:
            logger.error("No path specified for saving configuration")
            return False

        try:
            path = Path(save_path)
            if path.suffix.lower() in ['.yaml', '.yml']:
                with open(path, 'w') as f:
                    yaml.dump(self.config, f, default_flow_style=False)
            elif path.suffix.lower() == '.json':
                with open(path, 'w') as f:
                    json.dump(self.config, f, indent=2)
            else:
                raise ValueError(f"Unsupported config file format: {path.suffix}")

            return True
        except (OSError, ValueError) as e:
            logger.error(f"Error saving config to {save_path}: {e}")
            return False


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Build a Config from an explicit path or ``NEWSRANK_CONFIG_PATH``.
    """
    return Config(config_path or os.getenv('NEWSRANK_CONFIG_PATH'))
