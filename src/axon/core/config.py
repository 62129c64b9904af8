"""
Configuration management for AXON
"""

import os
import yaml
from typing import Dict, Any, Optional
from pathlib import Path
from .exceptions import ConfigurationError

class Config:
    """Configuration manager with environment-specific settings"""

    def __init__(self, config_path: Optional[str] = None, environment: str = "default"):
        self.environment = environment
        self._config = self._load_config(config_path)

    def _load_config(self, config_path: Optional[str] = None) -> Dict[str, Any]:
        """Load configuration from YAML files"""

        default_config = {
            'graph': {
                'vertex_suffix': os.getenv('AXON_VERTEX_SUFFIX', '.hurdy'),
                'edge_suffix': os.getenv('AXON_EDGE_SUFFIX', '.zon'),
                'max_vertices': self._env_int('AXON_MAX_VERTICES', 4096),
                'max_depth': self._env_int('AXON_MAX_DEPTH', 10000),
            },
            'logging': {
                'level': os.getenv('AXON_LOG_LEVEL', 'WARNING'),
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            }
        }

        if config_path:
            config_file = Path(config_path)
            if not config_file.exists():
                raise ConfigurationError(f"Config file not found: {config_file}")
        else:
            # Look for config files in standard locations
            possible_paths = [
                Path('config') / f'{self.environment}.yaml',
                Path('config') / 'default.yaml',
            ]

            config_file = None
            for path in possible_paths:
                if path.exists():
                    config_file = path
                    break

        if config_file is not None:
            try:
                with open(config_file, 'r', encoding='utf-8') as f:
                    file_config = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                raise ConfigurationError(f"Failed to load config from {config_file}: {e}")
            if file_config:
                if not isinstance(file_config, dict):
                    raise ConfigurationError(f"Config file {config_file} must contain a mapping")
                default_config = self._deep_merge(default_config, file_config)

        return default_config

    @staticmethod
    def _env_int(name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None:
            return default
        try:
            return int(raw)
        except ValueError:
            raise ConfigurationError(f"{name} must be an integer, got {raw!r}")

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries"""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def get(self, path: str, default: Any = None) -> Any:
        """Get config value using dot notation (e.g., 'graph.edge_suffix')"""
        keys = path.split('.')
        value = self._config

        try:
            for key in keys:
                value = value[key]
            return value
        except (KeyError, TypeError):
            return default

    def set(self, path: str, value: Any) -> None:
        """Set config value using dot notation"""
        keys = path.split('.')
        config = self._config

        for key in keys[:-1]:
            if key not in config:
                config[key] = {}
            config = config[key]

        config[keys[-1]] = value

    @property
    def graph(self) -> Dict[str, Any]:
        """Traversal and matrix settings"""
        return self.get('graph', {})

    @property
    def vertex_suffix(self) -> str:
        return str(self.get('graph.vertex_suffix', '.hurdy'))

    @property
    def edge_suffix(self) -> str:
        return str(self.get('graph.edge_suffix', '.zon'))

    @property
    def max_vertices(self) -> Optional[int]:
        return self._optional_int('graph.max_vertices')

    @property
    def max_depth(self) -> Optional[int]:
        return self._optional_int('graph.max_depth')

    def _optional_int(self, path: str) -> Optional[int]:
        value = self.get(path)
        if value is None:
            return None
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigurationError(f"{path} must be an integer, got {value!r}")

    @property
    def logging(self) -> Dict[str, str]:
        """Logging configuration"""
        return self.get('logging', {})

    def to_dict(self) -> Dict[str, Any]:
        """Return full configuration as dictionary"""
        return self._config.copy()
