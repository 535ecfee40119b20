"""
Configuration loader with priority: env > TOML > defaults
"""
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional, Mapping

from ...core.constants import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_LOG_LEVEL,
    DEFAULT_SERVICE_NAME,
    ENV_PREFIX,
)
from ...core.exceptions import ConfigError


@dataclass
class AppConfig:
    """Application configuration"""
    log_level: str = DEFAULT_LOG_LEVEL
    log_file: Optional[Path] = None
    service_name: str = DEFAULT_SERVICE_NAME
    
    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        """Create from dictionary, ignoring unknown keys"""
        log_file = data.get("log_file")
        log_level = data.get("log_level", DEFAULT_LOG_LEVEL)
        if not isinstance(log_level, str):
            raise ConfigError(f"log_level must be a string, got {log_level!r}")
        return cls(
            log_level=log_level.upper(),
            log_file=Path(str(log_file)).expanduser() if log_file else None,
            service_name=str(data.get("service_name", DEFAULT_SERVICE_NAME)),
        )


class ConfigLoader:
    """Configuration loader with priority support"""
    
    env_mappings = {
        "LOG_LEVEL": "log_level",
        "LOG_FILE": "log_file",
        "SERVICE_NAME": "service_name",
    }
    
    def __init__(self, environ: Optional[Mapping[str, str]] = None):
        self._env_prefix = ENV_PREFIX
        self._environ = os.environ if environ is None else environ
    
    def load_toml(self, path: Path) -> Dict[str, Any]:
        """Load TOML configuration file"""
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")
        
        try:
            return tomllib.loads(path.read_text(encoding='utf-8'))
        except (tomllib.TOMLDecodeError, OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Failed to parse TOML configuration {path}: {e}") from e
    
    def load_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables"""
        config = {}
        for suffix, config_key in self.env_mappings.items():
            value = self._environ.get(self._env_prefix + suffix)
            if value:
                config[config_key] = value
        return config
    
    def config_path(self) -> Optional[Path]:
        """
        Resolve the configuration file path.
        
        An explicit AIRDROP_CONFIG must exist; the default location is optional.
        """
        explicit = self._environ.get(self._env_prefix + "CONFIG")
        if explicit:
            return Path(explicit).expanduser()
        
        default = Path(DEFAULT_CONFIG_PATH).expanduser()
        return default if default.exists() else None
    
    def merge_configs(self, *configs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge multiple configurations with priority.
        Later configs override earlier ones.
        """
        result: Dict[str, Any] = {}
        for config in configs:
            result.update(config)
        return result
    
    def load(self, toml_path: Optional[Path] = None, use_env: bool = True) -> AppConfig:
        """
        Load configuration with priority: env > TOML > defaults
        
        Args:
            toml_path: Path to TOML configuration file (resolved from the environment if None)
            use_env: Whether to load from environment variables
        
        Returns:
            Merged AppConfig
        
        Raises:
            ConfigError: If the configuration file is missing or malformed
        """
        configs = []
        
        if toml_path is None and use_env:
            toml_path = self.config_path()
        if toml_path:
            configs.append(self.load_toml(toml_path))
        
        if use_env:
            env_config = self.load_env()
            if env_config:
                configs.append(env_config)
        
        return AppConfig.from_dict(self.merge_configs(*configs))
