"""
Configuration loader with priority: --define > env > config files > defaults
"""
import configparser
import os
import tomllib
from pathlib import Path
from typing import Dict, Any, Optional, Sequence, Tuple

from ...core.config import Configuration
from ...core.constants import DEFAULT_CONFIG_PATH, ENV_PREFIX
from ...core.exceptions import ConfigurationError
from ...core.logging import get_logger

logger = get_logger(__name__)

PROPERTIES_SUFFIXES = (".properties", ".conf")
INI_SUFFIXES = (".ini",)


def parse_define(definition: str) -> Tuple[str, str]:
    """
    Split a ``name=value`` definition.
    
    A definition without ``=`` defines the name with an empty value.
    """
    name, sep, value = definition.partition("=")
    if not name:
        raise ConfigurationError(f"Invalid property definition: {definition!r}")
    return name, value if sep else ""


class ConfigLoader:
    """Configuration loader with priority support"""
    
    def __init__(self, env_prefix: str = ENV_PREFIX):
        self._env_prefix = env_prefix
    
    def load_toml(self, path: Path) -> Dict[str, Any]:
        """Load TOML configuration file as dotted properties"""
        try:
            data = tomllib.loads(path.read_text(encoding='utf-8'))
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Failed to parse TOML configuration {path}: {e}") from e
        return self._flatten(data)
    
    def load_properties(self, path: Path) -> Dict[str, Any]:
        """Load Java-style ``key = value`` properties file"""
        config: Dict[str, Any] = {}
        for line in path.read_text(encoding='utf-8').splitlines():
            line = line.strip()
            if not line or line[0] in "#!;":
                continue
            # First '=' or ':' separates key and value
            positions = [p for p in (line.find("="), line.find(":")) if p >= 0]
            if not positions:
                config[line] = ""
                continue
            pos = min(positions)
            config[line[:pos].strip()] = line[pos + 1:].strip()
        return config

    def load_ini(self, path: Path) -> Dict[str, Any]:
        """Load INI file, keys named ``section.key``"""
        parser = configparser.ConfigParser(interpolation=None, default_section="")
        # Property names are case sensitive
        parser.optionxform = str
        try:
            parser.read_string(path.read_text(encoding='utf-8'), source=str(path))
        except configparser.Error as e:
            raise ConfigurationError(f"Failed to parse INI configuration {path}: {e}") from e

        config: Dict[str, Any] = {}
        for section in parser.sections():
            for key, value in parser.items(section):
                config[f"{section}.{key}"] = value
        return config

    def load_file(self, path: Path) -> Dict[str, Any]:
        """Load a configuration file, format chosen by suffix"""
        path = path.expanduser()
        if not path.exists():
            raise ConfigurationError(f"Configuration file not found: {path}")
        
        try:
            suffix = path.suffix.lower()
            if suffix in PROPERTIES_SUFFIXES:
                config = self.load_properties(path)
            elif suffix in INI_SUFFIXES:
                config = self.load_ini(path)
            else:
                config = self.load_toml(path)
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
        
        logger.debug(f"Loaded {len(config)} properties from {path}")
        return config
    
    def load_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables"""
        config = {}
        
        # Map environment variables to config keys
        env_mappings = {
            "USERNAME": "webtunnel.username",
            "PASSWORD": "webtunnel.password",
            "SSH_EXECUTABLE": "ssh.executable",
            "CONNECT_TIMEOUT": "webtunnel.connectTimeout",
            "REMOTE_TIMEOUT": "webtunnel.remoteTimeout",
            "LOCAL_TIMEOUT": "webtunnel.localTimeout",
            "TLS_CA_LOCATION": "tls.caLocation",
            "HTTP_PROXY_ENABLE": "http.proxy.enable",
            "HTTP_PROXY_HOST": "http.proxy.host",
            "HTTP_PROXY_PORT": "http.proxy.port",
            "HTTP_PROXY_USERNAME": "http.proxy.username",
            "HTTP_PROXY_PASSWORD": "http.proxy.password",
            "LOG_LEVEL": "logging.level",
        }
        
        for env_suffix, config_key in env_mappings.items():
            value = os.getenv(self._env_prefix + env_suffix)
            if value:
                config[config_key] = value
        
        return config
    
    def _flatten(self, data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
        """Flatten nested tables into dotted keys"""
        result: Dict[str, Any] = {}
        
        for key, value in data.items():
            name = f"{prefix}{key}"
            if isinstance(value, dict):
                result.update(self._flatten(value, f"{name}."))
            else:
                result[name] = value
        
        return result
    
    def load(
        self,
        config_files: Sequence[Path] = (),
        defines: Sequence[str] = (),
        use_env: bool = True,
        default_path: Optional[Path] = Path(DEFAULT_CONFIG_PATH),
    ) -> Configuration:
        """
        Load configuration with priority: --define > env > config files > default file
        
        Args:
            config_files: Configuration files, later ones override earlier ones
            defines: ``name=value`` definitions (highest priority)
            use_env: Whether to load from environment variables
            default_path: Optional file loaded first if it exists
        
        Returns:
            Merged configuration
        """
        configuration = Configuration()
        
        # 1. Default configuration file, if present
        if default_path is not None and default_path.expanduser().exists():
            configuration.update(self.load_file(default_path))
        
        # 2. Explicit configuration files
        for path in config_files:
            configuration.update(self.load_file(Path(path)))
        
        # 3. Environment variables
        if use_env:
            configuration.update(self.load_env())
        
        # 4. Definitions from the command line
        for definition in defines:
            name, value = parse_define(definition)
            configuration.set_string(name, value)
        
        return configuration
