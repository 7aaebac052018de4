"""Configuration management for GotoPhoto."""

import json
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

_TRUTHY = {'1', 'true', 'yes', 'on'}


@dataclass
class GotoPhotoConfig:
    """Backend selection plus backend-specific connection parameters.

    Keys are flat so an existing ``settings.yml`` loads unchanged.
    """

    gotophoto_backend: Optional[str] = None

    # Cloud SQL (mysql / postgres)
    cloudsql_connection_name: Optional[str] = None
    cloudsql_database_name: Optional[str] = None
    cloudsql_user: Optional[str] = None
    cloudsql_password: Optional[str] = None
    cloudsql_port: int = 3306
    cloudsql_host: str = '127.0.0.1'

    # MongoDB
    mongo_url: Optional[str] = None
    mongo_database: Optional[str] = None
    mongo_collection: str = 'locations'
    mongo_photolocation_collection: str = 'photolocations'

    # Cloud Datastore
    google_project_id: Optional[str] = None

    # Local development
    sqlite_path: str = 'gotophoto.db'

    # Service
    page_size: int = 1000
    debug: bool = False
    log_level: str = 'INFO'

    # Default config file locations (in priority order)
    CONFIG_SEARCH_PATHS = (
        './config/settings.yml',
        './config/settings.yaml',
        './gotophoto_config.yaml',
        './gotophoto_config.json',
        '~/.gotophoto/config.yaml',
    )

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> 'GotoPhotoConfig':
        """
        Load configuration from file.

        Search order:
        1. Explicit config_path parameter
        2. GOTOPHOTO_CONFIG environment variable
        3. Default search paths (project, user home)

        ``GOTOPHOTO_DEBUG`` overrides the ``debug`` value found in the file.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            GotoPhotoConfig instance
        """
        if config_path:
            config = cls._load_from_file(config_path)
        else:
            config = None
            env_path = os.getenv('GOTOPHOTO_CONFIG')
            if env_path:
                config = cls._load_from_file(env_path)
            else:
                for path_str in cls.CONFIG_SEARCH_PATHS:
                    path = Path(path_str).expanduser()
                    if path.exists():
                        config = cls._load_from_file(str(path))
                        break
            if config is None:
                config = cls()

        env_debug = os.getenv('GOTOPHOTO_DEBUG')
        if env_debug is not None:
            config.debug = env_debug.strip().lower() in _TRUTHY
        return config

    @classmethod
    def _load_from_file(cls, filepath: str) -> 'GotoPhotoConfig':
        """Load configuration from a specific file."""
        path = Path(filepath)

        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        with open(path, 'r') as f:
            content = f.read()

        if path.suffix in ['.yaml', '.yml']:
            data = yaml.safe_load(content)
        elif path.suffix == '.json':
            data = json.loads(content)
        else:
            raise ValueError(f"Unsupported config format: {path.suffix}")

        return cls.from_dict(data or {})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GotoPhotoConfig':
        """Create config from dictionary. Unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known}
        config = cls(**values)
        config.cloudsql_port = int(config.cloudsql_port)
        config.page_size = int(config.page_size)
        if isinstance(config.debug, str):
            config.debug = config.debug.strip().lower() in _TRUTHY
        return config

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def save(self, filepath: str) -> None:
        """
        Save configuration to file.

        Args:
            filepath: Path to save config file
        """
        path = Path(filepath)
        data = self.to_dict()

        if path.suffix in ['.yaml', '.yml']:
            with open(path, 'w') as f:
                yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        elif path.suffix == '.json':
            with open(path, 'w') as f:
                json.dump(data, f, indent=2)
        else:
            raise ValueError(f"Unsupported config format: {path.suffix}")
