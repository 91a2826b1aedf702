"""Configuration loader."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from pydantic import ValidationError

from .models import ConfigModel

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "uaewire" / "config.yaml"


class Config:
    """Configuration manager."""

    def __init__(
        self,
        config_path: Optional[Path] = None,
        model: Optional[ConfigModel] = None,
        environ: Optional[Dict[str, str]] = None,
    ) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = Path(os.environ.get("UAEWIRE_CONFIG", DEFAULT_CONFIG_PATH))
        self.config_path = config_path
        self._config: Optional[ConfigModel] = model
        self._environ = environ if environ is not None else os.environ

    @property
    def config(self) -> ConfigModel:
        """Get loaded config, falling back to defaults when no file exists."""
        if self._config is None:
            if self.config_path.exists():
                self._config = load_config(self.config_path)
            else:
                logger.info("No config at %s, using defaults", self.config_path)
                self._config = ConfigModel()
        return self._config

    def env(self, name: Optional[str]) -> Optional[str]:
        """Read a non-empty environment value."""
        if not name:
            return None
        value = self._environ.get(name)
        return value or None

    def get_db_config(self) -> Dict[str, Any]:
        """Get database configuration dict."""
        db_config = self.config.postgres.model_dump()

        # Handle password from environment if specified
        if db_config.get("password_env"):
            password = self.env(db_config["password_env"])
            if password:
                db_config["password"] = password

        return db_config

    def use_postgres(self) -> bool:
        """Whether an external store is configured."""
        db_config = self.get_db_config()
        return bool(db_config.get("enabled") and db_config.get("password"))

    def admin_secret(self) -> Optional[str]:
        """Shared secret expected from trigger callers."""
        auth = self.config.auth
        return self.env(auth.secret_env) or self.env(auth.fallback_env)

    def naver_credentials(self) -> Optional[tuple]:
        """Naver (client id, client secret), or None when unset."""
        providers = self.config.providers
        client_id = self.env(providers.naver_client_id_env)
        client_secret = self.env(providers.naver_client_secret_env)
        if not client_id or not client_secret:
            return None
        return client_id, client_secret

    def google_places_key(self) -> Optional[str]:
        return self.env(self.config.providers.google_places_key_env)

    def unsplash_key(self) -> Optional[str]:
        return self.env(self.config.providers.unsplash_key_env)


def load_config(config_path: Path) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        return ConfigModel(**config_data)
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid YAML in config file: {e}")
    except ValidationError as e:
        raise ValueError(f"Invalid configuration: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)
