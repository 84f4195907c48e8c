from __future__ import annotations
from pydantic import BaseModel, Field, ValidationError
from typing import List, Optional
from pathlib import Path
import json
import os

from .changelog.categories import CategoryDefinition, default_categories
from .changelog.errors import ConfigError
from .changelog.history_store import MAX_VERSIONS
from .logger import get_logger

log = get_logger(__name__)

STORE_ENV_VAR = "API_CHANGELOG_STORE"


class ChangelogConfig(BaseModel):
    store_path: Path = Path("files/changelog-history.json")
    files_dir: Path = Path("files")
    dump_path: Path = Path("dumper/dump")
    max_versions: int = Field(MAX_VERSIONS, ge=1)
    categories: List[CategoryDefinition] = Field(default_factory=default_categories)


def load_config(path: Optional[Path] = None) -> ChangelogConfig:
    """
    Load changelog configuration.

    Relative paths in a config file are resolved against the file's directory.
    The API_CHANGELOG_STORE environment variable overrides the store location.

    Args:
        path: Optional JSON config file

    Returns:
        Loaded configuration (defaults when no file is given)
    """
    if path is None:
        config = ChangelogConfig()
    else:
        path = Path(path)
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            config = ChangelogConfig.model_validate(data)
        except FileNotFoundError as e:
            raise ConfigError(path, "file not found") from e
        except json.JSONDecodeError as e:
            raise ConfigError(path, str(e)) from e
        except ValidationError as e:
            raise ConfigError(path, f"{e.error_count()} validation errors") from e

        base = path.parent
        for attr in ("store_path", "files_dir", "dump_path"):
            value = getattr(config, attr)
            if not value.is_absolute():
                setattr(config, attr, base / value)

    env_store = os.environ.get(STORE_ENV_VAR)
    if env_store:
        log.debug(f"Using history store from {STORE_ENV_VAR}: {env_store}")
        config.store_path = Path(env_store)

    return config
