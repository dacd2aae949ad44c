"""
Option Compare configuration
Settings come from OPTION_COMPARE_* environment variables
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from .store import DEFAULT_PROJECT_NAME

logger = logging.getLogger(__name__)

ENV_PREFIX = 'OPTION_COMPARE_'

DEFAULT_STORAGE_PATH = Path.home() / '.option-compare' / 'storage.json'
DEFAULT_BASE_URL = 'http://localhost:5173/'


@dataclass
class AppConfig:
    """Runtime settings for a session"""
    storage_path: Path = DEFAULT_STORAGE_PATH
    base_url: str = DEFAULT_BASE_URL
    default_project_name: str = DEFAULT_PROJECT_NAME
    log_level: str = 'WARNING'

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "AppConfig":
        env = os.environ if environ is None else environ
        config = cls()

        storage_path = env.get(f'{ENV_PREFIX}STORAGE_PATH')
        if storage_path:
            config.storage_path = Path(storage_path).expanduser()

        config.base_url = env.get(f'{ENV_PREFIX}BASE_URL', config.base_url)
        config.default_project_name = env.get(
            f'{ENV_PREFIX}DEFAULT_PROJECT_NAME', config.default_project_name
        )

        log_level = env.get(f'{ENV_PREFIX}LOG_LEVEL', config.log_level).upper()
        if log_level not in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
            logger.warning(f"Unknown log level {log_level}, using WARNING")
            log_level = 'WARNING'
        config.log_level = log_level

        return config
