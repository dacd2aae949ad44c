"""
Option Compare Load Orchestrator
Decides at startup whether to hydrate from a share link, from durable
storage, or leave the caller to seed sample content
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .persistence import LAST_SHARE_TOKEN_KEY, PersistenceAdapter
from .share import Location, decode_project, extract_share_token
from .storage import Storage
from .store import ProjectStore

logger = logging.getLogger(__name__)


class LoadSource(str, Enum):
    """Where the initial data came from"""
    URL = "url"
    LOCAL = "local"
    SAMPLE = "sample"


@dataclass
class LoadResult:
    """Outcome of the startup load"""
    source: LoadSource
    loaded: bool


class LoadOrchestrator:
    """Evaluates share link, then local storage, then sample fallback"""

    def __init__(
        self,
        store: ProjectStore,
        persistence: PersistenceAdapter,
        storage: Storage,
        location: Location
    ):
        self.store = store
        self.persistence = persistence
        self.storage = storage
        self.location = location

    def _last_consumed_token(self) -> Optional[str]:
        try:
            return self.storage.get(LAST_SHARE_TOKEN_KEY)
        except Exception as e:
            logger.error(f"Failed to read {LAST_SHARE_TOKEN_KEY}: {e}")
            return None

    def _record_consumed_token(self, token: str) -> None:
        try:
            self.storage.set(LAST_SHARE_TOKEN_KEY, token)
        except Exception as e:
            logger.error(f"Failed to record consumed share token: {e}")

    def load_from_url(self) -> bool:
        """
        Import the project carried by the location's share token

        A token that was already consumed is skipped while local data
        exists, so a refresh does not overwrite edits made since.
        """
        token = extract_share_token(self.location.fragment)
        if not token:
            return False

        if token == self._last_consumed_token() and self.persistence.has_saved_data():
            logger.info("Share link already imported, keeping local data")
            return False

        project = decode_project(token)
        if project is None:
            return False

        # keep the other local projects alongside the shared one
        self.store.load_from_storage()
        if self.store.load_project(project) is None:
            return False

        self._record_consumed_token(token)
        self.location.clear_fragment()
        logger.info(f"Imported shared project {project.id}")
        return True

    def load(self) -> LoadResult:
        if self.load_from_url():
            return LoadResult(source=LoadSource.URL, loaded=True)

        if self.store.load_from_storage():
            return LoadResult(source=LoadSource.LOCAL, loaded=True)

        logger.info("No share link or saved data, sample content required")
        return LoadResult(source=LoadSource.SAMPLE, loaded=False)
