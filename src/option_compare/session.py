"""
Option Compare session context

Wires one ProjectStore to its collaborators. Callers receive the session
explicitly instead of looking up a global store.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .clipboard import Clipboard
from .clock import Clock, SystemClock
from .config import AppConfig
from .ids import IdGenerator, generate_id
from .loader import LoadOrchestrator, LoadResult, LoadSource
from .persistence import PersistenceAdapter
from .samples import seed_sample_project
from .share import Location, ShareService, UrlLocation
from .storage import JsonFileStorage, Storage
from .store import ProjectStore

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """One active project collection plus the collaborators around it"""
    config: AppConfig
    storage: Storage
    location: Location
    persistence: PersistenceAdapter
    store: ProjectStore
    share: ShareService

    def start(self, seed_sample: bool = True) -> LoadResult:
        """Run the startup load; seed placeholder content if nothing loaded"""
        orchestrator = LoadOrchestrator(self.store, self.persistence, self.storage, self.location)
        result = orchestrator.load()
        if result.source == LoadSource.SAMPLE and seed_sample:
            seed_sample_project(self.store)
        logger.info(f"Session started from {result.source.value} (loaded={result.loaded})")
        return result


def create_session(
    config: Optional[AppConfig] = None,
    storage: Optional[Storage] = None,
    location: Optional[Location] = None,
    clipboard: Optional[Clipboard] = None,
    clock: Optional[Clock] = None,
    id_generator: IdGenerator = generate_id
) -> Session:
    config = config or AppConfig.from_env()
    storage = storage if storage is not None else JsonFileStorage(config.storage_path)
    location = location if location is not None else UrlLocation(config.base_url)
    clock = clock or SystemClock()

    persistence = PersistenceAdapter(storage, clock=clock, id_generator=id_generator)
    store = ProjectStore(
        persistence=persistence,
        clock=clock,
        id_generator=id_generator,
        default_project_name=config.default_project_name
    )
    share = ShareService(store, location, clipboard)

    return Session(
        config=config,
        storage=storage,
        location=location,
        persistence=persistence,
        store=store,
        share=share
    )
