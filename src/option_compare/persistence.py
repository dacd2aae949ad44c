"""
Option Compare Persistence Adapter
Serializes the project collection to a durable storage slot and migrates
the legacy single-project layout
"""

import json
import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from .clock import Clock, SystemClock, iso_timestamp
from .ids import IdGenerator, generate_id
from .models import Project, ProjectCollection
from .storage import Storage

logger = logging.getLogger(__name__)

PROJECTS_KEY = 'comparison-tool-projects'
LAST_SHARE_TOKEN_KEY = 'comparison-tool-last-url'


def is_collection_document(data: Dict[str, Any]) -> bool:
    """New layout carries both the active pointer and the projects map"""
    return 'activeProjectId' in data and 'projects' in data


class PersistenceAdapter:
    """Reads and writes the whole project collection as one JSON blob"""

    def __init__(
        self,
        storage: Storage,
        key: str = PROJECTS_KEY,
        clock: Optional[Clock] = None,
        id_generator: IdGenerator = generate_id
    ):
        self.storage = storage
        self.key = key
        self._clock = clock or SystemClock()
        self._generate_id = id_generator

    def save(self, collection: ProjectCollection) -> bool:
        """
        Overwrite the stored blob with the given collection

        Returns:
            True if written, False if the storage collaborator failed
        """
        payload = json.dumps(collection.to_document(), ensure_ascii=False)
        try:
            self.storage.set(self.key, payload)
        except Exception as e:
            logger.error(f"Failed to save projects under {self.key}: {e}")
            return False
        logger.debug(f"Saved {len(collection.projects)} project(s) under {self.key}")
        return True

    def has_saved_data(self) -> bool:
        try:
            return self.storage.get(self.key) is not None
        except Exception as e:
            logger.error(f"Failed to read {self.key}: {e}")
            return False

    def load(self) -> Optional[ProjectCollection]:
        """
        Read the stored collection

        Legacy single-project documents are wrapped into a collection and
        written back in the new layout before returning.

        Returns:
            The collection, or None when nothing usable is stored
        """
        try:
            raw = self.storage.get(self.key)
        except Exception as e:
            logger.error(f"Failed to read {self.key}: {e}")
            return None

        if raw is None:
            logger.info(f"No saved projects under {self.key}")
            return None

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.error(f"Failed to parse saved projects: {e}")
            return None

        if not isinstance(data, dict):
            logger.error(f"Saved projects are not a JSON object: {type(data).__name__}")
            return None

        if is_collection_document(data):
            try:
                return ProjectCollection.model_validate(data)
            except ValidationError as e:
                logger.error(f"Saved project collection is invalid: {e}")
                return None

        return self._migrate_legacy(data)

    def _migrate_legacy(self, data: Dict[str, Any]) -> Optional[ProjectCollection]:
        data = dict(data)
        if not data.get('id'):
            data['id'] = self._generate_id()
        now = iso_timestamp(self._clock.now())
        data.setdefault('createdAt', now)
        data.setdefault('updatedAt', now)

        try:
            project = Project.model_validate(data)
        except ValidationError as e:
            logger.error(f"Saved data is neither a collection nor a project: {e}")
            return None

        collection = ProjectCollection(
            active_project_id=project.id,
            projects={project.id: project}
        )
        self.save(collection)
        logger.info(f"Migrated legacy project {project.id} to collection layout")
        return collection
