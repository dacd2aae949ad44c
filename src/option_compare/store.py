"""
Option Compare Project Store
In-memory collection of projects and the mutations scoped to the active one
"""

import functools
import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from pydantic import ValidationError

from .clock import Clock, SystemClock, iso_timestamp
from .ids import IdGenerator, generate_id
from .models import (
    Criterion,
    DEFAULT_CRITERIA_WEIGHT,
    EvaluationMatrix,
    NEUTRAL_EVALUATION,
    Option,
    Project,
    ProjectCollection,
)
from .persistence import PersistenceAdapter
from .scoring import OptionResult, RankedOption, compute_results, rank_options

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = '新しいプロジェクト'
COPY_SUFFIX = ' (コピー)'


def active_project_mutation(stamp_on_miss: bool = False) -> Callable:
    """
    Wrap a store mutator with the active-project invariant

    The wrapped method receives the active project as its first argument
    after self. A project is created first if none is active. Afterwards
    updated_at is stamped when the mutator reports a hit (truthy result),
    or always when stamp_on_miss is set, and the collection is persisted.
    """
    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(self: "ProjectStore", *args: Any, **kwargs: Any) -> Any:
            project = self._ensure_current_project()
            result = func(self, project, *args, **kwargs)
            if result or stamp_on_miss:
                project.updated_at = self._timestamp()
            self._persist()
            return result
        return wrapper
    return decorator


def _move(items: List[Any], from_index: int, to_index: int) -> bool:
    """Move items[from_index] to to_index; out-of-range indices are rejected"""
    size = len(items)
    if not (0 <= from_index < size and 0 <= to_index < size):
        return False
    item = items.pop(from_index)
    items.insert(to_index, item)
    return True


class ProjectStore:
    """
    Owns the project collection and every mutation against it

    Read accessors hand out copies; the store is the only holder of the
    live project objects.
    """

    def __init__(
        self,
        persistence: Optional[PersistenceAdapter] = None,
        clock: Optional[Clock] = None,
        id_generator: IdGenerator = generate_id,
        default_project_name: str = DEFAULT_PROJECT_NAME
    ):
        self._persistence = persistence
        self._clock = clock or SystemClock()
        self._generate_id = id_generator
        self.default_project_name = default_project_name
        self._collection = ProjectCollection()

        logger.info("ProjectStore initialized")

    # -- internals ---------------------------------------------------------

    def _timestamp(self) -> str:
        return iso_timestamp(self._clock.now())

    def _persist(self) -> None:
        if self._persistence is not None:
            self._persistence.save(self._collection)

    def _new_project(self, name: Optional[str] = None) -> Project:
        now = self._timestamp()
        return Project(
            id=self._generate_id(),
            name=name or self.default_project_name,
            created_at=now,
            updated_at=now
        )

    def _active(self) -> Optional[Project]:
        active_id = self._collection.active_project_id
        if active_id is None:
            return None
        return self._collection.projects.get(active_id)

    def _ensure_current_project(self) -> Project:
        project = self._active()
        if project is None:
            project = self._create_project()
        return project

    def _normalize(self) -> None:
        """Make sure the active id resolves, creating a project if none exist"""
        if self._active() is not None:
            return
        if self._collection.projects:
            first_id = next(iter(self._collection.projects))
            logger.warning(
                f"Active project {self._collection.active_project_id} not found, "
                f"selecting {first_id}"
            )
            self._collection.active_project_id = first_id
            self._persist()
        else:
            logger.info("No projects available, creating an empty one")
            self._create_project()

    # -- collection access -------------------------------------------------

    @property
    def collection(self) -> ProjectCollection:
        return self._collection.model_copy(deep=True)

    def replace_collection(self, collection: ProjectCollection) -> None:
        """Adopt a whole collection (e.g. from storage) and self-heal it"""
        self._collection = collection.model_copy(deep=True)
        self._normalize()

    def load_from_storage(self) -> bool:
        """Hydrate from durable storage; in-memory state is untouched on failure"""
        if self._persistence is None:
            return False
        collection = self._persistence.load()
        if collection is None:
            return False
        self.replace_collection(collection)
        logger.info(f"Loaded {len(self._collection.projects)} project(s) from storage")
        return True

    @property
    def active_project_id(self) -> Optional[str]:
        return self._collection.active_project_id

    @property
    def current_project(self) -> Optional[Project]:
        project = self._active()
        return project.copy_deep() if project else None

    def get_project(self, project_id: str) -> Optional[Project]:
        project = self._collection.projects.get(project_id)
        return project.copy_deep() if project else None

    def list_projects(self) -> List[Project]:
        """All projects, most recently updated first"""
        projects = [p.copy_deep() for p in self._collection.projects.values()]
        projects.sort(key=lambda p: p.updated_at, reverse=True)
        return projects

    # -- active project views ----------------------------------------------

    @property
    def project_name(self) -> str:
        project = self._active()
        return project.name if project else self.default_project_name

    @project_name.setter
    def project_name(self, name: str) -> None:
        project = self._ensure_current_project()
        self.update_project_name(project.id, name)

    @property
    def options(self) -> List[Option]:
        project = self._active()
        return [o.model_copy() for o in project.options] if project else []

    @property
    def criteria(self) -> List[Criterion]:
        project = self._active()
        return [c.model_copy() for c in project.criteria] if project else []

    @property
    def evaluations(self) -> EvaluationMatrix:
        project = self._active()
        if project is None:
            return {}
        return {oid: dict(row) for oid, row in project.evaluations.items()}

    def get_evaluation(self, option_id: str, criteria_id: str) -> float:
        return self.evaluations.get(option_id, {}).get(criteria_id, NEUTRAL_EVALUATION)

    @property
    def results(self) -> Dict[str, OptionResult]:
        project = self._active()
        if project is None:
            return {}
        return compute_results(project.options, project.criteria, project.evaluations)

    @property
    def ranked_options(self) -> List[RankedOption]:
        project = self._active()
        if project is None:
            return []
        return rank_options(project.options, self.results)

    # -- option mutations --------------------------------------------------

    @active_project_mutation()
    def add_option(self, project: Project, name: str) -> Option:
        option = Option(id=self._generate_id(), name=name)
        project.options.append(option)
        row = project.evaluations.setdefault(option.id, {})
        for criterion in project.criteria:
            row[criterion.id] = NEUTRAL_EVALUATION
        logger.debug(f"Added option {option.id} to project {project.id}")
        return option.model_copy()

    @active_project_mutation(stamp_on_miss=True)
    def remove_option(self, project: Project, option_id: str) -> bool:
        for index, option in enumerate(project.options):
            if option.id == option_id:
                del project.options[index]
                project.evaluations.pop(option_id, None)
                return True
        return False

    @active_project_mutation()
    def update_option(self, project: Project, option_id: str, name: str) -> bool:
        for option in project.options:
            if option.id == option_id:
                option.name = name
                return True
        return False

    @active_project_mutation()
    def reorder_options(self, project: Project, from_index: int, to_index: int) -> bool:
        moved = _move(project.options, from_index, to_index)
        if not moved:
            logger.warning(f"Rejected option reorder {from_index} -> {to_index}")
        return moved

    # -- criteria mutations ------------------------------------------------

    @active_project_mutation()
    def add_criteria(
        self,
        project: Project,
        name: str,
        weight: float = DEFAULT_CRITERIA_WEIGHT
    ) -> Criterion:
        criterion = Criterion(id=self._generate_id(), name=name, weight=weight)
        project.criteria.append(criterion)
        for option in project.options:
            project.evaluations.setdefault(option.id, {})[criterion.id] = NEUTRAL_EVALUATION
        logger.debug(f"Added criterion {criterion.id} to project {project.id}")
        return criterion.model_copy()

    @active_project_mutation(stamp_on_miss=True)
    def remove_criteria(self, project: Project, criteria_id: str) -> bool:
        for index, criterion in enumerate(project.criteria):
            if criterion.id == criteria_id:
                del project.criteria[index]
                for row in project.evaluations.values():
                    row.pop(criteria_id, None)
                return True
        return False

    @active_project_mutation()
    def update_criteria(
        self,
        project: Project,
        criteria_id: str,
        name: str,
        weight: float
    ) -> bool:
        for criterion in project.criteria:
            if criterion.id == criteria_id:
                criterion.name = name
                criterion.weight = weight
                return True
        return False

    @active_project_mutation()
    def reorder_criteria(self, project: Project, from_index: int, to_index: int) -> bool:
        moved = _move(project.criteria, from_index, to_index)
        if not moved:
            logger.warning(f"Rejected criteria reorder {from_index} -> {to_index}")
        return moved

    # -- evaluations -------------------------------------------------------

    @active_project_mutation()
    def set_evaluation(
        self,
        project: Project,
        option_id: str,
        criteria_id: str,
        value: float
    ) -> bool:
        project.evaluations.setdefault(option_id, {})[criteria_id] = value
        return True

    # -- project lifecycle -------------------------------------------------

    def _create_project(self, name: Optional[str] = None) -> Project:
        """Add a project, make it active and persist; returns the live object"""
        project = self._new_project(name)
        self._collection.projects[project.id] = project
        self._collection.active_project_id = project.id
        self._persist()
        logger.info(f"Created project {project.id} ({project.name})")
        return project

    def create_new_project(self, name: Optional[str] = None) -> Project:
        return self._create_project(name).copy_deep()

    def duplicate_project(self, source_id: str, new_name: Optional[str] = None) -> Optional[Project]:
        source = self._collection.projects.get(source_id)
        if source is None:
            logger.warning(f"Cannot duplicate unknown project {source_id}")
            return None

        project = self._new_project(new_name or f"{source.name}{COPY_SUFFIX}")
        project.options = [o.model_copy() for o in source.options]
        project.criteria = [c.model_copy() for c in source.criteria]
        project.evaluations = {oid: dict(row) for oid, row in source.evaluations.items()}

        self._collection.projects[project.id] = project
        self._collection.active_project_id = project.id
        self._persist()
        logger.info(f"Duplicated project {source_id} as {project.id}")
        return project.copy_deep()

    def switch_project(self, project_id: str) -> bool:
        if project_id not in self._collection.projects:
            logger.warning(f"Cannot switch to unknown project {project_id}")
            return False
        self._collection.active_project_id = project_id
        self._persist()
        return True

    def delete_project(self, project_id: str) -> bool:
        if project_id not in self._collection.projects:
            return False

        del self._collection.projects[project_id]
        logger.info(f"Deleted project {project_id}")

        if self._collection.active_project_id == project_id:
            successor = next(iter(self._collection.projects), None)
            if successor is None:
                self._collection.active_project_id = None
                self._create_project()
                return True
            self._collection.active_project_id = successor
        self._persist()
        return True

    def update_project_name(self, project_id: str, name: str) -> bool:
        project = self._collection.projects.get(project_id)
        if project is None:
            return False
        project.name = name
        project.updated_at = self._timestamp()
        self._persist()
        return True

    # -- import / export ---------------------------------------------------

    def load_project(self, document: Union[Project, Mapping[str, Any]]) -> Optional[Project]:
        """
        Import a project document as the active project

        Args:
            document: Project model or wire-format mapping. A missing id is
                generated and missing timestamps are filled with now.

        Returns:
            Copy of the imported project, or None if the document is invalid
        """
        if isinstance(document, Project):
            project = document.copy_deep()
        else:
            data = dict(document)
            now = self._timestamp()
            if not data.get('id'):
                data['id'] = self._generate_id()
            data.setdefault('createdAt', now)
            data.setdefault('updatedAt', now)
            try:
                project = Project.model_validate(data)
            except ValidationError as e:
                logger.error(f"Rejected project document: {e}")
                return None

        # last write wins on id collision
        self._collection.projects[project.id] = project
        self._collection.active_project_id = project.id
        self._persist()
        logger.info(f"Loaded project {project.id} ({project.name})")
        return project.copy_deep()

    def export_project(self) -> Dict[str, Any]:
        """Wire document of the active project"""
        return self._ensure_current_project().to_document()
