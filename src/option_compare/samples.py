"""
Placeholder content for a first run with no saved or shared data
"""

import logging

from .store import ProjectStore

logger = logging.getLogger(__name__)

SAMPLE_OPTIONS = ['Option A', 'Option B', 'Option C']
SAMPLE_CRITERIA = [('Price', 5), ('Quality', 4), ('Support', 2)]
SAMPLE_EVALUATIONS = [
    [4, 3, 3],
    [3, 5, 2],
    [2, 4, 5],
]


def seed_sample_project(store: ProjectStore) -> None:
    """Fill the active project with a small example matrix"""
    options = [store.add_option(name) for name in SAMPLE_OPTIONS]
    criteria = [store.add_criteria(name, weight) for name, weight in SAMPLE_CRITERIA]

    for option, row in zip(options, SAMPLE_EVALUATIONS):
        for criterion, value in zip(criteria, row):
            store.set_evaluation(option.id, criterion.id, value)

    logger.info(f"Seeded sample project {store.active_project_id}")
