"""
Test factories for creating valid model instances
"""

from typing import Dict, List, Optional, Tuple

from option_compare.models import Criterion, Option, Project


class SequentialIds:
    """Deterministic id generator: id0000001, id0000002, ..."""

    def __init__(self, prefix: str = "id"):
        self.prefix = prefix
        self.count = 0

    def __call__(self) -> str:
        self.count += 1
        return f"{self.prefix}{self.count:07d}"


def make_project(
    project_id: str = "proj00001",
    name: str = "Laptop choice",
    options: Optional[List[Tuple[str, str]]] = None,
    criteria: Optional[List[Tuple[str, str, float]]] = None,
    evaluations: Optional[Dict[str, Dict[str, float]]] = None,
    created_at: str = "2024-01-01T00:00:00.000Z",
    updated_at: str = "2024-01-01T00:00:00.000Z"
) -> Project:
    """Create a Project with (id, name) options and (id, name, weight) criteria"""
    if options is None:
        options = [("optA", "A"), ("optB", "B")]
    if criteria is None:
        criteria = [("crit1", "Price", 5), ("crit2", "Quality", 2)]
    if evaluations is None:
        evaluations = {
            "optA": {"crit1": 4, "crit2": 2},
            "optB": {"crit1": 3, "crit2": 5},
        }

    return Project(
        id=project_id,
        name=name,
        created_at=created_at,
        updated_at=updated_at,
        options=[Option(id=i, name=n) for i, n in options],
        criteria=[Criterion(id=i, name=n, weight=w) for i, n, w in criteria],
        evaluations=evaluations
    )


class RecordingClipboard:
    """Clipboard fake recording what was written"""

    def __init__(self, primary_fails: bool = False, fallback_result: bool = True):
        self.primary_fails = primary_fails
        self.fallback_result = fallback_result
        self.primary: List[str] = []
        self.fallback: List[str] = []

    async def write_text(self, text: str) -> None:
        if self.primary_fails:
            raise PermissionError("clipboard denied")
        self.primary.append(text)

    def copy_via_selection(self, text: str) -> bool:
        self.fallback.append(text)
        return self.fallback_result
