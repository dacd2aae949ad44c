"""
Option Compare Data Models

Pydantic models for the decision matrix. Attribute names are snake_case,
the wire and persisted JSON shape uses the camelCase aliases.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

NEUTRAL_EVALUATION = 3
DEFAULT_CRITERIA_WEIGHT = 5

Number = Union[int, float]

EvaluationMatrix = Dict[str, Dict[str, Number]]


class Option(BaseModel):
    """A named alternative being evaluated"""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="Option identifier")
    name: str = Field(description="Display name")

    @field_validator('id')
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v:
            raise ValueError('id must not be empty')
        return v


class Criterion(BaseModel):
    """A named, weighted axis of comparison"""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(description="Criterion identifier")
    name: str = Field(description="Display name")
    weight: Number = Field(default=DEFAULT_CRITERIA_WEIGHT, description="Score multiplier")

    @field_validator('id')
    @classmethod
    def validate_id(cls, v: str) -> str:
        if not v:
            raise ValueError('id must not be empty')
        return v


class Project(BaseModel):
    """A named, timestamped bundle of options, criteria and evaluations"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str = Field(description="Project identifier")
    name: str = Field(description="Project name")
    created_at: str = Field(alias="createdAt", description="ISO-8601 creation time")
    updated_at: str = Field(alias="updatedAt", description="ISO-8601 last mutation time")
    options: List[Option] = Field(default_factory=list)
    criteria: List[Criterion] = Field(default_factory=list)
    evaluations: EvaluationMatrix = Field(
        default_factory=dict,
        description="option id -> criterion id -> score"
    )

    def to_document(self) -> Dict[str, Any]:
        """Wire/persisted JSON shape of this project"""
        return self.model_dump(by_alias=True)

    def copy_deep(self) -> "Project":
        return self.model_copy(deep=True)


class ProjectCollection(BaseModel):
    """Persisted root: every project plus the active project pointer"""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    active_project_id: Optional[str] = Field(default=None, alias="activeProjectId")
    projects: Dict[str, Project] = Field(default_factory=dict)

    def to_document(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
