"""Pydantic schemas shared by all compute tasks."""

from collections.abc import Mapping
from typing import ClassVar, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

# ─────────────────────────────────────────────────────────────
# Base job params
# ─────────────────────────────────────────────────────────────


class BaseJobParams(BaseModel):
    """Base parameters for all compute tasks.

    All task-specific parameter classes should extend this.
    """

    input_path: str = Field(description="path to the input file")
    output_path: str = Field(description="path to the output file")

    @model_validator(mode="after")
    def validate_distinct_paths(self) -> "BaseJobParams":
        """Refuse to overwrite the input in place."""
        if self.input_path == self.output_path:
            raise ValueError("Output path must differ from input path")
        return self


class TaskOutput(BaseModel):
    pass


P = TypeVar("P", bound=BaseJobParams)
Q = TypeVar("Q", bound=TaskOutput)


# ─────────────────────────────────────────────────────────────
# Task execution result
# ─────────────────────────────────────────────────────────────


class TaskResult(BaseModel):
    """Result returned by ComputeModule.execute()."""

    status: str
    task_output: Mapping[str, object] | None = None
    error: str | None = None

    model_config: ClassVar[ConfigDict] = ConfigDict(extra="forbid")
