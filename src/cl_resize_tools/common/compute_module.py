"""ComputeModule - Abstract base class for compute tasks."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Callable, Generic

from loguru import logger

from .schema_job import P, Q, TaskResult


class ComputeModule(ABC, Generic[P, Q]):
    """
    Stateless, template-method based compute module.

    - Params are validated once and passed through
    - run() does the work and returns its output model
    - execute() never raises; failures become an error TaskResult
    """

    schema: type[P]

    @property
    @abstractmethod
    def task_type(self) -> str: ...

    def setup(self) -> None:
        """Optional per-execution setup."""
        pass

    @abstractmethod
    async def run(
        self,
        params: P,
        progress_callback: Callable[[int], None] | None = None,
    ) -> Q:
        """
        Execute task.

        Must return the task's output model.
        """
        ...

    async def execute(
        self,
        raw_params: Mapping[str, object],
        progress_callback: Callable[[int], None] | None = None,
    ) -> TaskResult:
        try:
            params = self.schema.model_validate(raw_params)

            self.setup()

            output = await self.run(params, progress_callback)

            return TaskResult(status="ok", task_output=output.model_dump(mode="json"))

        except FileNotFoundError as exc:
            return TaskResult(status="error", error=str(exc))

        except Exception as exc:
            logger.error(f"{self.task_type} failed: {exc}")
            return TaskResult(status="error", error=str(exc))
