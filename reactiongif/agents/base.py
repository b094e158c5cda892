"""Common behaviour of the pipeline agents."""

import time
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from reactiongif.utils.logging import get_logger

In = TypeVar("In")
Out = TypeVar("Out")


class BaseAgent(ABC, Generic[In, Out]):
    """One step of a generation pipeline.

    Callers use ``execute``, which times ``process`` and logs how it ended.
    Failures are re-raised unchanged; deciding whether a failure is fatal is
    the pipeline's job.
    """

    name: str = "agent"

    def __init__(self):
        self.logger = get_logger(f"reactiongif.agents.{self.name}")

    @abstractmethod
    async def process(self, input_data: In) -> Out:
        """Do the agent's work."""

    async def execute(self, input_data: In) -> Out:
        started = time.perf_counter()
        self.logger.debug("agent_started", agent=self.name)

        try:
            result = await self.process(input_data)
        except Exception as e:
            self.logger.warning(
                "agent_failed",
                agent=self.name,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise

        self.logger.info(
            "agent_finished",
            agent=self.name,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return result
