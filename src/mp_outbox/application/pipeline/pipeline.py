"""Application pipeline – Pipeline class."""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Iterable

from mp_outbox.application.pipeline.stage import Continue, Stage, Stop
from mp_outbox.kernel.messaging import Envelope

Handler = Callable[[Envelope], Awaitable[Any]]


class Pipeline:
    """Runs an ordered list of stages, then the handler.

    A stage returning :class:`Stop` ends the run: the remaining stages and
    the handler are skipped and the stopped envelope is returned.
    """

    def __init__(self, stages: Iterable[Stage] = ()) -> None:
        self._stages: list[Stage] = list(stages)

    def add(self, stage: Stage) -> "Pipeline":
        """Append a stage (fluent API)."""
        self._stages.append(stage)
        return self

    @property
    def stages(self) -> tuple[Stage, ...]:
        return tuple(self._stages)

    async def run(self, envelope: Envelope) -> Continue | Stop:
        """Run the stages only; return the final outcome."""
        for stage in self._stages:
            outcome = await stage.process(envelope)
            if isinstance(outcome, Stop):
                return outcome
            envelope = outcome.envelope
        return Continue(envelope)

    async def execute(self, envelope: Envelope, handler: Handler | None = None) -> Envelope:
        """Run the stages and, unless one stopped, *handler*."""
        outcome = await self.run(envelope)
        if isinstance(outcome, Continue) and handler is not None:
            await handler(outcome.envelope)
        return outcome.envelope


__all__ = ["Handler", "Pipeline"]
