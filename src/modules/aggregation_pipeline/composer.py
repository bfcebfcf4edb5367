import logging
from collections.abc import Awaitable, Callable
from time import perf_counter
from typing import NamedTuple

logger = logging.getLogger(__name__)

# A step returns how many articles it left behind, or None when that is not meaningful.
PipelineStep = Callable[[], Awaitable[int | None]]


class StepReport(NamedTuple):
    name: str
    items: int | None
    seconds: float


class PipelineComposer:
    """Runs named async steps in order and records what each one produced.

    ``reports`` holds one ``StepReport`` per completed step of the most recent
    run, so a run that aborts part way still shows where it stopped.
    """

    def __init__(self, label: str = "pipeline") -> None:
        self._label = label
        self._steps: list[tuple[str, PipelineStep]] = []
        self.reports: list[StepReport] = []

    @property
    def step_names(self) -> list[str]:
        return [name for name, _ in self._steps]

    def add_step(self, name: str, step: PipelineStep) -> None:
        self._steps.append((name, step))

    async def run(self) -> list[StepReport]:
        self.reports = []
        logger.info("[%s] started (%d steps)", self._label, len(self._steps))
        started = perf_counter()
        for name, step in self._steps:
            step_started = perf_counter()
            items = await step()
            report = StepReport(name, items, perf_counter() - step_started)
            self.reports.append(report)
            if items is None:
                logger.info("[%s] %s done in %.2fs", self._label, name, report.seconds)
            else:
                logger.info(
                    "[%s] %s -> %d articles in %.2fs",
                    self._label, name, items, report.seconds,
                )
        logger.info("[%s] finished in %.1fs", self._label, perf_counter() - started)
        return self.reports
