"""Progress signals emitted by the sync and export pipelines."""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Tuple

logger = logging.getLogger(__name__)

STARTED = "started"
FINISHED = "finished"


@dataclass(frozen=True)
class PhaseEvent:
    """One observational signal: a phase started or finished."""
    phase: str
    stage: str  # STARTED | FINISHED
    keys: Tuple[str, ...] = field(default_factory=tuple)
    count: Optional[int] = None
    result: Any = None
    error: Optional[Exception] = None
    detail: str = ""

    @property
    def started(self) -> bool:
        return self.stage == STARTED

    @property
    def finished(self) -> bool:
        return self.stage == FINISHED


PhaseListener = Callable[[PhaseEvent], Any]


def emit(listener: Optional[PhaseListener], event: PhaseEvent) -> None:
    """
    Deliver an event to the listener.

    Listener failures are logged and never change the pipeline's control flow.
    """
    logger.debug("%s %s", event.phase, event.stage)

    if listener is None:
        return

    try:
        listener(event)
    except Exception:
        logger.warning("Progress listener failed on %s/%s", event.phase, event.stage, exc_info=True)
