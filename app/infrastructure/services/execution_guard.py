"""Per-workflow execution guard: at most one in-process execute per workflow id."""

from collections.abc import Iterator
from contextlib import contextmanager

from app.domain.exceptions import ConflictException


class ExecutionGuard:
    """Registry of workflow ids currently executing in this process.

    hold() is synchronous: call it before the first await so two coroutines
    racing on the same id cannot both pass. Different ids never block each other.
    """

    def __init__(self) -> None:
        self._running: set[int] = set()

    def is_running(self, workflow_id: int) -> bool:
        return workflow_id in self._running

    @contextmanager
    def hold(self, workflow_id: int) -> Iterator[None]:
        """Mark workflow_id as executing for the duration of the block.

        Raises:
            ConflictException: Another execute for this id is already running.
        """
        if workflow_id in self._running:
            raise ConflictException(
                f"Workflow {workflow_id} is already being executed",
                workflow_id=workflow_id,
            )
        self._running.add(workflow_id)
        try:
            yield
        finally:
            self._running.discard(workflow_id)
