"""Concurrent collection of top-level nodes from the source adapters."""
import contextvars
import os
from collections.abc import Sequence
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from typing import Protocol

import structlog

from console_api.tree.schemas import Node, RequestContext

logger = structlog.get_logger()

MAX_WORKERS = 6


class TreeSource(Protocol):
    """A source adapter contributing top-level nodes to the tree."""

    name: str
    description: str

    def fetch(self, context: RequestContext) -> Node | list[Node]: ...


class AggregationError(Exception):
    """Raised when any source adapter fails or the join times out."""

    def __init__(self, message: str, source: str) -> None:
        """Initialize aggregation error.

        Args:
            message: Error description.
            source: Name of the adapter that failed.
        """
        super().__init__(message)
        self.source = source


def _run_source(source: TreeSource, context: RequestContext) -> list[Node]:
    structlog.contextvars.bind_contextvars(tree_source=source.name)
    result = source.fetch(context)
    return [result] if isinstance(result, Node) else list(result)


def gather(
    sources: Sequence[TreeSource],
    context: RequestContext,
    max_workers: int = MAX_WORKERS,
    timeout: float | None = None,
) -> list[list[Node]]:
    """Run all source adapters concurrently and join their results.

    The pool is created for this call only. Every task receives its own
    copy of the request context and of the logging context variables.
    The join is all-or-nothing: the first failure aborts the call.

    Args:
        sources: Adapters to run.
        context: Caller context, copied into each task.
        max_workers: Upper bound on pool size.
        timeout: Seconds to wait for all adapters, or None to wait forever.

    Returns:
        One node list per source, in source order.

    Raises:
        AggregationError: If an adapter raises or the timeout expires.
    """
    if not sources:
        return []

    workers = max(1, min(os.cpu_count() or 1, max_workers, len(sources)))
    executor = ThreadPoolExecutor(max_workers=workers, thread_name_prefix="tree-source")
    futures: dict[Future[list[Node]], TreeSource] = {}

    logger.debug("tree_gather_started", sources=len(sources), workers=workers)

    try:
        for source in sources:
            task_context = contextvars.copy_context()
            future = executor.submit(
                task_context.run,
                _run_source,
                source,
                context.model_copy(deep=True),
            )
            futures[future] = source

        done, pending = wait(futures, timeout=timeout, return_when=FIRST_EXCEPTION)

        for future in done:
            error = future.exception()
            if error is not None:
                source = futures[future]
                logger.error(
                    "tree_source_failed",
                    source=source.name,
                    error=str(error),
                    exc_info=error,
                )
                raise AggregationError(
                    f"Failed to get {source.description}", source.name
                ) from error

        if pending:
            names = sorted(futures[f].name for f in pending)
            logger.error("tree_gather_timeout", pending=names, timeout=timeout)
            raise AggregationError(
                f"Timed out after {timeout}s waiting for {', '.join(names)}",
                names[0],
            )

        return [future.result() for future in futures]
    finally:
        executor.shutdown(wait=False, cancel_futures=True)
