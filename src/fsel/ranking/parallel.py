"""Fork-join execution of independent tasks on a thread pool."""

from __future__ import annotations

import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Callable, TypeVar

T = TypeVar("T")


def resolve_n_jobs(n_jobs: int | None) -> int:
    """Number of workers to use. None = all cores."""
    if n_jobs is None:
        return os.cpu_count() or 1
    return max(1, n_jobs)


def fork_join(
    task: Callable[[int], T],
    n_tasks: int,
    n_jobs: int | None = 1,
    *,
    min_tasks: int = 2,
) -> list[T]:
    """Run ``task(i)`` for ``i in range(n_tasks)`` and collect results in order.

    Tasks must only read shared inputs; each result lands in its own slot.
    The first task exception propagates to the caller.

    Args:
        task: Function of the task index.
        n_tasks: Number of tasks.
        n_jobs: Number of worker threads. None = all cores.
        min_tasks: Below this many tasks, run sequentially.

    Returns:
        List of task results indexed by task.
    """
    n_jobs = resolve_n_jobs(n_jobs)

    # Thread startup costs more than a handful of tasks
    if n_jobs == 1 or n_tasks < min_tasks:
        return [task(i) for i in range(n_tasks)]

    results: list[T | None] = [None] * n_tasks
    with ThreadPoolExecutor(max_workers=min(n_jobs, n_tasks)) as executor:
        futures = {executor.submit(task, i): i for i in range(n_tasks)}
        for future in as_completed(futures):
            results[futures[future]] = future.result()
    return results  # type: ignore[return-value]
