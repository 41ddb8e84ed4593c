from __future__ import annotations

from typing import Iterator, Sequence

from project_scheduler.core.model import TaskSpec
from project_scheduler.core.schedule.dependencies import index_by_title


def topological_order(tasks: Sequence[TaskSpec]) -> list[TaskSpec]:
    """Order tasks so each one follows all of its known dependencies.

    Post-order DFS ("dependencies, then self") over tasks in input order, so
    the result is fully determined by the request. Assumes the graph is
    acyclic; callers run detect_cycle() first.
    """
    by_title = index_by_title(tasks)
    visited: set[str] = set()
    ordered: list[TaskSpec] = []

    for task in tasks:
        if task.title in visited:
            continue

        visited.add(task.title)
        stack: list[tuple[TaskSpec, Iterator[str]]] = [(task, iter(task.dependencies))]

        while stack:
            node, deps = stack[-1]
            for dep in deps:
                if dep in by_title and dep not in visited:
                    visited.add(dep)
                    child = by_title[dep]
                    stack.append((child, iter(child.dependencies)))
                    break
            else:
                stack.pop()
                ordered.append(node)

    return ordered
