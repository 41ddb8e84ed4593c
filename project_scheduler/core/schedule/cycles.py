from __future__ import annotations

from typing import Iterator, Sequence

from project_scheduler.core.model import ScheduleWarning, TaskSpec
from project_scheduler.core.schedule.dependencies import index_by_title


CYCLE_MESSAGE = "Circular dependency detected"


def detect_cycle(tasks: Sequence[TaskSpec]) -> list[str]:
    """Return the first dependency cycle found, or [] when the graph is acyclic.

    Three-color DFS from each task in input order, following dependencies in
    list order. The cycle is the current path from the revisited node onward,
    closed by repeating that node, e.g. ["A", "B", "A"] or ["A", "A"] for a
    self-dependency. Unknown dependency names are dead ends.
    """
    WHITE, GRAY, BLACK = 0, 1, 2
    by_title = index_by_title(tasks)
    state: dict[str, int] = {title: WHITE for title in by_title}

    for task in tasks:
        if state[task.title] != WHITE:
            continue

        state[task.title] = GRAY
        path: list[str] = [task.title]
        stack: list[Iterator[str]] = [iter(task.dependencies)]

        while stack:
            for dep in stack[-1]:
                if dep not in by_title:
                    continue
                if state[dep] == GRAY:
                    return path[path.index(dep):] + [dep]
                if state[dep] == WHITE:
                    state[dep] = GRAY
                    path.append(dep)
                    stack.append(iter(by_title[dep].dependencies))
                    break
            else:
                stack.pop()
                state[path.pop()] = BLACK

    return []


def cycle_warning(cycle: Sequence[str]) -> ScheduleWarning:
    return ScheduleWarning(task=", ".join(cycle), message=CYCLE_MESSAGE, severity="Error")
