"""JSON task file adapter."""

import json
from pathlib import Path
from typing import Iterable, List

from ..models.task import Task


def _parse_item(item: dict, index: int) -> Task:
    if not isinstance(item, dict):
        raise ValueError(f"Item {index}: expected an object")
    try:
        return Task.from_dict(item)
    except ValueError as exc:
        raise ValueError(f"Item {index}: {exc}") from exc


def load_tasks(file_path: str) -> List[Task]:
    """Load tasks from a JSON file; a missing file is an empty collection."""
    path = Path(file_path)
    if not path.exists():
        return []

    with open(path, encoding="utf-8") as handle:
        payload = json.load(handle)

    if not isinstance(payload, list):
        raise ValueError("JSON payload must be a list of objects")

    tasks = [_parse_item(item, i) for i, item in enumerate(payload, start=1)]
    seen = set()
    for i, task in enumerate(tasks, start=1):
        if task.task_id in seen:
            raise ValueError(f"Item {i}: duplicate task id '{task.task_id}'")
        seen.add(task.task_id)
    return tasks


def save_tasks(file_path: str, tasks: Iterable[Task]) -> None:
    """Write tasks to a JSON file ordered by start time."""
    ordered = sorted(tasks, key=lambda task: task.start_time)
    with open(file_path, 'w', encoding="utf-8") as handle:
        json.dump([task.to_dict() for task in ordered], handle, indent=2)
