# pagewalk/report/json_report.py

"""
JSON report generation for PageWalk.

Serializes the walked items into a file.
"""
import json
from dataclasses import asdict, is_dataclass
from pathlib import Path
from typing import Any, Iterable, List

from pagewalk.walker.models import FeedEntry


def to_records(items: Iterable[Any]) -> List[Any]:
    """Convert walked items into JSON-serializable values."""
    records = []
    for item in items:
        if isinstance(item, FeedEntry):
            records.append(item.as_dict())
        elif is_dataclass(item) and not isinstance(item, type):
            records.append(asdict(item))
        else:
            records.append(item)
    return records


def render_json(items: Iterable[Any], output_path: Path | str) -> Path:
    """
    Save *items* as a JSON array at the given path.

    :param items: walked items (FeedEntry objects or decoded JSON values)
    :param output_path: path of the JSON file
    :return: Path of the saved file

    Example:
    ```python
    from pagewalk.report.json_report import render_json
    report_path = render_json(items, 'reports/items.json')
    print(f"JSON report saved to: {report_path}")
    ```
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    with output.open('w', encoding='utf-8') as f:
        json.dump(to_records(items), f, ensure_ascii=False, indent=2)

    return output
