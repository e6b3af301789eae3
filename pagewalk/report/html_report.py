"""pagewalk.report.html_report: HTML report generation with Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Iterable, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from pagewalk.report.json_report import to_records

DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


def render_html(
    items: Iterable[Any],
    template_dir: Union[Path, str, None],
    output_path: Union[Path, str],
) -> Path:
    """Render the HTML report from a template and save it to the given path.

    Args:
        items: walked items.
        template_dir: directory holding ``report.html.j2``; ``None`` uses the bundled one.
        output_path: path of the resulting HTML file.

    Returns:
        Path of the saved HTML file.

    Example:
    ```python
    from pagewalk.report.html_report import render_html
    html_path = render_html(items, template_dir=None, output_path='reports/items.html')
    ```
    """
    template_dir = Path(template_dir) if template_dir is not None else DEFAULT_TEMPLATE_DIR
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )
    template = env.get_template("report.html.j2")

    records = to_records(items)
    context: dict[str, Any] = {
        "items": records,
        "count": len(records),
    }

    html_content = template.render(**context)
    output_path.write_text(html_content, encoding="utf-8")

    return output_path
