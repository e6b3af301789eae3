"""pagewalk.report: JSON and HTML reports over walked items."""

from pagewalk.report.html_report import render_html
from pagewalk.report.json_report import render_json

__all__ = ["render_json", "render_html"]
