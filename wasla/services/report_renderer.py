"""
Wasla - Printable report
Renders the monthly report as a standalone HTML page the browser can print or save as PDF.
"""
from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from wasla.schemas.dashboard import MonthlyReport

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml"])
)


def render_monthly_report(report: MonthlyReport, tenant_name: str, currency: str = "₪") -> str:
    template = env.get_template("monthly_report.html")
    return template.render(
        report=report,
        tenant_name=tenant_name,
        currency=currency,
        generated_at=datetime.now().strftime("%Y-%m-%d %H:%M"),
    )
