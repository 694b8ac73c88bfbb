"""
HTML Report Renderer using Jinja2 templates.

Renders a human readable summary of a menu classification: KPI cards for
the headline counts and one table per group of paths.
"""

import os
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from jinja2 import Environment, FileSystemLoader, TemplateError, TemplateNotFound

from menu_validator import __version__
from menu_validator.classification import ClassificationResult, MenuPath

DEFAULT_TEMPLATE = "menu_report.html.j2"


@dataclass
class KPICard:
    """A summary metric displayed prominently at the top of reports."""
    title: str
    value: str
    status: str  # "success", "info", "warning", "danger"
    tooltip: Optional[str] = None


@dataclass
class ReportSection:
    """A table of menu paths."""
    title: str
    status: str
    entries: List[MenuPath] = field(default_factory=list)
    description: Optional[str] = None


@dataclass
class ReportContext:
    """Data passed to the Jinja2 template."""
    tool_name: str
    tool_version: str
    source: str
    scan_timestamp: datetime
    kpis: List[KPICard]
    sections: List[ReportSection]
    footer_note: Optional[str] = None


def build_report_context(result: ClassificationResult, source: str) -> ReportContext:
    """
    Assemble the template context for a classification result.

    Args:
        result: Classified menu paths
        source: Where the menus came from (URL or file path)
    """
    roots = result.roots()
    kpis = [
        KPICard(
            title="Root Menus",
            value=str(len(roots['valid_roots']) + len(roots['invalid_roots'])),
            status="info",
        ),
        KPICard(
            title="Valid Paths",
            value=str(result.valid_count),
            status="success",
        ),
        KPICard(
            title="Invalid Paths",
            value=str(result.invalid_count),
            status="danger" if result.invalid_count else "success",
            tooltip="Paths that revisit a menu or return to their root",
        ),
    ]
    sections = [
        ReportSection(
            title="Valid Menus",
            status="success",
            entries=list(result.valid),
            description="Paths that reach a leaf without revisiting any menu.",
        ),
        ReportSection(
            title="Invalid Menus",
            status="danger",
            entries=list(result.invalid),
            description="Paths that close a cycle.",
        ),
    ]
    return ReportContext(
        tool_name="Menu Validator",
        tool_version=__version__,
        source=source,
        scan_timestamp=datetime.now(),
        kpis=kpis,
        sections=sections,
    )


class ReportRenderer:
    """
    Renders HTML reports using Jinja2 templates.
    """

    def __init__(self, template_dir: Optional[Union[str, Path]] = None):
        """
        Initialize the ReportRenderer.

        Args:
            template_dir: Path to template directory. If None, uses the
                         templates/ directory shipped with the package.
        """
        if template_dir is None:
            template_dir = Path(__file__).parent / "templates"

        if not Path(template_dir).exists():
            raise FileNotFoundError(f"Template directory not found: {template_dir}")

        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, context: ReportContext, template_name: str = DEFAULT_TEMPLATE) -> str:
        """
        Render a report to an HTML string.

        Raises:
            TemplateNotFound: If the template file doesn't exist
            TemplateError: If template rendering fails
        """
        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound:
            raise TemplateNotFound(
                f"Template '{template_name}' not found. "
                f"Available templates: {self._list_available_templates()}"
            )
        try:
            return template.render(
                tool_name=context.tool_name,
                tool_version=context.tool_version,
                source=context.source,
                scan_timestamp=context.scan_timestamp,
                kpis=context.kpis,
                sections=context.sections,
                footer_note=context.footer_note,
            )
        except TemplateError as e:
            raise TemplateError(f"Error rendering template '{template_name}': {e}")

    def render_report(
        self,
        context: ReportContext,
        output_path: Union[str, Path],
        template_name: str = DEFAULT_TEMPLATE,
    ) -> None:
        """
        Render a report and write it to output_path atomically.
        """
        html_content = self.render(context, template_name)

        temp_path = f"{output_path}.tmp"
        try:
            with open(temp_path, 'w', encoding='utf-8') as f:
                f.write(html_content)
            os.replace(temp_path, output_path)
        except Exception:
            if os.path.exists(temp_path):
                os.remove(temp_path)
            raise

    def _list_available_templates(self) -> List[str]:
        """List available templates in the template directory."""
        template_dir = Path(self.env.loader.searchpath[0])
        return [f.name for f in template_dir.glob("*.j2") if f.is_file()]
