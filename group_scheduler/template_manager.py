from jinja2 import Environment, FileSystemLoader, select_autoescape, TemplateNotFound
from pathlib import Path
from typing import List

from .aggregator import memos_for_date
from .models import AggregatedSlot, Event
from .exceptions import TemplateError


DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


class TemplateEngine:
    """Renders result reports using Jinja2."""
    
    def __init__(self, template_dir: Path = DEFAULT_TEMPLATE_DIR):
        """Initialize template engine with template directory."""
        self.template_dir = Path(template_dir)
        
        if not self.template_dir.exists():
            raise TemplateError(f"Template directory not found: {template_dir}")
        
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
    
    def list_templates(self) -> List[str]:
        """List available template files."""
        templates = []
        for file_path in self.template_dir.glob("*.txt"):
            templates.append(file_path.name)
        for file_path in self.template_dir.glob("*.md"):
            templates.append(file_path.name)
        return sorted(templates)
    
    def render(self, template_name: str, *, event: Event, slots: List[AggregatedSlot]) -> str:
        """Render a report of ranked meeting times.
        
        Args:
            template_name: Name of template file
            event: Event the results were computed from
            slots: Ranked aggregation result
            
        Returns:
            Rendered template content
            
        Raises:
            TemplateError: If template not found or rendering fails
        """
        try:
            template = self.env.get_template(template_name)
        except TemplateNotFound:
            raise TemplateError(f"Template not found: {template_name}")
        
        dates = event.target_dates()
        context = {
            "title": event.title,
            "description": event.description,
            "dates": dates,
            "participant_count": len(event.participants),
            "participants": [p.name for p in event.participants],
            "slots": slots,
            "memos": {d: memos_for_date(event, d) for d in dates},
        }
        
        try:
            return template.render(**context)
        except Exception as e:
            raise TemplateError(f"Failed to render template {template_name}: {e}")
    
    def validate_template(self, template_name: str) -> bool:
        """Validate that template exists and can be loaded."""
        try:
            self.env.get_template(template_name)
            return True
        except TemplateNotFound:
            return False
        except Exception:
            return False
