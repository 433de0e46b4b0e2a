"""
Email template loader and renderer.
Handles Jinja2 templates for notification emails.
"""

import logging
from typing import Dict, Any, List
from pathlib import Path
from jinja2 import Environment, FileSystemLoader, select_autoescape
from datetime import datetime

logger = logging.getLogger(__name__)


class EmailTemplateLoader:
    """Loads and renders email templates using Jinja2."""

    def __init__(self, app_name: str = "Agency", templates_dir: Path = None):
        """Initialize template loader with email templates directory."""
        self.app_name = app_name
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"

        # Create Jinja2 environment
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html"]),
        )

        # Register custom filters
        self._register_filters()

    def _register_filters(self):
        """Register custom Jinja2 filters for email templates."""

        def format_currency(value, symbol="$"):
            """Format currency value."""
            try:
                return f"{symbol}{float(value):,.2f}"
            except (TypeError, ValueError):
                return str(value)

        def format_date(value, format="%B %d, %Y"):
            """Format date value."""
            try:
                if isinstance(value, str):
                    date_obj = datetime.fromisoformat(value.replace("Z", "+00:00"))
                elif isinstance(value, datetime):
                    date_obj = value
                else:
                    return str(value)

                return date_obj.strftime(format)
            except ValueError:
                return str(value)

        def humanize(value):
            """bank_transfer -> Bank Transfer"""
            return str(value or "").replace("_", " ").replace("-", " ").title()

        self.env.filters["currency"] = format_currency
        self.env.filters["date"] = format_date
        self.env.filters["humanize"] = humanize

    async def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """
        Render email template with context.

        Args:
            template_name: Name of template file (e.g., 'invoice_sent.html')
            context: Template context variables

        Returns:
            Rendered template content
        """
        try:
            enhanced_context = {
                **context,
                "current_year": datetime.now().year,
                "app_name": self.app_name,
            }

            template = self.env.get_template(template_name)
            rendered = template.render(**enhanced_context)

            logger.debug(f"Successfully rendered template: {template_name}")
            return rendered

        except Exception as e:
            logger.error(f"Failed to render template {template_name}: {str(e)}")
            return self._get_fallback_template(context)

    def _get_fallback_template(self, context: Dict[str, Any]) -> str:
        """Plain layout used when the real template cannot be rendered."""
        subject = context.get("subject", "Notification")
        recipient = context.get("recipient_name", "there")
        body = context.get("message", "")

        return f"""
        <!DOCTYPE html>
        <html>
        <head><meta charset="UTF-8"><title>{subject}</title></head>
        <body style="font-family: Arial, sans-serif; line-height: 1.6; color: #333;">
            <div style="max-width: 600px; margin: 0 auto; padding: 20px;">
                <h2>Hello {recipient},</h2>
                <p>{body}</p>
                <p>Best regards,<br>{self.app_name}</p>
            </div>
        </body>
        </html>
        """

    def template_exists(self, template_name: str) -> bool:
        """Check if template file exists."""
        return (self.templates_dir / template_name).exists()

    def list_templates(self) -> List[str]:
        """List all available email templates."""
        return sorted(path.name for path in self.templates_dir.glob("*.html"))
