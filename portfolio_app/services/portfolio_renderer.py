"""Service rendering the portfolio site from Jinja2 templates."""

from pathlib import Path
from typing import Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from portfolio_app.models.cv_models import CvRecord
from portfolio_app.models.theme_models import PortfolioTheme
from portfolio_app.utils.icons import DEFAULT_HEADER_ICON, is_known_icon
from portfolio_app.utils.theme_helpers import register_jinja_filters, theme_css_variables


class PortfolioRenderer:
    """Service to render the portfolio HTML page."""

    def __init__(self, template_dir: Optional[Path] = None):
        """
        Initialize the renderer.

        Args:
            template_dir: Directory containing Jinja2 templates. Defaults to portfolio_app/templates/
        """
        if template_dir is None:
            template_dir = Path(__file__).parent.parent / "templates"

        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
        )
        register_jinja_filters(self.env)

    def render(self, record: CvRecord, theme: Optional[PortfolioTheme], profession: str) -> str:
        """
        Render the portfolio page.

        Args:
            record: CV record
            theme: Active theme (optional)
            profession: Derived profession label

        Returns:
            str: Rendered HTML string
        """
        info = record.personalInformation
        header_icon = info.selectedHeaderIcon if is_known_icon(info.selectedHeaderIcon) else DEFAULT_HEADER_ICON
        style = theme.themeStyle if theme else None

        template = self.env.get_template("portfolio.html")
        return template.render(
            cv=record,
            theme=theme,
            css_variables=theme_css_variables(theme),
            layout_style=style.layoutStyle if style else "grid-standard",
            card_style=style.cardStyle if style else "shadow-soft",
            display_profession=info.customProfession or profession,
            header_icon=header_icon,
        )
