"""Helpers turning a theme into CSS for the rendered portfolio."""

import re
from typing import Dict, Optional
from urllib.parse import urlsplit

from jinja2 import Environment
from markupsafe import Markup

from portfolio_app.models.theme_models import PortfolioTheme


SPACING_SCALE_REM = {
    "compact": "0.75rem",
    "regular": "1.25rem",
    "spacious": "2rem",
}


def css_variable_name(name: str) -> str:
    """
    Convert a camelCase theme variable to a CSS custom property.

    Example: "primaryForeground" -> "--primary-foreground"
    """
    return "--" + re.sub(r"(?<!^)(?=[A-Z])", "-", name).lower()


def theme_class_name(theme_name: Optional[str]) -> str:
    """
    CSS class for a named theme.

    Example: "Modern" -> "theme-modern"; empty names give "theme-default"
    """
    slug = re.sub(r"[^a-z0-9]+", "-", (theme_name or "").lower()).strip("-")
    return f"theme-{slug or 'default'}"


def theme_css_variables(theme: Optional[PortfolioTheme]) -> Dict[str, str]:
    """
    Map a theme to CSS custom properties.

    Named themes without variables map to an empty dict; their look comes
    from the theme class.
    """
    if theme is None:
        return {}
    variables: Dict[str, str] = {}
    if theme.themeVariables:
        for name, value in theme.themeVariables.model_dump().items():
            variables[css_variable_name(name)] = value
    if theme.themeStyle:
        style = theme.themeStyle
        variables["--font-body"] = style.fontFamilyBody
        variables["--font-heading"] = style.fontFamilyHeading
        variables["--font-size-base"] = style.baseFontSize
        variables["--spacing"] = SPACING_SCALE_REM[style.spacingScale]
    return variables


def css_value(value: str) -> Markup:
    """
    Make a theme value safe to place inside a <style> block.

    Characters that could close the declaration or the block are dropped;
    quotes are kept since font names need them.
    """
    return Markup(re.sub(r"[<>{};\\]", "", str(value)))


SAFE_URL_SCHEMES = ("http", "https", "mailto")


def safe_url(url: Optional[str]) -> str:
    """
    Pass links with an allowed scheme, replace anything else with "#".

    Links without a scheme, as CVs usually write them, get "https://".
    Example: "javascript:alert(1)" -> "#", "github.com/jane" -> "https://github.com/jane"
    """
    value = (url or "").strip()
    if not value:
        return "#"
    scheme = urlsplit(value).scheme.lower()
    if not scheme:
        return "https://" + value.lstrip("/")
    return value if scheme in SAFE_URL_SCHEMES else "#"


def register_jinja_filters(env: Environment) -> None:
    """
    Register helper functions as Jinja2 filters.

    Args:
        env: Jinja2 Environment instance
    """
    env.filters["theme_class"] = theme_class_name
    env.filters["css_value"] = css_value
    env.filters["safe_url"] = safe_url
