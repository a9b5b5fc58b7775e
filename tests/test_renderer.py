"""Tests for the portfolio site renderer."""

from portfolio_app.models.theme_models import PortfolioTheme
from portfolio_app.services.portfolio_renderer import PortfolioRenderer
from portfolio_app.services.theme_generator import FALLBACK_THEME


def test_render_named_theme(sample_record):
    """Test rendering with a recommended theme."""
    renderer = PortfolioRenderer()
    html = renderer.render(sample_record, PortfolioTheme(themeName="Modern", reason="Clean"), "Senior Engineer")

    assert "<!DOCTYPE html>" in html
    assert "Jane Doe" in html
    assert "Senior Engineer" in html
    assert "theme-modern" in html
    assert "Led the payments platform team." in html
    assert "Ledger" in html
    assert "BSc Computer Science" in html
    assert "PostgreSQL" in html


def test_render_custom_theme_variables(sample_record):
    """Test that a generated theme's colours become CSS variables."""
    html = PortfolioRenderer().render(sample_record, FALLBACK_THEME, "Senior Engineer")

    assert "--primary: 210 100% 50%" in html
    assert "layout-grid-standard" in html
    assert "--font-body: 'Inter', sans-serif;" in html


def test_render_custom_profession_wins(sample_record):
    """Test that the user's custom profession replaces the derived one."""
    sample_record.personalInformation.customProfession = "Payments Architect"
    html = PortfolioRenderer().render(sample_record, None, "Senior Engineer")

    assert "Payments Architect" in html
    assert "theme-default" in html


def test_render_escapes_content(sample_record):
    """Test that CV text is HTML-escaped."""
    sample_record.summary = "<script>alert(1)</script>"
    html = PortfolioRenderer().render(sample_record, None, "Engineer")

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;" in html


def test_render_sanitizes_links(sample_record):
    """Test that script links are dropped and bare domains get a scheme."""
    sample_record.personalInformation.linkedin = "linkedin.com/in/janedoe"
    sample_record.projects[0].url = "javascript:alert(1)"
    html = PortfolioRenderer().render(sample_record, None, "Engineer")

    assert "javascript:" not in html
    assert 'href="https://linkedin.com/in/janedoe"' in html
    assert 'href="https://github.com/janedoe"' in html
