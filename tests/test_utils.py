"""Tests for upload validation, field paths, icons and theme helpers."""

import pytest

from portfolio_app.config import AppSettings
from portfolio_app.exceptions import FieldUpdateError, UploadTooLargeError, ValidationError
from portfolio_app.models.cv_models import CvRecord
from portfolio_app.models.theme_models import PortfolioTheme, ThemeStyle, ThemeVariables
from portfolio_app.utils.field_paths import apply_path, check_model_path, parse_path
from portfolio_app.utils.icons import DEFAULT_HEADER_ICON, is_known_icon, search_icons
from portfolio_app.utils.theme_helpers import (
    css_value,
    css_variable_name,
    safe_url,
    theme_class_name,
    theme_css_variables,
)
from portfolio_app.utils.upload_validation import MAX_UPLOAD_BYTES, to_data_uri, validate_profession, validate_upload


MIB = 1024 * 1024


# Upload validation

@pytest.mark.parametrize(
    "mime_type",
    [
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "text/plain; charset=utf-8",
    ],
)
def test_accepted_upload_types(mime_type):
    """Test that the four document types are accepted."""
    validate_upload(b"content", mime_type)


def test_upload_at_limit_is_accepted():
    """Test that exactly 5 MiB passes."""
    validate_upload(b"x" * (5 * MIB), "application/pdf")


def test_settings_share_upload_limit():
    """Test that the configured default is the validation limit."""
    assert AppSettings.model_fields["max_upload_bytes"].default == MAX_UPLOAD_BYTES == 5 * MIB


def test_upload_too_large():
    """Test that a 6 MiB file is rejected."""
    with pytest.raises(UploadTooLargeError, match="Max file size is 5MB."):
        validate_upload(b"x" * (6 * MIB), "application/pdf")


@pytest.mark.parametrize("content,mime_type", [(b"", "application/pdf"), (b"x", "image/png"), (b"x", None)])
def test_invalid_uploads(content, mime_type):
    """Test empty files and unsupported types."""
    with pytest.raises(ValidationError):
        validate_upload(content, mime_type)


def test_validate_profession():
    """Test profession length rules."""
    assert validate_profession("  Software Engineer ") == "Software Engineer"
    with pytest.raises(ValidationError):
        validate_profession("QA")
    with pytest.raises(ValidationError):
        validate_profession("x" * 101)


def test_to_data_uri():
    """Test base64 data URI encoding."""
    assert to_data_uri(b"Hello", "text/plain; charset=utf-8") == "data:text/plain;base64,SGVsbG8="


# Field paths

def test_parse_path():
    """Test splitting of dotted paths."""
    assert parse_path("experience.0.title") == ["experience", 0, "title"]
    assert parse_path("summary") == ["summary"]
    assert parse_path("experience.².title") == ["experience", "²", "title"]


def test_apply_path_copies_containers():
    """Test that the input data is not modified."""
    data = {"experience": [{"title": "A"}, {"title": "B"}], "skills": ["x"]}
    updated = apply_path(data, ["experience", 1, "title"], "C")

    assert updated["experience"][1]["title"] == "C"
    assert data["experience"][1]["title"] == "B"
    assert updated["skills"] is data["skills"]


def test_apply_path_creates_missing_containers():
    """Test that unset containers along the path are created."""
    assert apply_path({"projects": None}, ["projects", 0, "name"], "X") == {"projects": [{"name": "X"}]}


def test_apply_path_errors():
    """Test out-of-range indexes and mismatched containers."""
    with pytest.raises(FieldUpdateError):
        apply_path({"skills": ["a"]}, ["skills", 3], "b")
    with pytest.raises(FieldUpdateError):
        apply_path({"skills": ["a"]}, ["skills", "first"], "b")
    with pytest.raises(FieldUpdateError):
        apply_path({"summary": "text"}, ["summary", 0], "b")


def test_check_model_path():
    """Test path checks against the CV record schema."""
    check_model_path(CvRecord, ["personalInformation", "avatarImage"])
    check_model_path(CvRecord, ["projects", 0, "technologiesUsed", 1])
    with pytest.raises(FieldUpdateError, match="Unknown field"):
        check_model_path(CvRecord, ["personalInformation", "age"])
    with pytest.raises(FieldUpdateError):
        check_model_path(CvRecord, ["personalInformation", 0])


# Icons

def test_icon_catalog():
    """Test icon lookup and search."""
    assert is_known_icon(DEFAULT_HEADER_ICON)
    assert not is_known_icon("NotAnIcon")
    assert not is_known_icon(None)
    assert "Code2" in search_icons("programming")
    assert "Palette" in search_icons("pal")
    assert len(search_icons("")) == len(search_icons("  "))


# Theme helpers

def test_css_variable_name():
    """Test camelCase to CSS custom property conversion."""
    assert css_variable_name("primaryForeground") == "--primary-foreground"
    assert css_variable_name("background") == "--background"


def test_css_value_keeps_quotes():
    """Test that font names survive and block-breaking characters do not."""
    assert css_value("'Inter', sans-serif") == "'Inter', sans-serif"
    assert css_value("red; } body { display: none") == "red  body  display: none"


@pytest.mark.parametrize(
    "url,expected",
    [
        ("https://github.com/jane", "https://github.com/jane"),
        ("mailto:jane@example.com", "mailto:jane@example.com"),
        ("linkedin.com/in/jane", "https://linkedin.com/in/jane"),
        ("javascript:alert(1)", "#"),
        (" JavaScript:alert(1)", "#"),
        ("data:text/html;base64,PHNjcmlwdD4=", "#"),
        ("", "#"),
        (None, "#"),
    ],
)
def test_safe_url(url, expected):
    """Test that only web and mail links reach an href."""
    assert safe_url(url) == expected


def test_theme_class_name():
    """Test CSS class names for named themes."""
    assert theme_class_name("Modern") == "theme-modern"
    assert theme_class_name("Default Fallback Light") == "theme-default-fallback-light"
    assert theme_class_name("") == "theme-default"
    assert theme_class_name(None) == "theme-default"


def test_theme_css_variables():
    """Test the CSS variables emitted for a custom theme."""
    theme = PortfolioTheme(
        themeName="Slate",
        themeVariables=ThemeVariables(**{name: "210 10% 50%" for name in ThemeVariables.model_fields}),
        themeStyle=ThemeStyle(
            fontFamilyBody="'Inter', sans-serif",
            fontFamilyHeading="'Lora', serif",
            baseFontSize="17px",
            layoutStyle="grid-standard",
            cardStyle="shadow-soft",
            spacingScale="compact",
        ),
    )
    variables = theme_css_variables(theme)

    assert variables["--card-foreground"] == "210 10% 50%"
    assert variables["--font-heading"] == "'Lora', serif"
    assert variables["--font-size-base"] == "17px"
    assert variables["--spacing"] == "0.75rem"
    assert theme_css_variables(PortfolioTheme(themeName="Modern")) == {}
    assert theme_css_variables(None) == {}
