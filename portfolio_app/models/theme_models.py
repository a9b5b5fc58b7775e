"""Pydantic models for portfolio themes."""

from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


AVAILABLE_THEMES = ("Modern", "Classic", "Creative", "Minimalist", "Corporate", "Academic")

THEME_VARIABLE_NAMES = (
    "background",
    "foreground",
    "primary",
    "primaryForeground",
    "secondary",
    "secondaryForeground",
    "accent",
    "accentForeground",
    "card",
    "cardForeground",
    "border",
    "input",
    "ring",
)

LayoutStyle = Literal["grid-standard", "list-compact", "focus-hero", "minimal-rows"]
CardStyle = Literal["shadow-soft", "flat-bordered", "rounded-elevated", "minimal-outline"]
SpacingScale = Literal["compact", "regular", "spacious"]


class ThemeMode(str, Enum):
    """Preferred colour scheme."""

    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


class ThemeRecommendation(BaseModel):
    """A single suggested theme with its justification."""

    themeName: str
    reason: str


class ThemeVariables(BaseModel):
    """The thirteen colour variables of a theme, as 'H S% L%' strings."""

    background: str
    foreground: str
    primary: str
    primaryForeground: str
    secondary: str
    secondaryForeground: str
    accent: str
    accentForeground: str
    card: str
    cardForeground: str
    border: str
    input: str
    ring: str


class ThemeStyle(BaseModel):
    """Typography and layout keywords of a generated theme."""

    fontFamilyBody: str
    fontFamilyHeading: str
    baseFontSize: str
    layoutStyle: LayoutStyle
    cardStyle: CardStyle
    spacingScale: SpacingScale


class CustomTheme(BaseModel):
    """A complete AI-generated theme option."""

    themeName: str
    description: str
    themeVariables: ThemeVariables
    themeStyle: ThemeStyle
    previewImagePrompt: str


class CustomThemePreferences(BaseModel):
    """User preferences driving custom theme generation."""

    vibe: str = Field(..., min_length=1, examples=["Minimalist & Clean"])
    colorPreference: str = Field(..., min_length=1, examples=["Monochromatic"])
    mode: ThemeMode = ThemeMode.SYSTEM
    industryInspiration: Optional[str] = None
    currentProfession: Optional[str] = None


class PortfolioTheme(BaseModel):
    """
    The active portfolio theme.

    Holds either a plain recommendation (name + reason) or a full custom
    theme, so everything except the name is optional.
    """

    themeName: str
    reason: Optional[str] = None
    description: Optional[str] = None
    themeVariables: Optional[ThemeVariables] = None
    themeStyle: Optional[ThemeStyle] = None
    previewImagePrompt: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @classmethod
    def from_recommendation(cls, recommendation: ThemeRecommendation) -> "PortfolioTheme":
        return cls(**recommendation.model_dump())

    @classmethod
    def from_custom_theme(cls, theme: CustomTheme) -> "PortfolioTheme":
        return cls(**theme.model_dump())
