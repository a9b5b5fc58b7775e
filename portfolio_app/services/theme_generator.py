"""Service generating custom portfolio themes from style preferences."""

from typing import Any, Dict, List, Optional, get_args

from loguru import logger

from portfolio_app.exceptions import LLMServiceError, ThemeGenerationError
from portfolio_app.models.theme_models import (
    THEME_VARIABLE_NAMES,
    CardStyle,
    CustomTheme,
    CustomThemePreferences,
    LayoutStyle,
    SpacingScale,
    ThemeMode,
    ThemeStyle,
    ThemeVariables,
)
from portfolio_app.services.llm_service import LLMService


REQUESTED_THEMES = 3
MIN_THEMES = 2
MAX_THEMES = 4

DEFAULT_THEME_DESCRIPTION = "A custom generated theme by AI."
DEFAULT_PREVIEW_PROMPT = "abstract modern ui"

LIGHT_VARIABLE_DEFAULTS = {
    "background": "0 0% 100%",
    "foreground": "0 0% 10%",
    "primary": "240 5.9% 10%",
    "primaryForeground": "0 0% 98%",
    "secondary": "240 4.8% 95.9%",
    "secondaryForeground": "240 5.9% 10%",
    "accent": "174 100% 29%",
    "accentForeground": "0 0% 100%",
    "card": "0 0% 98%",
    "cardForeground": "0 0% 10%",
    "border": "0 0% 90%",
    "input": "0 0% 90%",
    "ring": "240 5.9% 10%",
}

DARK_VARIABLE_DEFAULTS = {
    **LIGHT_VARIABLE_DEFAULTS,
    "background": "0 0% 10%",
    "foreground": "0 0% 90%",
    "card": "0 0% 15%",
    "cardForeground": "0 0% 90%",
    "border": "0 0% 20%",
    "input": "0 0% 20%",
}

# Rotated by theme index so backfilled themes still differ from each other
STYLE_DEFAULTS = {
    "fontFamilyBody": ["'Inter', sans-serif", "'Roboto', sans-serif", "'Lato', sans-serif"],
    "fontFamilyHeading": ["'Montserrat', sans-serif", "'Playfair Display', serif", "'Open Sans', sans-serif"],
    "baseFontSize": ["15px", "16px", "17px"],
    "layoutStyle": ["grid-standard", "focus-hero", "minimal-rows"],
    "cardStyle": ["shadow-soft", "flat-bordered", "rounded-elevated"],
    "spacingScale": ["compact", "regular", "spacious"],
}

STYLE_CHOICES = {
    "layoutStyle": get_args(LayoutStyle),
    "cardStyle": get_args(CardStyle),
    "spacingScale": get_args(SpacingScale),
}

FALLBACK_THEME = CustomTheme(
    themeName="Default Fallback Light",
    description="A default light theme as a fallback due to AI generation failure.",
    themeVariables=ThemeVariables(
        background="0 0% 100%",
        foreground="0 0% 10%",
        primary="210 100% 50%",
        primaryForeground="0 0% 100%",
        secondary="210 50% 90%",
        secondaryForeground="210 100% 30%",
        accent="30 100% 50%",
        accentForeground="0 0% 0%",
        card="0 0% 98%",
        cardForeground="0 0% 10%",
        border="0 0% 90%",
        input="0 0% 90%",
        ring="210 100% 50%",
    ),
    themeStyle=ThemeStyle(
        fontFamilyBody="'Inter', sans-serif",
        fontFamilyHeading="'Inter', sans-serif",
        baseFontSize="16px",
        layoutStyle="grid-standard",
        cardStyle="shadow-soft",
        spacingScale="regular",
    ),
    previewImagePrompt="light default abstract",
)


def _string_props(names, description: str) -> Dict[str, Any]:
    return {name: {"type": "STRING", "description": description} for name in names}


THEMES_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "themes": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "themeName": {"type": "STRING"},
                    "description": {"type": "STRING"},
                    "themeVariables": {
                        "type": "OBJECT",
                        "properties": _string_props(THEME_VARIABLE_NAMES, "HSL value like '210 100% 50%'."),
                        "required": list(THEME_VARIABLE_NAMES),
                    },
                    "themeStyle": {
                        "type": "OBJECT",
                        "properties": {
                            "fontFamilyBody": {"type": "STRING"},
                            "fontFamilyHeading": {"type": "STRING"},
                            "baseFontSize": {"type": "STRING"},
                            "layoutStyle": {"type": "STRING", "enum": list(STYLE_CHOICES["layoutStyle"])},
                            "cardStyle": {"type": "STRING", "enum": list(STYLE_CHOICES["cardStyle"])},
                            "spacingScale": {"type": "STRING", "enum": list(STYLE_CHOICES["spacingScale"])},
                        },
                    },
                    "previewImagePrompt": {"type": "STRING"},
                },
                "required": ["themeName", "description", "themeVariables", "previewImagePrompt"],
            },
        }
    },
    "required": ["themes"],
}


def _filled(value: Any) -> bool:
    return isinstance(value, str) and value.strip() != ""


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def backfill_theme(raw: Any, index: int, mode: ThemeMode = ThemeMode.LIGHT) -> CustomTheme:
    """
    Build a complete CustomTheme from a possibly incomplete model answer.

    Every missing, empty or malformed field is replaced by its default.

    Args:
        raw: One entry of the model's ``themes`` list
        index: Position of the entry, used to rotate style defaults
        mode: Requested colour mode, selects light or dark colour defaults

    Returns:
        CustomTheme: Theme with every field populated
    """
    data = _as_dict(raw)
    raw_variables = _as_dict(data.get("themeVariables"))
    raw_style = _as_dict(data.get("themeStyle"))
    color_defaults = DARK_VARIABLE_DEFAULTS if mode == ThemeMode.DARK else LIGHT_VARIABLE_DEFAULTS

    variables = {
        name: raw_variables[name] if _filled(raw_variables.get(name)) else color_defaults[name]
        for name in THEME_VARIABLE_NAMES
    }

    style = {}
    for name, rotation in STYLE_DEFAULTS.items():
        value = raw_style.get(name)
        allowed = STYLE_CHOICES.get(name)
        if not _filled(value) or (allowed is not None and value not in allowed):
            value = rotation[index % len(rotation)]
        style[name] = value

    return CustomTheme(
        themeName=data["themeName"] if _filled(data.get("themeName")) else f"Generated Theme {index + 1}",
        description=data["description"] if _filled(data.get("description")) else DEFAULT_THEME_DESCRIPTION,
        themeVariables=ThemeVariables(**variables),
        themeStyle=ThemeStyle(**style),
        previewImagePrompt=(
            data["previewImagePrompt"] if _filled(data.get("previewImagePrompt")) else DEFAULT_PREVIEW_PROMPT
        ),
    )


class ThemeGenerator:
    """Generate custom theme options through the model API."""

    def __init__(self, llm_service: Optional[LLMService] = None):
        self.llm_service = llm_service or LLMService()

    def _build_prompt(self, preferences: CustomThemePreferences) -> str:
        optional_lines = ""
        if preferences.industryInspiration:
            optional_lines += f"- Industry/Style Inspiration: {preferences.industryInspiration}\n"
        if preferences.currentProfession:
            optional_lines += f"- Profession Context: {preferences.currentProfession}\n"

        return f"""You are an expert UI/UX designer and typographer specializing in beautiful, accessible and unique website themes.
Given the user's preferences, generate {REQUESTED_THEMES} HIGHLY distinct theme options. For each theme provide:
1. A unique, descriptive themeName.
2. A brief description explaining its aesthetic and how it relates to the preferences.
3. themeVariables: HSL strings formatted 'H S% L%' for background, foreground, primary, primaryForeground,
   secondary, secondaryForeground, accent, accentForeground, card, cardForeground, border, input, ring.
   Keep high contrast between background/foreground and primary/primaryForeground.
4. themeStyle: fontFamilyBody and fontFamilyHeading chosen from Inter, Roboto, Lato, Montserrat, Open Sans,
   Lora, Merriweather, Playfair Display; baseFontSize between 14px and 18px; layoutStyle, cardStyle and
   spacingScale from their allowed keywords.
5. previewImagePrompt: at most two keywords, e.g. "tech dark".

User Preferences:
- Vibe: {preferences.vibe}
- Color Preference: {preferences.colorPreference}
- Mode: {preferences.mode.value}
{optional_lines}
If mode is 'dark', backgrounds are dark and foregrounds light. If mode is 'light', the opposite.
Themes must differ in colours, font pairings, font sizes and layout keywords."""

    async def generate(self, preferences: CustomThemePreferences) -> List[CustomTheme]:
        """
        Generate theme options.

        Args:
            preferences: Style preferences

        Returns:
            List[CustomTheme]: The one fallback theme, or two to four complete themes

        Raises:
            ThemeGenerationError: If the model call fails
        """
        try:
            payload = await self.llm_service.generate_json(
                self._build_prompt(preferences),
                response_schema=THEMES_SCHEMA,
                temperature=0.9,
            )
        except LLMServiceError as e:
            raise ThemeGenerationError(f"Could not generate themes: {e.message}") from e

        raw_themes = payload.get("themes") if isinstance(payload, dict) else None
        if not isinstance(raw_themes, list) or not raw_themes:
            logger.warning("AI failed to generate themes, using fallback")
            return [FALLBACK_THEME.model_copy(deep=True)]

        if len(raw_themes) > MAX_THEMES:
            logger.debug("Dropping {} extra generated themes", len(raw_themes) - MAX_THEMES)
        themes = [
            backfill_theme(raw, index, preferences.mode)
            for index, raw in enumerate(raw_themes[:MAX_THEMES])
        ]
        while len(themes) < MIN_THEMES:
            logger.debug("Padding generated themes with a default theme")
            themes.append(backfill_theme({}, len(themes), preferences.mode))
        return themes
