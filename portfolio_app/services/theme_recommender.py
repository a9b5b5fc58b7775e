"""Service recommending one of the named portfolio themes."""

from typing import Optional

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from portfolio_app.exceptions import LLMServiceError, RecommendationError
from portfolio_app.models.cv_models import CvRecord
from portfolio_app.models.theme_models import AVAILABLE_THEMES, ThemeRecommendation
from portfolio_app.services.llm_service import LLMService


RECOMMENDATION_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "themeName": {"type": "STRING", "description": "The name of the recommended portfolio theme."},
        "reason": {"type": "STRING", "description": "The reasoning behind the theme recommendation."},
    },
    "required": ["themeName", "reason"],
}

FALLBACK_THEME_NAME = "Default"
FALLBACK_REASON = "Could not generate a recommendation due to an error."


def build_cv_content(record: CvRecord) -> str:
    """Summary followed by every experience description."""
    descriptions = " ".join(entry.description for entry in record.experience)
    return f"{record.summary or ''} {descriptions}".strip()


def fallback_recommendation() -> ThemeRecommendation:
    """Recommendation used by callers when the model call fails."""
    return ThemeRecommendation(themeName=FALLBACK_THEME_NAME, reason=FALLBACK_REASON)


def normalize_theme_name(name: str) -> str:
    """
    Map a case-insensitive match onto the canonical theme name.

    Names outside AVAILABLE_THEMES are returned unchanged.
    """
    cleaned = name.strip()
    for theme in AVAILABLE_THEMES:
        if cleaned.lower() == theme.lower():
            return theme
    return cleaned


class ThemeRecommender:
    """Recommend a portfolio theme from CV content and profession."""

    def __init__(self, llm_service: Optional[LLMService] = None):
        self.llm_service = llm_service or LLMService()

    def _build_prompt(self, cv_content: str, profession: str) -> str:
        themes = "\n".join(f"- {theme}" for theme in AVAILABLE_THEMES)
        return f"""You are an AI assistant specializing in recommending portfolio website themes based on a user's CV content and profession.

Given the following CV content and profession, recommend the best portfolio theme from the list below. Explain your reasoning.

Themes:
{themes}

CV Content: {cv_content}
Profession: {profession}

Respond with the theme name and reasoning."""

    async def recommend(self, cv_content: str, profession: str) -> ThemeRecommendation:
        """
        Recommend a theme.

        Args:
            cv_content: Free text derived from the CV
            profession: Profession declared by the user

        Returns:
            ThemeRecommendation: Suggested theme and reason

        Raises:
            RecommendationError: If the call fails or the answer is incomplete
        """
        try:
            payload = await self.llm_service.generate_json(
                self._build_prompt(cv_content, profession),
                response_schema=RECOMMENDATION_SCHEMA,
                temperature=0.4,
            )
            recommendation = ThemeRecommendation.model_validate(payload)
        except LLMServiceError as e:
            raise RecommendationError(f"Could not recommend a theme: {e.message}") from e
        except PydanticValidationError as e:
            raise RecommendationError("Theme recommendation answer is incomplete") from e

        name = normalize_theme_name(recommendation.themeName)
        if name not in AVAILABLE_THEMES:
            logger.warning("Recommended theme '{}' is not one of the named themes", name)
        return ThemeRecommendation(themeName=name, reason=recommendation.reason)
