"""Service rewriting a portfolio section following user instructions."""

from typing import Optional

from loguru import logger

from portfolio_app.exceptions import LLMServiceError, RewriteError, ValidationError
from portfolio_app.models.response_models import RewriteContentOutput
from portfolio_app.services.llm_service import LLMService


REWRITE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "rewrittenContent": {"type": "STRING", "description": "The rewritten content of the section."},
    },
    "required": ["rewrittenContent"],
}


class ContentRewriter:
    """Rewrite, reorganize or extend a section of the portfolio."""

    def __init__(self, llm_service: Optional[LLMService] = None):
        self.llm_service = llm_service or LLMService()

    async def rewrite(self, section_content: str, instructions: str) -> RewriteContentOutput:
        """
        Rewrite a section.

        Args:
            section_content: Current text of the section (may be empty)
            instructions: What to change

        Returns:
            RewriteContentOutput: The revised text

        Raises:
            ValidationError: If no instructions are given
            RewriteError: If the call fails or returns nothing usable
        """
        if not instructions or not instructions.strip():
            raise ValidationError("Please provide instructions for the AI to refine the content.")

        prompt = f"""You are an AI assistant designed to rewrite content for a portfolio website.

You will receive the current content of a section and instructions on how to rewrite, reorganize, or add content to it.

Your goal is to improve the quality and impact of the portfolio by following the user's instructions.

Current Content:
{section_content}

Instructions:
{instructions}
"""
        try:
            payload = await self.llm_service.generate_json(
                prompt,
                response_schema=REWRITE_SCHEMA,
                temperature=0.5,
            )
        except LLMServiceError as e:
            logger.error("AI rewrite error: {}", e)
            raise RewriteError(f"Could not rewrite the content: {e.message}") from e

        rewritten = payload.get("rewrittenContent")
        if not isinstance(rewritten, str) or not rewritten.strip():
            raise RewriteError("AI did not return rewritten content.")
        return RewriteContentOutput(rewrittenContent=rewritten.strip())
