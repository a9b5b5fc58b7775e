"""Service generating images from a text prompt."""

import json
from typing import Any, Dict, List, Optional

from loguru import logger

from portfolio_app.exceptions import LLMServiceError
from portfolio_app.models.response_models import GenerateImageOutput
from portfolio_app.services.llm_service import LLMService, blocked_categories, candidate_parts, first_candidate


EMPTY_PROMPT_ERROR = "Image generation failed: Prompt cannot be empty."
NO_MEDIA_ERROR = "Image generation did not return image media."


def _part_details(parts: List[Dict[str, Any]]) -> str:
    details = []
    for part in parts:
        if part.get("text"):
            details.append(part["text"])
        elif "inlineData" not in part and part:
            details.append(json.dumps(part))
    return "; ".join(details)


def _find_media(parts: List[Dict[str, Any]]) -> Optional[str]:
    for part in parts:
        inline = part.get("inlineData") or {}
        if inline.get("data"):
            mime_type = inline.get("mimeType") or "image/png"
            return f"data:{mime_type};base64,{inline['data']}"
    return None


class ImageGenerator:
    """
    Generate images through the image model.

    Failures are reported in ``GenerateImageOutput.error`` rather than
    raised, callers branch on which field is set.
    """

    def __init__(self, llm_service: Optional[LLMService] = None):
        self.llm_service = llm_service or LLMService()

    async def generate(self, prompt: str) -> GenerateImageOutput:
        if not prompt or not prompt.strip():
            logger.error("Image generation prompt is empty")
            return GenerateImageOutput(error=EMPTY_PROMPT_ERROR)

        logger.info("Generating image for prompt: {}", prompt)
        try:
            result = await self.llm_service.generate_image(prompt)
        except LLMServiceError as e:
            logger.error("Image generation call failed: {}", e)
            return GenerateImageOutput(error=self._describe_exception(e))

        parts = candidate_parts(result)
        media = _find_media(parts)
        if media:
            logger.debug("Image generated: {}...", media[:50])
            return GenerateImageOutput(imageDataUri=media)

        candidate = first_candidate(result) or {}
        finish_reason = candidate.get("finishReason") or (result.get("promptFeedback") or {}).get("blockReason")
        message = NO_MEDIA_ERROR
        if finish_reason and finish_reason != "STOP":
            message = f"Image generation failed or was blocked. Reason: {finish_reason}."
        details = _part_details(parts)
        if details:
            message += f" Details: {details}"
        blocked = blocked_categories(result)
        if blocked:
            message += f" Blocked categories: {', '.join(blocked)}"
        logger.error("No image media. Prompt: {} Finish reason: {}", prompt, finish_reason)
        return GenerateImageOutput(error=message)

    def _describe_exception(self, error: LLMServiceError) -> str:
        message = f"Image generation process failed: {error.message or 'Unknown error'}"
        if error.finish_reason:
            message += f". Reason: {error.finish_reason}"
        if error.details:
            message += f". Details: {'; '.join(error.details)}"
        if error.blocked_categories:
            message += f". Blocked categories: {', '.join(error.blocked_categories)}"
        return message
