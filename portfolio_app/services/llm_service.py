"""Service for LLM integration with the Gemini API."""

import json
from typing import Any, Dict, List, Optional

import httpx
from loguru import logger

from portfolio_app.config import GeminiSettings, get_gemini_settings
from portfolio_app.exceptions import LLMServiceError, LLMTimeoutError


SAFETY_SETTINGS = [
    {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
]


def text_part(text: str) -> Dict[str, Any]:
    """Build a text content part."""
    return {"text": text}


def data_uri_part(data_uri: str) -> Dict[str, Any]:
    """
    Build an inline-data content part from a base64 data URI.

    Args:
        data_uri: URI like ``data:application/pdf;base64,JVBERi0...``

    Returns:
        Dict[str, Any]: Gemini ``inlineData`` part

    Raises:
        ValueError: If the URI is not a base64 data URI
    """
    if not data_uri.startswith("data:") or ";base64," not in data_uri:
        raise ValueError("Expected a base64 data URI")
    header, payload = data_uri[len("data:"):].split(";base64,", 1)
    mime_type = header.split(";")[0] or "application/octet-stream"
    return {"inlineData": {"mimeType": mime_type, "data": payload}}


def first_candidate(result: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    candidates = result.get("candidates") or []
    return candidates[0] if candidates else None


def candidate_parts(result: Dict[str, Any]) -> List[Dict[str, Any]]:
    candidate = first_candidate(result)
    if not candidate:
        return []
    return (candidate.get("content") or {}).get("parts") or []


def extract_text(result: Dict[str, Any]) -> str:
    """Join the text parts of the first candidate."""
    return "".join(part.get("text", "") for part in candidate_parts(result) if "text" in part)


def blocked_categories(result: Dict[str, Any]) -> List[str]:
    """Safety categories reported as blocked, on the prompt or the candidate."""
    ratings = list((result.get("promptFeedback") or {}).get("safetyRatings") or [])
    candidate = first_candidate(result)
    if candidate:
        ratings.extend(candidate.get("safetyRatings") or [])
    return [r["category"] for r in ratings if r.get("blocked") and r.get("category")]


class LLMService:
    """Service for interacting with the Gemini generateContent API."""

    def __init__(
        self,
        settings: Optional[GeminiSettings] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize LLM service.

        Args:
            settings: Gemini settings (uses environment if None)
            transport: Optional httpx transport, used by tests
        """
        self.settings = settings or get_gemini_settings()
        self.base_url = self.settings.gemini_base_url.rstrip("/")
        self.model = self.settings.gemini_model
        self.image_model = self.settings.gemini_image_model
        self.timeout = self.settings.gemini_timeout
        self.api_key = self.settings.google_api_key
        self.transport = transport

    async def generate(
        self,
        parts: List[Dict[str, Any]],
        model: Optional[str] = None,
        response_schema: Optional[Dict[str, Any]] = None,
        temperature: Optional[float] = None,
        response_modalities: Optional[List[str]] = None,
        safety_settings: Optional[List[Dict[str, str]]] = None,
    ) -> Dict[str, Any]:
        """
        Call generateContent and return the decoded response.

        Args:
            parts: Content parts of the single user turn
            model: Model identifier (defaults to the text model)
            response_schema: Declared output schema; switches the response to JSON
            temperature: Sampling temperature (optional)
            response_modalities: Requested modalities, e.g. ["TEXT", "IMAGE"]
            safety_settings: Safety thresholds (optional)

        Returns:
            Dict[str, Any]: Raw response body

        Raises:
            LLMTimeoutError: If the request times out
            LLMServiceError: If the request fails
        """
        model = model or self.model
        url = f"{self.base_url}/models/{model}:generateContent"

        generation_config: Dict[str, Any] = {}
        if temperature is not None:
            generation_config["temperature"] = temperature
        if response_schema is not None:
            generation_config["responseMimeType"] = "application/json"
            generation_config["responseSchema"] = response_schema
        if response_modalities:
            generation_config["responseModalities"] = response_modalities

        payload: Dict[str, Any] = {"contents": [{"role": "user", "parts": parts}]}
        if generation_config:
            payload["generationConfig"] = generation_config
        if safety_settings:
            payload["safetySettings"] = safety_settings

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["x-goog-api-key"] = self.api_key

        logger.debug("Calling Gemini model={} parts={}", model, len(parts))
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.post(url, json=payload, headers=headers)
                response.raise_for_status()
                return response.json()
            except httpx.TimeoutException as e:
                raise LLMTimeoutError(f"Gemini request timed out after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise LLMServiceError(
                    f"Gemini returned HTTP {e.response.status_code}",
                    details=[e.response.text[:500]] if e.response.text else None,
                ) from e
            except httpx.HTTPError as e:
                raise LLMServiceError(f"Failed to communicate with Gemini: {str(e)}") from e
            except ValueError as e:
                raise LLMServiceError(f"Gemini returned a non-JSON body: {e}") from e

    async def generate_json(
        self,
        prompt: str,
        response_schema: Dict[str, Any],
        media: Optional[List[Dict[str, Any]]] = None,
        temperature: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Generate a JSON object that follows ``response_schema``.

        Args:
            prompt: Prompt text
            response_schema: Gemini response schema
            media: Extra content parts sent after the prompt (e.g. a document)
            temperature: Sampling temperature (optional)

        Returns:
            Dict[str, Any]: Decoded JSON object

        Raises:
            LLMServiceError: If the call fails, is blocked, or the output is not a JSON object
        """
        parts = [text_part(prompt)] + list(media or [])
        result = await self.generate(parts, response_schema=response_schema, temperature=temperature)

        block_reason = (result.get("promptFeedback") or {}).get("blockReason")
        if block_reason:
            raise LLMServiceError(
                f"Prompt was blocked: {block_reason}",
                finish_reason=block_reason,
                blocked_categories=blocked_categories(result),
            )

        candidate = first_candidate(result)
        if candidate is None:
            raise LLMServiceError("Gemini returned no candidates")

        text = extract_text(result)
        if not text.strip():
            raise LLMServiceError(
                "Gemini returned an empty answer",
                finish_reason=candidate.get("finishReason"),
                blocked_categories=blocked_categories(result),
            )

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise LLMServiceError(f"Gemini answer is not valid JSON: {e}") from e
        if not isinstance(data, dict):
            raise LLMServiceError(f"Expected a JSON object, got {type(data).__name__}")
        return data

    async def generate_image(self, prompt: str) -> Dict[str, Any]:
        """
        Ask the image model for an image.

        Args:
            prompt: Image prompt

        Returns:
            Dict[str, Any]: Raw response body, inspected by the caller
        """
        return await self.generate(
            [text_part(prompt)],
            model=self.image_model,
            response_modalities=["TEXT", "IMAGE"],
            safety_settings=SAFETY_SETTINGS,
        )


# Singleton instance
_llm_service: Optional[LLMService] = None


def get_llm_service() -> LLMService:
    """
    Get or create the LLM service singleton.

    Returns:
        LLMService: The shared service instance
    """
    global _llm_service
    if _llm_service is None:
        _llm_service = LLMService()
    return _llm_service
