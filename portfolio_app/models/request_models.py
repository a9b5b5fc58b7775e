"""Request models for API endpoints."""

from typing import Any
from pydantic import BaseModel, Field


class FieldUpdateRequest(BaseModel):
    """Request model for a single CV field update."""

    path: str = Field(
        ...,
        description="Dotted path into the CV record. Numeric segments index lists.",
        examples=["experience.0.title", "personalInformation.customProfession"],
    )
    value: Any = Field(
        None,
        description="New value for the field",
        examples=["Lead Engineer"],
    )


class RewriteContentRequest(BaseModel):
    """Request model for AI content rewriting."""

    sectionContent: str = Field(
        "",
        description="The current content of the section to be rewritten.",
        examples=["Built internal tools for the sales team."],
    )
    instructions: str = Field(
        ...,
        description="Instructions on how to rewrite, reorganize, or add content to the section.",
        examples=["Make it more concise and highlight leadership."],
    )


class GenerateImageRequest(BaseModel):
    """Request model for AI image generation."""

    prompt: str = Field(
        ...,
        description="The text prompt for image generation.",
        examples=["isometric dashboard illustration, soft colors"],
    )
