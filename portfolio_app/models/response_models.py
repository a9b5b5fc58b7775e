"""Response models for API endpoints."""

from typing import List, Literal, Optional
from pydantic import BaseModel, Field

from portfolio_app.models.cv_models import CvRecord
from portfolio_app.models.theme_models import CustomTheme, PortfolioTheme


class ErrorResponse(BaseModel):
    """Error response model."""

    detail: str = Field(
        ...,
        description="Error message describing what went wrong",
        examples=["Max file size is 5MB."],
    )


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str = Field(
        ...,
        description="Service status",
        examples=["ok"],
    )


class RootResponse(BaseModel):
    """Root endpoint response model."""

    message: str = Field(
        ...,
        description="API name",
        examples=["CV Portfolio Builder API"],
    )
    version: str = Field(
        ...,
        description="API version",
        examples=["1.0.0"],
    )


class Notification(BaseModel):
    """A toast shown by the front-end."""

    title: str
    description: Optional[str] = None
    variant: Literal["default", "destructive"] = "default"


class UploadResponse(BaseModel):
    """Result of the upload -> extract -> recommend flow."""

    cvRecord: CvRecord
    theme: PortfolioTheme
    profession: str
    notifications: List[Notification] = Field(default_factory=list)


class RewriteContentOutput(BaseModel):
    """Rewritten section content."""

    rewrittenContent: str


class GenerateImageOutput(BaseModel):
    """Image generation result. Exactly one of the fields is set."""

    imageDataUri: Optional[str] = Field(
        None,
        description="The generated image as a data URI (e.g., data:image/png;base64,...).",
    )
    error: Optional[str] = Field(
        None,
        description="Error message if image generation failed.",
    )


class GeneratedThemesResponse(BaseModel):
    """Custom theme options."""

    themes: List[CustomTheme]


class AvailableThemesResponse(BaseModel):
    """Named themes the recommendation chooses from."""

    themes: List[str]


class HeaderIcon(BaseModel):
    """Header icon catalog entry."""

    name: str
    tags: List[str] = Field(default_factory=list)


class IconsResponse(BaseModel):
    """Header icon catalog."""

    icons: List[HeaderIcon]
