"""FastAPI application for the CV Portfolio Builder."""

from fastapi import Depends, FastAPI, File, Form, HTTPException, UploadFile, status
from fastapi.responses import HTMLResponse
from loguru import logger

from portfolio_app.config import AppSettings, configure_logging, get_app_settings
from portfolio_app.exceptions import (
    ExtractionError,
    FieldUpdateError,
    NoCvRecordError,
    RecommendationError,
    RewriteError,
    ThemeGenerationError,
    UploadTooLargeError,
    ValidationError,
)
from portfolio_app.models.portfolio_models import PortfolioSnapshot
from portfolio_app.models.request_models import FieldUpdateRequest, GenerateImageRequest, RewriteContentRequest
from portfolio_app.models.response_models import (
    AvailableThemesResponse,
    ErrorResponse,
    GeneratedThemesResponse,
    GenerateImageOutput,
    HeaderIcon,
    HealthResponse,
    IconsResponse,
    Notification,
    RewriteContentOutput,
    RootResponse,
    UploadResponse,
)
from portfolio_app.models.theme_models import AVAILABLE_THEMES, CustomThemePreferences, PortfolioTheme
from portfolio_app.services.content_rewriter import ContentRewriter
from portfolio_app.services.cv_extractor import CvExtractor
from portfolio_app.services.image_generator import ImageGenerator
from portfolio_app.services.llm_service import LLMService, get_llm_service
from portfolio_app.services.portfolio_renderer import PortfolioRenderer
from portfolio_app.services.portfolio_state import PortfolioState, get_portfolio_state
from portfolio_app.services.theme_generator import ThemeGenerator
from portfolio_app.services.theme_recommender import ThemeRecommender, build_cv_content, fallback_recommendation
from portfolio_app.utils.icons import HEADER_ICONS, search_icons
from portfolio_app.utils.upload_validation import to_data_uri, validate_profession, validate_upload

API_VERSION = "1.0.0"

configure_logging(get_app_settings().log_level)

app = FastAPI(
    title="CV Portfolio Builder API",
    description="""API that turns an uploaded CV into a themed portfolio website.

## Features

* **CV parsing**: Extracts a structured record from a PDF, DOC, DOCX or TXT upload using Gemini
* **Theme recommendation**: Suggests one of the named themes from the CV and profession
* **Custom themes**: Generates complete colour and typography themes from style preferences
* **AI content helper**: Rewrites any section following free-text instructions
* **Image generation**: Creates project and avatar images from a prompt
* **Portfolio state**: Keeps the record and theme, persisted across restarts

## Usage

1. `POST /api/v1/cv/upload` with the CV file and your profession
2. Edit fields with `PATCH /api/v1/portfolio/fields`
3. View the site at `GET /api/v1/portfolio/site`""",
    version=API_VERSION,
    tags_metadata=[
        {"name": "health", "description": "Health check and status endpoints"},
        {"name": "cv", "description": "CV upload and parsing"},
        {"name": "portfolio", "description": "Portfolio state and rendered site"},
        {"name": "themes", "description": "Theme catalog and generation"},
        {"name": "ai", "description": "AI content and image helpers"},
    ],
)


def get_cv_extractor(llm_service: LLMService = Depends(get_llm_service)) -> CvExtractor:
    return CvExtractor(llm_service)


def get_theme_recommender(llm_service: LLMService = Depends(get_llm_service)) -> ThemeRecommender:
    return ThemeRecommender(llm_service)


def get_theme_generator(llm_service: LLMService = Depends(get_llm_service)) -> ThemeGenerator:
    return ThemeGenerator(llm_service)


def get_content_rewriter(llm_service: LLMService = Depends(get_llm_service)) -> ContentRewriter:
    return ContentRewriter(llm_service)


def get_image_generator(llm_service: LLMService = Depends(get_llm_service)) -> ImageGenerator:
    return ImageGenerator(llm_service)


def get_renderer() -> PortfolioRenderer:
    return PortfolioRenderer()


@app.get(
    "/",
    response_model=RootResponse,
    status_code=status.HTTP_200_OK,
    summary="Root endpoint",
    description="Returns API information including name and version",
    tags=["health"],
)
async def root():
    """Return basic API information."""
    return RootResponse(message="CV Portfolio Builder API", version=API_VERSION)


@app.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Checks if the API service is running and healthy",
    tags=["health"],
)
async def health():
    """Return the health status of the API service."""
    return HealthResponse(status="ok")


@app.post(
    "/api/v1/cv/upload",
    response_model=UploadResponse,
    status_code=status.HTTP_200_OK,
    summary="Upload and parse a CV",
    description="""
    Parses an uploaded CV and recommends a theme.

    **Process:**
    1. Validates the file (PDF, DOC, DOCX or TXT, at most 5MB) and the profession
    2. Extracts a structured CV record with Gemini
    3. Stores the record as the active portfolio
    4. Recommends a theme from the summary and experience; falls back to "Default" on error
    5. Stores the theme as the active theme

    A failed extraction leaves the current portfolio untouched.
    """,
    tags=["cv"],
    responses={
        400: {"description": "Bad request - Invalid file or profession", "model": ErrorResponse},
        413: {"description": "File too large", "model": ErrorResponse},
        502: {"description": "CV parsing failed", "model": ErrorResponse},
    },
)
async def upload_cv(
    file: UploadFile = File(..., description="CV document"),
    profession: str = Form(..., description="Your profession, e.g. Software Engineer"),
    settings: AppSettings = Depends(get_app_settings),
    state: PortfolioState = Depends(get_portfolio_state),
    extractor: CvExtractor = Depends(get_cv_extractor),
    recommender: ThemeRecommender = Depends(get_theme_recommender),
):
    """
    Upload a CV and build the portfolio from it.

    **Parameters (multipart form):**
    - `file`: CV document
    - `profession`: Declared profession (3-100 characters)
    """
    try:
        profession = validate_profession(profession)
        content = await file.read()
        validate_upload(content, file.content_type, settings.max_upload_bytes)
    except UploadTooLargeError as e:
        raise HTTPException(status_code=413, detail=e.message)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)

    try:
        record = await extractor.extract(to_data_uri(content, file.content_type))
    except ExtractionError as e:
        raise HTTPException(status_code=502, detail=e.message)

    state.replace_cv_record(record)
    notifications = [Notification(title="CV Parsed Successfully!")]

    try:
        recommendation = await recommender.recommend(build_cv_content(record), profession)
        notifications.append(Notification(title="Theme Recommended!"))
    except RecommendationError as e:
        logger.warning("Theme recommendation error: {}", e)
        recommendation = fallback_recommendation()
        notifications.append(
            Notification(title=e.title, description="Could not recommend a theme.", variant="destructive")
        )

    snapshot = state.replace_theme(PortfolioTheme.from_recommendation(recommendation))
    return UploadResponse(
        cvRecord=snapshot.cvRecord,
        theme=snapshot.theme,
        profession=snapshot.profession,
        notifications=notifications,
    )


@app.get(
    "/api/v1/portfolio",
    response_model=PortfolioSnapshot,
    summary="Get the portfolio",
    description="Returns the active CV record, theme, derived profession and edit mode",
    tags=["portfolio"],
)
async def get_portfolio(state: PortfolioState = Depends(get_portfolio_state)):
    return state.read()


@app.delete(
    "/api/v1/portfolio",
    response_model=PortfolioSnapshot,
    summary="Discard the portfolio",
    description="Clears the CV record and the theme from memory and storage",
    tags=["portfolio"],
)
async def discard_portfolio(state: PortfolioState = Depends(get_portfolio_state)):
    return state.discard()


@app.patch(
    "/api/v1/portfolio/fields",
    response_model=PortfolioSnapshot,
    summary="Update a CV field",
    description="""
    Sets a single field addressed by a dotted path.

    Examples: `summary`, `personalInformation.customProfession`, `experience.0.title`,
    `projects.1.technologiesUsed.0`. An index equal to the list length appends.
    """,
    tags=["portfolio"],
    responses={
        404: {"description": "No CV record loaded", "model": ErrorResponse},
        422: {"description": "Invalid path or value", "model": ErrorResponse},
    },
)
async def update_field(request: FieldUpdateRequest, state: PortfolioState = Depends(get_portfolio_state)):
    try:
        return state.update_field(request.path, request.value)
    except NoCvRecordError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except FieldUpdateError as e:
        raise HTTPException(status_code=422, detail=e.message)


@app.put(
    "/api/v1/portfolio/theme",
    response_model=PortfolioSnapshot,
    summary="Set the active theme",
    description="Replaces the active theme with a named theme or a generated custom theme",
    tags=["portfolio"],
)
async def set_theme(theme: PortfolioTheme, state: PortfolioState = Depends(get_portfolio_state)):
    return state.replace_theme(theme)


@app.post(
    "/api/v1/portfolio/edit-mode",
    response_model=PortfolioSnapshot,
    summary="Toggle edit mode",
    tags=["portfolio"],
)
async def toggle_edit_mode(state: PortfolioState = Depends(get_portfolio_state)):
    state.toggle_edit_mode()
    return state.read()


@app.get(
    "/api/v1/portfolio/site",
    response_class=HTMLResponse,
    summary="Render the portfolio site",
    description="Renders the active CV record with the active theme as a single HTML page",
    tags=["portfolio"],
    responses={404: {"description": "No CV record loaded", "model": ErrorResponse}},
)
async def render_site(
    state: PortfolioState = Depends(get_portfolio_state),
    renderer: PortfolioRenderer = Depends(get_renderer),
):
    snapshot = state.read()
    if snapshot.cvRecord is None:
        raise HTTPException(status_code=404, detail="No CV record loaded. Upload a CV first.")
    return HTMLResponse(renderer.render(snapshot.cvRecord, snapshot.theme, snapshot.profession))


@app.get(
    "/api/v1/themes/available",
    response_model=AvailableThemesResponse,
    summary="List named themes",
    tags=["themes"],
)
async def available_themes():
    return AvailableThemesResponse(themes=list(AVAILABLE_THEMES))


@app.post(
    "/api/v1/themes/generate",
    response_model=GeneratedThemesResponse,
    summary="Generate custom themes",
    description="""
    Generates two to four complete themes from style preferences.

    Missing fields in the AI answer are filled with defaults; an empty answer
    yields a single fallback light theme.
    """,
    tags=["themes"],
    responses={502: {"description": "Theme generation failed", "model": ErrorResponse}},
)
async def generate_themes(
    preferences: CustomThemePreferences,
    generator: ThemeGenerator = Depends(get_theme_generator),
):
    try:
        themes = await generator.generate(preferences)
    except ThemeGenerationError as e:
        raise HTTPException(status_code=502, detail=e.message)
    return GeneratedThemesResponse(themes=themes)


@app.post(
    "/api/v1/content/rewrite",
    response_model=RewriteContentOutput,
    summary="Rewrite content with AI",
    description="Rewrites a section following free-text instructions. Nothing is stored.",
    tags=["ai"],
    responses={
        400: {"description": "Missing instructions", "model": ErrorResponse},
        502: {"description": "AI rewrite failed", "model": ErrorResponse},
    },
)
async def rewrite_content(
    request: RewriteContentRequest,
    rewriter: ContentRewriter = Depends(get_content_rewriter),
):
    try:
        return await rewriter.rewrite(request.sectionContent, request.instructions)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=e.message)
    except RewriteError as e:
        raise HTTPException(status_code=502, detail=e.message)


@app.post(
    "/api/v1/images/generate",
    response_model=GenerateImageOutput,
    summary="Generate an image",
    description="""
    Generates an image from a prompt.

    Always answers 200: check `imageDataUri` for success or `error` for the
    failure description (including blocked safety categories).
    """,
    tags=["ai"],
)
async def generate_image(
    request: GenerateImageRequest,
    generator: ImageGenerator = Depends(get_image_generator),
):
    return await generator.generate(request.prompt)


@app.get(
    "/api/v1/icons",
    response_model=IconsResponse,
    summary="List header icons",
    description="Icons for the portfolio header, optionally filtered by name or tag",
    tags=["portfolio"],
)
async def list_icons(q: str = ""):
    names = search_icons(q)
    return IconsResponse(icons=[HeaderIcon(name=name, tags=HEADER_ICONS[name]) for name in names])
