"""Shared fixtures: a scripted LLM service and an in-memory portfolio state."""

import copy
from typing import Any, Dict, List, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from portfolio_app.exceptions import LLMServiceError
from portfolio_app.main import app
from portfolio_app.models.cv_models import CvRecord
from portfolio_app.services.llm_service import get_llm_service
from portfolio_app.services.portfolio_state import PortfolioState, get_portfolio_state
from portfolio_app.services.storage import InMemoryStorage


SAMPLE_CV = {
    "personalInformation": {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "github": "https://github.com/janedoe",
    },
    "summary": "Backend engineer building data platforms.",
    "experience": [
        {
            "title": "Senior Engineer",
            "company": "Acme",
            "dates": "2021 - Present",
            "description": "Led the payments platform team.",
        },
        {
            "title": "Engineer",
            "company": "Initech",
            "dates": "2018 - 2021",
            "description": "Built reporting pipelines.",
        },
    ],
    "education": [
        {"degree": "BSc Computer Science", "institution": "State University", "dates": "2014 - 2018"},
    ],
    "skills": ["Python", "SQL"],
    "projects": [
        {
            "name": "Ledger",
            "description": "Double-entry accounting service.",
            "imagePrompt": "ledger books",
            "technologiesUsed": ["Python", "PostgreSQL"],
        },
    ],
}


class FakeLLMService:
    """
    Stand-in for LLMService returning scripted answers.

    Each entry of ``json_answers`` / ``image_answers`` is either a dict
    returned as-is or an exception raised from the call. Calls are recorded.
    """

    def __init__(
        self,
        json_answers: Optional[List[Any]] = None,
        image_answers: Optional[List[Any]] = None,
    ):
        self.json_answers = list(json_answers or [])
        self.image_answers = list(image_answers or [])
        self.calls: List[Dict[str, Any]] = []

    def _next(self, answers: List[Any]) -> Dict[str, Any]:
        if not answers:
            raise LLMServiceError("No scripted answer left")
        answer = answers.pop(0)
        if isinstance(answer, Exception):
            raise answer
        return answer

    async def generate_json(self, prompt, response_schema, media=None, temperature=None):
        self.calls.append({"kind": "json", "prompt": prompt, "media": media, "schema": response_schema})
        return self._next(self.json_answers)

    async def generate_image(self, prompt):
        self.calls.append({"kind": "image", "prompt": prompt})
        return self._next(self.image_answers)


@pytest.fixture
def sample_cv() -> Dict[str, Any]:
    return copy.deepcopy(SAMPLE_CV)


@pytest.fixture
def sample_record() -> CvRecord:
    return CvRecord.model_validate(SAMPLE_CV)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def state(storage) -> PortfolioState:
    portfolio_state = PortfolioState(storage)
    portfolio_state.load()
    return portfolio_state


@pytest.fixture
def make_llm():
    """Factory building a FakeLLMService with scripted answers."""
    return FakeLLMService


@pytest.fixture
def fake_llm() -> FakeLLMService:
    return FakeLLMService()


@pytest_asyncio.fixture
async def client(state, fake_llm):
    """API client wired to the in-memory state and the scripted LLM service."""
    app.dependency_overrides[get_portfolio_state] = lambda: state
    app.dependency_overrides[get_llm_service] = lambda: fake_llm
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
