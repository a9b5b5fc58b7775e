"""Pydantic models for the portfolio state snapshot."""

from enum import Enum
from typing import Optional
from pydantic import BaseModel

from portfolio_app.models.cv_models import CvRecord
from portfolio_app.models.theme_models import PortfolioTheme


DEFAULT_PROFESSION = "Professional"


class PortfolioStatus(str, Enum):
    """Lifecycle of the portfolio state manager."""

    UNINITIALIZED = "uninitialized"
    LOADING = "loading"
    EMPTY = "empty"
    LOADED = "loaded"


class PortfolioSnapshot(BaseModel):
    """Read-only view of the state manager."""

    status: PortfolioStatus
    cvRecord: Optional[CvRecord] = None
    theme: Optional[PortfolioTheme] = None
    profession: str = DEFAULT_PROFESSION
    editMode: bool = False
