"""State manager owning the active CV record and theme."""

import json
import re
from typing import Any, Optional, Type, TypeVar

from loguru import logger
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from portfolio_app.config import get_app_settings
from portfolio_app.exceptions import FieldUpdateError, NoCvRecordError, StorageCorruptionError
from portfolio_app.models.cv_models import CvRecord
from portfolio_app.models.portfolio_models import DEFAULT_PROFESSION, PortfolioSnapshot, PortfolioStatus
from portfolio_app.models.theme_models import PortfolioTheme
from portfolio_app.services.storage import CV_DATA_KEY, THEME_KEY, FileStorage, KeyValueStorage
from portfolio_app.utils.field_paths import apply_path, check_model_path, parse_path


PROFESSION_KEYWORDS = (
    "engineer",
    "developer",
    "designer",
    "manager",
    "analyst",
    "specialist",
    "consultant",
    "architect",
    "professional",
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def derive_profession(record: Optional[CvRecord]) -> str:
    """
    Derive the display profession of a CV record.

    Priority: title of the most recent experience entry, then the first
    vocabulary keyword found in the summary, then "Professional".
    """
    if record is None:
        return DEFAULT_PROFESSION
    if record.experience and record.experience[0].title:
        return record.experience[0].title
    if record.summary:
        words = set(re.findall(r"[a-z]+", record.summary.lower()))
        for keyword in PROFESSION_KEYWORDS:
            if keyword in words:
                return keyword.capitalize()
    return DEFAULT_PROFESSION


def _dump(model: BaseModel) -> str:
    return json.dumps(model.model_dump(mode="json", exclude_none=True), ensure_ascii=False)


class PortfolioState:
    """
    Single owner of the active CV record and theme.

    Every mutation is mirrored to storage before returning. The record and
    the theme live under two independent keys.
    """

    def __init__(self, storage: KeyValueStorage):
        self.storage = storage
        self.status = PortfolioStatus.UNINITIALIZED
        self._cv_record: Optional[CvRecord] = None
        self._theme: Optional[PortfolioTheme] = None
        self._profession = DEFAULT_PROFESSION
        self.edit_mode = False

    def load(self) -> PortfolioSnapshot:
        """
        Read both storage keys once.

        A value that fails to parse clears both keys and leaves the state
        empty; the failure is only logged.
        """
        if self.status != PortfolioStatus.UNINITIALIZED:
            return self.read()

        self.status = PortfolioStatus.LOADING
        try:
            cv_record = self._read_key(CV_DATA_KEY, CvRecord)
            theme = self._read_key(THEME_KEY, PortfolioTheme)
        except StorageCorruptionError as e:
            logger.error("Error loading portfolio from storage: {}", e)
            self.storage.remove(CV_DATA_KEY)
            self.storage.remove(THEME_KEY)
            cv_record, theme = None, None

        self._cv_record = cv_record
        self._theme = theme
        self._profession = derive_profession(cv_record)
        self._refresh_status()
        return self.read()

    def _read_key(self, key: str, model: Type[ModelT]) -> Optional[ModelT]:
        raw = self.storage.get(key)
        if raw is None:
            return None
        try:
            return model.model_validate(json.loads(raw))
        except (json.JSONDecodeError, PydanticValidationError) as e:
            raise StorageCorruptionError(key, str(e)) from e

    def _ensure_loaded(self) -> None:
        if self.status == PortfolioStatus.UNINITIALIZED:
            self.load()

    def _refresh_status(self) -> None:
        has_data = self._cv_record is not None or self._theme is not None
        self.status = PortfolioStatus.LOADED if has_data else PortfolioStatus.EMPTY

    @property
    def cv_record(self) -> Optional[CvRecord]:
        return self._cv_record.model_copy(deep=True) if self._cv_record else None

    @property
    def theme(self) -> Optional[PortfolioTheme]:
        return self._theme.model_copy(deep=True) if self._theme else None

    @property
    def profession(self) -> str:
        return self._profession

    def read(self) -> PortfolioSnapshot:
        """Current record, theme and derived profession."""
        return PortfolioSnapshot(
            status=self.status,
            cvRecord=self.cv_record,
            theme=self.theme,
            profession=self._profession,
            editMode=self.edit_mode,
        )

    def replace_cv_record(self, record: Optional[CvRecord]) -> PortfolioSnapshot:
        """Set or clear the CV record and re-derive the profession."""
        self._ensure_loaded()
        self._store_cv_record(record)
        self._profession = derive_profession(self._cv_record)
        return self.read()

    def _store_cv_record(self, record: Optional[CvRecord]) -> None:
        if record is None:
            self._cv_record = None
            self.storage.remove(CV_DATA_KEY)
        else:
            self._cv_record = record.model_copy(deep=True)
            self.storage.set(CV_DATA_KEY, _dump(self._cv_record))
        self._refresh_status()

    def replace_theme(self, theme: Optional[PortfolioTheme]) -> PortfolioSnapshot:
        """Set or clear the active theme, independently of the record."""
        self._ensure_loaded()
        if theme is None:
            self._theme = None
            self.storage.remove(THEME_KEY)
        else:
            self._theme = theme.model_copy(deep=True)
            self.storage.set(THEME_KEY, _dump(self._theme))
        self._refresh_status()
        return self.read()

    def update_field(self, path: str, value: Any) -> PortfolioSnapshot:
        """
        Set a single field addressed by a dotted path, e.g. ``experience.0.title``.

        The updated record is validated before it replaces the current one,
        so a bad path or value leaves the state untouched.

        Raises:
            NoCvRecordError: If there is no record
            FieldUpdateError: If the path or the value does not validate
        """
        self._ensure_loaded()
        if self._cv_record is None:
            raise NoCvRecordError("No CV record loaded. Upload a CV first.")

        keys = parse_path(path)
        check_model_path(CvRecord, keys)
        data = self._cv_record.model_dump(mode="json")
        updated = apply_path(data, keys, value)
        try:
            record = CvRecord.model_validate(updated)
        except PydanticValidationError as e:
            raise FieldUpdateError(f"Invalid value for '{path}': {e.errors()[0]['msg']}") from e

        # The profession label is only re-derived when the whole record is replaced
        self._store_cv_record(record)
        logger.debug("Updated CV field {}", path)
        return self.read()

    def discard(self) -> PortfolioSnapshot:
        """Drop the record and the theme."""
        self.replace_cv_record(None)
        return self.replace_theme(None)

    def toggle_edit_mode(self) -> bool:
        self.edit_mode = not self.edit_mode
        return self.edit_mode


# Singleton instance
_portfolio_state: Optional[PortfolioState] = None


def get_portfolio_state() -> PortfolioState:
    """
    Get or create the portfolio state, loading it from file storage once.

    Returns:
        PortfolioState: The loaded state manager
    """
    global _portfolio_state
    if _portfolio_state is None:
        settings = get_app_settings()
        _portfolio_state = PortfolioState(FileStorage(settings.portfolio_storage_dir))
        _portfolio_state.load()
    return _portfolio_state
