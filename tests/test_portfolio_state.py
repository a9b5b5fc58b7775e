"""Tests for the portfolio state manager."""

import json

import pytest

from portfolio_app.exceptions import FieldUpdateError, NoCvRecordError
from portfolio_app.models.cv_models import CvRecord
from portfolio_app.models.portfolio_models import PortfolioStatus
from portfolio_app.models.theme_models import PortfolioTheme
from portfolio_app.services.portfolio_state import PortfolioState, derive_profession
from portfolio_app.services.storage import CV_DATA_KEY, THEME_KEY, FileStorage, InMemoryStorage


def test_empty_storage_loads_as_empty(state):
    """Test that nothing stored gives an empty state."""
    snapshot = state.read()
    assert snapshot.status == PortfolioStatus.EMPTY
    assert snapshot.cvRecord is None
    assert snapshot.theme is None
    assert snapshot.profession == "Professional"


def test_record_round_trips_through_storage(storage, state, sample_record):
    """Test that a stored record is loaded back unchanged."""
    state.replace_cv_record(sample_record)
    state.replace_theme(PortfolioTheme(themeName="Modern", reason="Clean look"))

    reloaded = PortfolioState(storage)
    snapshot = reloaded.load()

    assert snapshot.status == PortfolioStatus.LOADED
    assert snapshot.cvRecord == sample_record
    assert snapshot.theme.themeName == "Modern"
    assert snapshot.profession == "Senior Engineer"


def test_record_and_theme_use_separate_keys(storage, state, sample_record):
    """Test that record and theme are persisted under their own keys."""
    state.replace_cv_record(sample_record)
    assert CV_DATA_KEY in storage.data
    assert THEME_KEY not in storage.data

    state.replace_theme(PortfolioTheme(themeName="Classic"))
    assert json.loads(storage.data[THEME_KEY])["themeName"] == "Classic"


def test_theme_only_counts_as_loaded():
    """Test that a stored theme without a record still loads."""
    storage = InMemoryStorage({THEME_KEY: json.dumps({"themeName": "Creative"})})
    snapshot = PortfolioState(storage).load()
    assert snapshot.status == PortfolioStatus.LOADED
    assert snapshot.cvRecord is None
    assert snapshot.theme.themeName == "Creative"


def test_unparseable_record_clears_both_keys():
    """Test that corrupted storage is wiped and the state comes up empty."""
    storage = InMemoryStorage({
        CV_DATA_KEY: "{not json",
        THEME_KEY: json.dumps({"themeName": "Modern"}),
    })
    snapshot = PortfolioState(storage).load()

    assert snapshot.status == PortfolioStatus.EMPTY
    assert snapshot.cvRecord is None
    assert snapshot.theme is None
    assert storage.data == {}


def test_record_with_wrong_shape_clears_both_keys(sample_cv):
    """Test that a stored record failing validation is treated as corrupted."""
    del sample_cv["personalInformation"]
    storage = InMemoryStorage({CV_DATA_KEY: json.dumps(sample_cv)})
    snapshot = PortfolioState(storage).load()

    assert snapshot.status == PortfolioStatus.EMPTY
    assert storage.get(CV_DATA_KEY) is None


def test_load_reads_storage_once(storage, state, sample_record):
    """Test that a second load does not re-read storage."""
    storage.set(CV_DATA_KEY, sample_record.model_dump_json())
    assert state.load().cvRecord is None


def test_file_storage_round_trip(tmp_path, sample_record):
    """Test persistence across instances with file storage."""
    state = PortfolioState(FileStorage(tmp_path / "store"))
    state.load()
    state.replace_cv_record(sample_record)

    reloaded = PortfolioState(FileStorage(tmp_path / "store")).load()
    assert reloaded.cvRecord == sample_record

    state.discard()
    assert PortfolioState(FileStorage(tmp_path / "store")).load().status == PortfolioStatus.EMPTY


def test_derive_profession_from_latest_title(sample_record):
    """Test that the most recent job title wins."""
    assert derive_profession(sample_record) == "Senior Engineer"


def test_derive_profession_from_summary_keyword(sample_cv):
    """Test the summary keyword fallback."""
    sample_cv["experience"] = []
    sample_cv["summary"] = "Experienced data analyst with a passion for dashboards."
    assert derive_profession(CvRecord.model_validate(sample_cv)) == "Analyst"


def test_derive_profession_ignores_partial_words(sample_cv):
    """Test that keywords only match whole words."""
    sample_cv["experience"] = []
    sample_cv["summary"] = "Reengineering legacy systems."
    assert derive_profession(CvRecord.model_validate(sample_cv)) == "Professional"


def test_derive_profession_default(sample_cv):
    """Test the default label."""
    sample_cv["experience"] = []
    sample_cv["summary"] = None
    assert derive_profession(CvRecord.model_validate(sample_cv)) == "Professional"
    assert derive_profession(None) == "Professional"


def test_update_summary_leaves_other_fields(state, sample_record):
    """Test that a field update changes only that field."""
    state.replace_cv_record(sample_record)
    snapshot = state.update_field("summary", "New summary.")

    assert snapshot.cvRecord.summary == "New summary."
    expected = sample_record.model_copy(update={"summary": "New summary."})
    assert snapshot.cvRecord == expected


def test_update_title_keeps_profession(state, sample_record):
    """Test that editing a job title does not re-derive the profession."""
    state.replace_cv_record(sample_record)
    snapshot = state.update_field("experience.0.title", "CTO")

    assert snapshot.cvRecord.experience[0].title == "CTO"
    assert snapshot.profession == "Senior Engineer"


def test_replace_record_rederives_profession(state, sample_record):
    """Test that replacing the whole record re-derives the profession."""
    state.replace_cv_record(sample_record)
    updated = sample_record.model_copy(deep=True)
    updated.experience[0].title = "CTO"
    assert state.replace_cv_record(updated).profession == "CTO"


def test_update_is_persisted(storage, state, sample_record):
    """Test that a field update is mirrored to storage."""
    state.replace_cv_record(sample_record)
    state.update_field("personalInformation.customProfession", "Platform Lead")

    stored = json.loads(storage.data[CV_DATA_KEY])
    assert stored["personalInformation"]["customProfession"] == "Platform Lead"


def test_update_appends_at_list_end(state, sample_record):
    """Test that an index equal to the list length appends."""
    state.replace_cv_record(sample_record)
    snapshot = state.update_field("projects.1", {"name": "Atlas", "description": "Maps."})
    assert [project.name for project in snapshot.cvRecord.projects] == ["Ledger", "Atlas"]

    snapshot = state.update_field("projects.0.technologiesUsed.2", "Docker")
    assert snapshot.cvRecord.projects[0].technologiesUsed == ["Python", "PostgreSQL", "Docker"]


def test_update_optional_list_from_none(state, sample_cv):
    """Test setting the first item of an unset optional list."""
    sample_cv["projects"][0].pop("technologiesUsed")
    state.replace_cv_record(CvRecord.model_validate(sample_cv))
    snapshot = state.update_field("projects.0.technologiesUsed.0", "Rust")
    assert snapshot.cvRecord.projects[0].technologiesUsed == ["Rust"]


@pytest.mark.parametrize(
    "path,value",
    [
        ("experience.5.title", "CTO"),
        ("unknownField", "x"),
        ("skills.0.name", "x"),
        ("summary.0", "x"),
        ("experience..title", "x"),
        ("experience.².title", "x"),
        ("", "x"),
        ("experience.0.title", None),
        ("projects.1", {"name": "Missing description"}),
    ],
)
def test_invalid_update_leaves_state_untouched(storage, state, sample_record, path, value):
    """Test that a bad path or value is rejected without side effects."""
    state.replace_cv_record(sample_record)
    stored_before = storage.data[CV_DATA_KEY]

    with pytest.raises(FieldUpdateError):
        state.update_field(path, value)

    assert state.cv_record == sample_record
    assert storage.data[CV_DATA_KEY] == stored_before


def test_update_without_record_fails(state):
    """Test that updates need a record."""
    with pytest.raises(NoCvRecordError):
        state.update_field("summary", "x")


def test_returned_record_is_a_copy(state, sample_record):
    """Test that callers cannot mutate the state through returned values."""
    state.replace_cv_record(sample_record)
    record = state.cv_record
    record.skills.append("Hacking")
    assert state.cv_record.skills == ["Python", "SQL"]


def test_discard_clears_memory_and_storage(storage, state, sample_record):
    """Test discarding the portfolio."""
    state.replace_cv_record(sample_record)
    state.replace_theme(PortfolioTheme(themeName="Modern"))

    snapshot = state.discard()

    assert snapshot.status == PortfolioStatus.EMPTY
    assert snapshot.profession == "Professional"
    assert storage.data == {}


def test_toggle_edit_mode(state):
    """Test that edit mode flips and is reported in snapshots."""
    assert state.toggle_edit_mode() is True
    assert state.read().editMode is True
    assert state.toggle_edit_mode() is False
