"""Pydantic models for the parsed CV record."""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


class PersonalInformation(BaseModel):
    """Personal information and header customisation."""

    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    linkedin: Optional[str] = None
    github: Optional[str] = None
    avatarImage: Optional[str] = None
    selectedHeaderIcon: Optional[str] = None
    customProfession: Optional[str] = None


class ExperienceEntry(BaseModel):
    """Work experience entry."""

    title: str
    company: str
    dates: str
    description: str


class EducationEntry(BaseModel):
    """Education entry."""

    degree: str
    institution: str
    dates: str
    description: Optional[str] = None


class ProjectEntry(BaseModel):
    """Project entry, with the optional case-study sections of the project page."""

    name: str
    description: str
    url: Optional[str] = None
    image: Optional[str] = None
    imagePrompt: Optional[str] = None
    keyFeatures: Optional[str] = None
    myRole: Optional[str] = None
    challengesSolutions: Optional[str] = None
    projectGoals: Optional[str] = None
    technologiesUsed: Optional[List[str]] = None


class CvRecord(BaseModel):
    """Complete parsed CV."""

    personalInformation: PersonalInformation
    summary: Optional[str] = None
    experience: List[ExperienceEntry] = Field(default_factory=list)
    education: List[EducationEntry] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    projects: List[ProjectEntry] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("experience", "education", "skills", "projects", mode="before")
    @classmethod
    def _null_sequence_to_empty(cls, value):
        # The model sometimes answers `null` for a section it found nothing for
        return [] if value is None else value
