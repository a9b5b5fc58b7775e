"""Service that turns an uploaded CV document into a structured record."""

from typing import Optional

from loguru import logger
from pydantic import ValidationError as PydanticValidationError

from portfolio_app.exceptions import ExtractionError, LLMServiceError
from portfolio_app.models.cv_models import CvRecord
from portfolio_app.services.llm_service import LLMService, data_uri_part


def _string(description: str) -> dict:
    return {"type": "STRING", "description": description}


def _string_list(description: str) -> dict:
    return {"type": "ARRAY", "items": {"type": "STRING"}, "description": description}


CV_RECORD_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "personalInformation": {
            "type": "OBJECT",
            "properties": {
                "name": _string("Full name of the person."),
                "email": _string("Email address."),
                "phone": _string("Phone number."),
                "linkedin": _string("LinkedIn profile URL."),
                "github": _string("GitHub profile URL."),
            },
            "required": ["name"],
        },
        "summary": _string("Professional summary or profile statement."),
        "experience": {
            "type": "ARRAY",
            "description": "Work experience, most recent first.",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "title": _string("Job title."),
                    "company": _string("Company name."),
                    "dates": _string("Employment period, e.g. 'Jan 2020 - Present'."),
                    "description": _string("Responsibilities and achievements."),
                },
                "required": ["title", "company", "dates", "description"],
            },
        },
        "education": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "degree": _string("Degree or certificate."),
                    "institution": _string("School or university."),
                    "dates": _string("Study period."),
                    "description": _string("Additional details."),
                },
                "required": ["degree", "institution", "dates"],
            },
        },
        "skills": _string_list("Short skill names."),
        "projects": {
            "type": "ARRAY",
            "items": {
                "type": "OBJECT",
                "properties": {
                    "name": _string("Project name."),
                    "description": _string("What the project is and does."),
                    "url": _string("Project link."),
                    "imagePrompt": _string("Two or three keywords for an illustrative image."),
                    "keyFeatures": _string("Main features."),
                    "myRole": _string("The person's role in the project."),
                    "challengesSolutions": _string("Challenges met and how they were solved."),
                    "projectGoals": _string("Goals of the project."),
                    "technologiesUsed": _string_list("Technologies used."),
                },
                "required": ["name", "description"],
            },
        },
    },
    "required": ["personalInformation", "experience", "education", "skills", "projects"],
}


EXTRACTION_PROMPT = """You are an expert CV parser. Extract the information from the attached CV document.

Rules:
1. Use ONLY information present in the document. DO NOT invent anything.
2. List experience entries from most recent to oldest.
3. Return empty lists for sections the CV does not contain.
4. Keep skills short (one to three words each).
5. For each project, suggest an imagePrompt of two or three keywords describing a representative picture.
"""


class CvExtractor:
    """Parse a CV document into a CvRecord through the model API."""

    def __init__(self, llm_service: Optional[LLMService] = None):
        self.llm_service = llm_service or LLMService()

    async def extract(self, cv_data_uri: str) -> CvRecord:
        """
        Extract a structured CV record.

        Args:
            cv_data_uri: The document as a base64 data URI

        Returns:
            CvRecord: Validated record, all four sequences present

        Raises:
            ExtractionError: If the call fails or the answer does not validate
        """
        try:
            media = [data_uri_part(cv_data_uri)]
        except ValueError as e:
            raise ExtractionError(str(e)) from e

        try:
            payload = await self.llm_service.generate_json(
                EXTRACTION_PROMPT,
                response_schema=CV_RECORD_SCHEMA,
                media=media,
                temperature=0.1,
            )
        except LLMServiceError as e:
            logger.error("CV extraction call failed: {}", e)
            raise ExtractionError(f"Could not parse the CV: {e.message}") from e

        try:
            record = CvRecord.model_validate(payload)
        except PydanticValidationError as e:
            logger.error("CV extraction returned an invalid record: {}", e)
            raise ExtractionError(
                f"The parsed CV does not match the expected structure ({e.error_count()} errors)"
            ) from e

        logger.info(
            "Parsed CV for {}: {} experience, {} education, {} skills, {} projects",
            record.personalInformation.name,
            len(record.experience),
            len(record.education),
            len(record.skills),
            len(record.projects),
        )
        return record
