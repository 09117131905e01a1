"""
Structural validation of listing submissions.

validate_submission() is pure: it either returns a frozen ListingContent or
raises ListingValidationError for the first rule that fails. Rules are checked
in form order (title, description, category, city, contact email, contact phone),
then the optional experience level and salary.
"""

from dataclasses import dataclass

from email_validator import EmailNotValidError, validate_email

from adboard.core.errors import ListingValidationError
from adboard.core.vocabulary import CITY_SET, LEGACY_EXPERIENCE_LEVELS, Category, ExperienceLevel
from adboard.schemas.listing import ListingSubmission

TITLE_MIN, TITLE_MAX = 5, 100
DESCRIPTION_MIN, DESCRIPTION_MAX = 20, 1000
# Upper bounds match the listings column sizes.
CITY_MAX = 64
CONTACT_PHONE_MAX = 64
EXPERIENCE_LEVEL_MAX = 32
SALARY_MAX = 200


@dataclass(frozen=True)
class ListingContent:
    title: str
    description: str
    category: str
    city: str
    contact_email: str
    contact_phone: str
    experience_level: str | None = None
    salary: str | None = None

    def as_columns(self) -> dict:
        return {
            "title": self.title,
            "description": self.description,
            "category": self.category,
            "city": self.city,
            "experience_level": self.experience_level,
            "salary": self.salary,
            "contact_email": self.contact_email,
            "contact_phone": self.contact_phone,
        }


def _clean(value: str | None) -> str:
    return (value or "").strip()


def _optional(value: str | None) -> str | None:
    cleaned = _clean(value)
    return cleaned or None


def _check_length(field: str, value: str, low: int, high: int, noun: str) -> None:
    if len(value) < low:
        raise ListingValidationError(field, f"{noun} must be at least {low} characters")
    if len(value) > high:
        raise ListingValidationError(field, f"{noun} must be at most {high} characters")


def _check_max(field: str, value: str | None, high: int, noun: str) -> None:
    if value is not None and len(value) > high:
        raise ListingValidationError(field, f"{noun} must be at most {high} characters")


def normalize_experience_level(value: str | None) -> str | None:
    """Map legacy year-band codes onto the canonical levels; other values pass through."""
    cleaned = _optional(value)
    if cleaned is None:
        return None
    legacy = LEGACY_EXPERIENCE_LEVELS.get(cleaned)
    if legacy is not None:
        return legacy.value
    lowered = cleaned.lower()
    if lowered in {level.value for level in ExperienceLevel}:
        return lowered
    return cleaned


def validate_submission(submission: ListingSubmission, *, enforce_gazetteer: bool = True) -> ListingContent:
    title = _clean(submission.title)
    _check_length("title", title, TITLE_MIN, TITLE_MAX, "Title")

    description = _clean(submission.description)
    _check_length("description", description, DESCRIPTION_MIN, DESCRIPTION_MAX, "Description")

    category = _clean(submission.category)
    if category not in {c.value for c in Category}:
        raise ListingValidationError("category", "Choose a valid category")

    city = _clean(submission.city)
    if not city:
        raise ListingValidationError("city", "Choose a city")
    _check_max("city", city, CITY_MAX, "City")
    if enforce_gazetteer and city not in CITY_SET:
        raise ListingValidationError("city", f"Unknown city: {city}")

    try:
        contact_email = validate_email(_clean(submission.contact_email), check_deliverability=False).normalized
    except EmailNotValidError as e:
        raise ListingValidationError("contact_email", "Enter a valid email address") from e

    contact_phone = _clean(submission.contact_phone)
    if not contact_phone:
        raise ListingValidationError("contact_phone", "Contact phone is required")
    _check_max("contact_phone", contact_phone, CONTACT_PHONE_MAX, "Contact phone")

    experience_level = normalize_experience_level(submission.experience_level)
    _check_max("experience_level", experience_level, EXPERIENCE_LEVEL_MAX, "Experience level")

    salary = _optional(submission.salary)
    _check_max("salary", salary, SALARY_MAX, "Salary")

    return ListingContent(
        title=title,
        description=description,
        category=category,
        city=city,
        contact_email=contact_email,
        contact_phone=contact_phone,
        experience_level=experience_level,
        salary=salary,
    )
