from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ListingSubmission(BaseModel):
    """
    Raw form input for create and edit. Fields stay loosely typed here;
    content rules live in services.listing_validator so only one error surfaces.
    Accepts snake_case or camelCase keys.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str | None = None
    description: str | None = None
    category: str | None = None
    city: str | None = None
    experience_level: str | None = None
    salary: str | None = None
    contact_email: str | None = None
    contact_phone: str | None = None


class ListingOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    category: str
    category_label: str | None = None
    city: str | None
    experience_level: str | None
    salary: str | None
    contact_email: str
    contact_phone: str
    status: str
    views: int
    user_id: str
    created_at: datetime | None
    updated_at: datetime | None = None


class ListingPage(BaseModel):
    items: list[ListingOut]
    total: int
    page: int
    page_size: int


class VocabularyEntry(BaseModel):
    value: str
    label: str


class ListingVocabulary(BaseModel):
    categories: list[VocabularyEntry]
    experience_levels: list[VocabularyEntry]
    cities: list[str]
