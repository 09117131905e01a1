"""Closed vocabularies shared by the validator, the models and the API."""

from enum import Enum


class ListingStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class Category(str, Enum):
    JOB = "job"
    INTERNSHIP = "internship"
    VOLUNTEER = "volunteer"
    SEMINAR = "seminar"
    STUDY_ABROAD = "study_abroad"
    OTHER = "other"


class ExperienceLevel(str, Enum):
    ENTRY = "entry"
    MID = "mid"
    SENIOR = "senior"


# Year-band codes submitted by older clients.
LEGACY_EXPERIENCE_LEVELS: dict[str, ExperienceLevel] = {
    "0-2": ExperienceLevel.ENTRY,
    "3-5": ExperienceLevel.MID,
    "5-10": ExperienceLevel.SENIOR,
    "10+": ExperienceLevel.SENIOR,
}

CATEGORY_LABELS: dict[Category, str] = {
    Category.JOB: "Vakansiya",
    Category.INTERNSHIP: "Təcrübə proqramı",
    Category.VOLUNTEER: "Könüllü fəaliyyət",
    Category.SEMINAR: "Seminar",
    Category.STUDY_ABROAD: "Xaricdə təhsil",
    Category.OTHER: "Digər",
}

EXPERIENCE_LEVEL_LABELS: dict[ExperienceLevel, str] = {
    ExperienceLevel.ENTRY: "Başlanğıc səviyyə",
    ExperienceLevel.MID: "Orta səviyyə",
    ExperienceLevel.SENIOR: "Yüksək səviyyə",
}

CITIES: tuple[str, ...] = (
    "Ağcabədi", "Ağdam", "Ağdaş", "Ağdərə", "Ağstafa", "Ağsu", "Astara", "Bakı",
    "Balakən", "Beyləqan", "Bərdə", "Biləsuvar", "Cəbrayıl", "Cəlilabad", "Culfa",
    "Daşkəsən", "Füzuli", "Gədəbəy", "Gəncə", "Goranboy", "Göyçay", "Göygöl",
    "Hacıqabul", "İmişli", "İsmayıllı", "Kəlbəcər", "Kürdəmir", "Laçın", "Lerik",
    "Lənkəran", "Masallı", "Mingəçevir", "Naftalan", "Naxçıvan", "Neftçala", "Oğuz",
    "Ordubad", "Qəbələ", "Qax", "Qazax", "Qobustan", "Quba", "Qubadlı", "Qusar",
    "Saatlı", "Sabirabad", "Şabran", "Şahbuz", "Şamaxı", "Şəki", "Şəmkir", "Şərur",
    "Şirvan", "Şuşa", "Sumqayıt", "Tərtər", "Tovuz", "Ucar", "Xaçmaz", "Xankəndi",
    "Xızı", "Xocalı", "Xocavənd", "Yardımlı", "Yevlax", "Zaqatala", "Zəngilan",
    "Zərdab",
)

CITY_SET = frozenset(CITIES)

ALL_CATEGORIES = "all"
