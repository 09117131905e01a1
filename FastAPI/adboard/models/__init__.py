from adboard.models.listing import Listing
from adboard.models.user import User

__all__ = [
    "Listing",
    "User",
]
