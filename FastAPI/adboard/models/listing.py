from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, Integer, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship

from adboard.core.vocabulary import ListingStatus
from adboard.database import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Listing(Base):
    """A classified ad. Publicly visible only once an admin approves it."""

    __tablename__ = "listings"
    __table_args__ = (Index("ix_listings_status_created_at", "status", "created_at"),)

    id = Column(String, primary_key=True, index=True)
    user_id = Column(String, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(100), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(32), nullable=False)
    city = Column(String(64))
    experience_level = Column(String(32))
    salary = Column(String(200))
    contact_email = Column(String(320), nullable=False)
    contact_phone = Column(String(64), nullable=False)
    status = Column(String(16), nullable=False, default=ListingStatus.PENDING.value)  # pending | approved | rejected
    views = Column(Integer, nullable=False, default=0)
    # Python-side timestamp keeps microsecond ordering on every backend.
    created_at = Column(DateTime(timezone=True), nullable=False, default=_now)
    updated_at = Column(DateTime(timezone=True), onupdate=_now)

    owner = relationship("User", back_populates="listings")
