from app.db.base import Base, utcnow
from sqlalchemy import Boolean, CheckConstraint, Date, DateTime, ForeignKey, Integer, String, UniqueConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column, relationship
from datetime import date, datetime
import uuid

class Counter(Base):
    __tablename__ = "counters"

    __table_args__ = (
        UniqueConstraint("slug", name="uq_counters_slug"),
        CheckConstraint("view_count >= 0", name="ck_counters_view_count_non_negative"),
        Index("ix_counters_user_id", "user_id"),
        Index("ix_counters_public_listing", "is_private", "archived_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str | None] = mapped_column(String(500), nullable=True)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    archived_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    is_private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    slug: Mapped[str] = mapped_column(String(80), nullable=False)
    is_challenge: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    challenge_duration_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    challenge_achieved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    user: Mapped["User"] = relationship(back_populates="counters", lazy="joined")
    tag_links: Mapped[list["CounterTag"]] = relationship(
        back_populates="counter",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def is_archived(self) -> bool:
        return self.archived_at is not None
