from app.db.base import Base
from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship


class CounterTag(Base):
    __tablename__ = "counter_tags"

    counter_id: Mapped[str] = mapped_column(String(36), ForeignKey("counters.id", ondelete="CASCADE"), primary_key=True)
    tag_id: Mapped[int] = mapped_column(Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)

    counter: Mapped["Counter"] = relationship(back_populates="tag_links")
    tag: Mapped["Tag"] = relationship(lazy="joined")
