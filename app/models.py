from sqlalchemy import Column, String, Integer, Boolean, Text
from .db import Base

# -----------------------------
# ORM models (tables) for the values directory
# -----------------------------
class WebknotValue(Base):
    __tablename__ = "webknot_values"
    # One organizational value (e.g. "Own The Outcome" under "Ownership")
    value_id    = Column(Integer, primary_key=True, autoincrement=True)
    title       = Column(String, index=True, nullable=False)
    pillar      = Column(String, nullable=False)             # evaluation criteria
    description = Column(Text, nullable=False, default="")
    active      = Column(Boolean, nullable=False, default=True)

    def __repr__(self):
        return f"<WebknotValue(value_id={self.value_id}, title={self.title}, pillar={self.pillar})>"
