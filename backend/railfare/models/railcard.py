from sqlalchemy import Column, String, Integer
from ..core.db import Base

class RailcardRow(Base):
    __tablename__ = "railcards"
    code = Column(String(3), primary_key=True, nullable=False)
    name = Column(String, nullable=False)

    min_adults   = Column(Integer, default=0, nullable=False)
    max_adults   = Column(Integer, default=9, nullable=False)
    min_children = Column(Integer, default=0, nullable=False)
    max_children = Column(Integer, default=9, nullable=False)
