from sqlalchemy import Column, String
from ..core.db import Base

class LocationRow(Base):
    __tablename__ = "locations"
    nlc = Column(String(4), primary_key=True, nullable=False)
    crs = Column(String(3), nullable=True, index=True)
    name = Column(String, nullable=False)
