from sqlalchemy import Column, Integer, Text
from logbook.database import Base, UTCDateTime


class LogRecord(Base):
    """
    One timestamped text entry.
    Rows are only ever inserted, never updated or deleted.
    """
    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, index=True)
    timestamp = Column(UTCDateTime, nullable=False, index=True)
    content = Column(Text, nullable=False)
