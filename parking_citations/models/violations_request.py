import uuid

from datetime import datetime

from sqlalchemy import Column, DateTime, Index, Integer, String

from parking_citations.models.base import Base


class ViolationsRequest(Base):
    """ Represents a record of a batch of plate lookups """

    __tablename__ = 'violations_requests'

    # columns
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    company_id = Column(String(36))
    finders_count = Column(Integer, default=0, nullable=False)
    request_datetime = Column(DateTime, default=datetime.utcnow, nullable=False)
    requestor = Column(String(255))
    requests_count = Column(Integer, default=0, nullable=False)
    sources_failed = Column(Integer, default=0, nullable=False)
    vehicle_count = Column(Integer, default=0, nullable=False)
    violations_found = Column(Integer, default=0, nullable=False)

    # indices
    __table_args__ = (
        Index('index_request_datetime', 'request_datetime'),
        Index('index_requestor', 'requestor'),
    )
