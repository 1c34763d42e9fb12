from sqlalchemy import Column, String, Integer, Index

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class AlumniRecord(Base):
    """
    Official alumni roll imported by the association.

    A registration matching name, roll number, batch and branch is
    verified automatically instead of waiting for an admin.
    """
    __tablename__ = "alumni_records"

    __table_args__ = (
        Index('ix_alumni_records_identity', 'name', 'roll_no', 'batch', 'branch'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    roll_no = Column(Integer, nullable=False)
    batch = Column(Integer, nullable=False)
    branch = Column(String(100), nullable=False)

    def __repr__(self):
        return f"<AlumniRecord {self.name} {self.batch}/{self.branch}>"
