from sqlalchemy import Column, String, Boolean, DateTime, Enum as SQLEnum, Integer, Text, JSON, Index
from datetime import datetime
import enum

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class UserRole(str, enum.Enum):
    """User roles"""
    USER = "user"
    ADMIN = "admin"


class User(Base):
    """Alumni account"""
    __tablename__ = "users"

    __table_args__ = (
        # Identifies an alumnus independently of the email used to register
        Index('ix_users_roll_batch_branch', 'roll_no', 'batch', 'branch'),
    )

    id = Column(GUID, primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(20), nullable=True)
    hashed_password = Column(String(255), nullable=False)

    # Alumni identity (required for non-admins)
    roll_no = Column(Integer, nullable=True)
    batch = Column(Integer, nullable=True, index=True)
    branch = Column(String(100), nullable=True, index=True)

    role = Column(SQLEnum(UserRole), default=UserRole.USER, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)

    # Profile fields
    biography = Column(Text, nullable=True)
    current_working_place = Column(String(255), nullable=True)
    address = Column(Text, nullable=True)
    designation = Column(String(255), nullable=True)
    achievements = Column(JSON, default=list)
    linkedin = Column(String(500), nullable=True)
    facebook = Column(String(500), nullable=True)

    # Path relative to the asset store root, None when no photo is set
    profile_photo = Column(String(500), nullable=True, default=None)

    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
    last_login = Column(DateTime, nullable=True)

    @property
    def social_links(self) -> dict:
        return {"linkedin": self.linkedin, "facebook": self.facebook}

    def __repr__(self):
        return f"<User {self.email}>"
