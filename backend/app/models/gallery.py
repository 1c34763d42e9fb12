from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime

from app.core.database import Base
from app.core.types import GUID, generate_uuid


class Album(Base):
    """Gallery album"""
    __tablename__ = "albums"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    name = Column(String(255), unique=True, index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    images = relationship(
        "AlbumImage",
        back_populates="album",
        cascade="all, delete-orphan",
        order_by="AlbumImage.created_at",
        lazy="selectin",
    )

    def __repr__(self):
        return f"<Album {self.name}>"


class AlbumImage(Base):
    """Image file stored under an album; path is relative to the asset store root"""
    __tablename__ = "album_images"

    id = Column(GUID, primary_key=True, default=generate_uuid)
    album_id = Column(GUID, ForeignKey("albums.id", ondelete="CASCADE"), index=True, nullable=False)
    path = Column(String(500), nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    album = relationship("Album", back_populates="images")

    def __repr__(self):
        return f"<AlbumImage {self.path}>"
