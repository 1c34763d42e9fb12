# Re-export all models for convenient imports
from app.models.user import User, UserRole
from app.models.alumni_record import AlumniRecord
from app.models.gallery import Album, AlbumImage

__all__ = [
    # User
    "User",
    "UserRole",
    "AlumniRecord",
    # Gallery
    "Album",
    "AlbumImage",
]
