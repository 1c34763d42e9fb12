"""
Custom Exceptions for the Alumni Portal
=======================================

Domain errors carry an HTTP status so the API layer can render them without
knowing which service raised them.

Usage:
    from app.core.exceptions import UserNotFoundError, StorageIOError

    user = await users.find_by_id(user_id)
    if not user:
        raise UserNotFoundError(user_id)

    try:
        await store.delete(old_path)
    except StorageIOError as e:
        logger.warning(f"Could not delete old photo: {e}")
"""

from typing import Optional, Any, Dict, List


class AlumniPortalError(Exception):
    """Base exception for all alumni portal errors"""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
        status_code: Optional[int] = None
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details
        }


# ============================================
# Authentication & Authorization Errors
# ============================================

class AuthenticationError(AlumniPortalError):
    """User authentication failed"""

    status_code = 401

    def __init__(self, message: str = "Authentication failed"):
        super().__init__(message, code="AUTH_FAILED")


class AuthorizationError(AlumniPortalError):
    """User not authorized for this action"""

    status_code = 403

    def __init__(self, message: str = "Not authorized"):
        super().__init__(message, code="NOT_AUTHORIZED")


# ============================================
# Resource Errors (404-type)
# ============================================

class ResourceNotFoundError(AlumniPortalError):
    """Base class for not found errors"""

    status_code = 404

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found",
            code=f"{resource_type.upper()}_NOT_FOUND",
            details={"resource_type": resource_type, "resource_id": resource_id}
        )


class UserNotFoundError(ResourceNotFoundError):
    """User not found"""

    def __init__(self, user_id: str):
        super().__init__("User", str(user_id))


class AlbumNotFoundError(ResourceNotFoundError):
    """Gallery album not found"""

    def __init__(self, album_id: str):
        super().__init__("Album", str(album_id))


# ============================================
# Validation Errors (400-type)
# ============================================

class ValidationError(AlumniPortalError):
    """Input validation failed"""

    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class NoFileProvidedError(ValidationError):
    """Upload request carried no file at all"""

    def __init__(self, message: str = "No file selected. Please choose a file to upload."):
        super().__init__(message, field="file")
        self.code = "NO_FILE_PROVIDED"


class UnsupportedFileTypeError(ValidationError):
    """File type not allowed"""

    def __init__(self, filename: str, content_type: Optional[str], allowed_types: List[str]):
        super().__init__(
            f"Unsupported file type. Only {', '.join(allowed_types)} images are allowed."
        )
        self.code = "UNSUPPORTED_FILE_TYPE"
        self.details = {
            "filename": filename,
            "content_type": content_type,
            "allowed_types": allowed_types
        }


class NoPhotoToDeleteError(ValidationError):
    """Remove was requested but the user has no profile photo"""

    def __init__(self, user_id: str):
        super().__init__("No profile photo to delete")
        self.code = "NO_PHOTO_TO_DELETE"
        self.details = {"user_id": str(user_id)}


# ============================================
# Storage Errors (500-type)
# ============================================

class StorageIOError(AlumniPortalError):
    """Asset store write or delete failed"""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message, code="STORAGE_IO_ERROR")
        if path:
            self.details["path"] = path


class AssetNotFoundError(StorageIOError):
    """Referenced asset is missing from the store"""

    def __init__(self, path: str):
        super().__init__(f"Asset '{path}' does not exist", path=path)
        self.code = "ASSET_NOT_FOUND"


class TranscodeError(AlumniPortalError):
    """Uploaded image could not be decoded or re-encoded"""

    def __init__(self, message: str = "Image could not be processed"):
        super().__init__(message, code="TRANSCODE_FAILED")


# ============================================
# Email Errors
# ============================================

class EmailDeliveryError(AlumniPortalError):
    """Outgoing email could not be delivered"""

    def __init__(self, to_email: str, message: str = "Failed to send email"):
        super().__init__(message, code="EMAIL_DELIVERY_FAILED", details={"to": to_email})


# ============================================
# Helper function for API responses
# ============================================

def error_response(error: AlumniPortalError) -> Dict[str, Any]:
    """Convert exception to API error response format"""
    return {
        "success": False,
        "detail": error.message,
        "error": error.to_dict()
    }
