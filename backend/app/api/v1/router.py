from fastapi import APIRouter
from app.api.v1.endpoints import auth, users, profile_photo, gallery, health

api_router = APIRouter()

api_router.include_router(health.router)


@api_router.get("/health", tags=["Health"])
async def health_check():
    """Simple health check endpoint for load balancers"""
    return {"status": "healthy", "service": "alumni-portal-backend"}


api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(profile_photo.router, prefix="/users", tags=["Profile Photo"])
api_router.include_router(users.router, prefix="/users", tags=["Users"])
api_router.include_router(gallery.router, prefix="/gallery", tags=["Gallery"])
