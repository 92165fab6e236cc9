from fastapi import APIRouter

from src.atelier.api.v1 import auth, offerings, profiles, projects

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(auth.router)
api_router.include_router(profiles.router)
api_router.include_router(offerings.router)
api_router.include_router(projects.router)
