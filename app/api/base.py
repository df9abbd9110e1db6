from fastapi import APIRouter
from app.api import audio, diary, health, notes, sessions, settings, timer

api_router = APIRouter()

# Include all sub-routers
api_router.include_router(health.router)
api_router.include_router(timer.router)
api_router.include_router(sessions.router)
api_router.include_router(notes.router)
api_router.include_router(diary.router)
api_router.include_router(settings.router)
api_router.include_router(audio.router)
