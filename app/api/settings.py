"""Settings endpoints"""

from fastapi import APIRouter, Depends

from app.models.settings import UserSettingsUpdate, UserSettingsView
from app.runtime import MeditationRuntime, get_runtime

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=UserSettingsView)
async def get_settings(runtime: MeditationRuntime = Depends(get_runtime)):
    """Current settings (the API key is reported only as present or not)"""
    return UserSettingsView.from_settings(runtime.settings.get())


@router.put("", response_model=UserSettingsView)
async def update_settings(
    request: UserSettingsUpdate,
    runtime: MeditationRuntime = Depends(get_runtime)
):
    """Update the given fields; omitted fields keep their value"""
    return UserSettingsView.from_settings(runtime.settings.update(request))


@router.delete("/api", response_model=UserSettingsView)
async def disable_reflection_api(runtime: MeditationRuntime = Depends(get_runtime)):
    """Turn the reflection API off and forget its URL and key"""
    return UserSettingsView.from_settings(runtime.settings.clear_api_config())


@router.post("/reset")
async def reset_app(runtime: MeditationRuntime = Depends(get_runtime)):
    """Stop the countdown and delete every stored session, note, entry and setting"""
    runtime.reset()
    return {"success": True}
