"""User settings domain model"""
from typing import Optional
from pydantic import BaseModel


class UserSettings(BaseModel):
    """Scalar settings persisted one key each"""
    user_name: str = "Praticante"
    onboarding_done: bool = False
    use_api: bool = False
    api_url: str = ""
    api_key: str = ""


class UserSettingsUpdate(BaseModel):
    """Settings update model - all fields optional"""
    user_name: Optional[str] = None
    onboarding_done: Optional[bool] = None
    use_api: Optional[bool] = None
    api_url: Optional[str] = None
    api_key: Optional[str] = None


class UserSettingsView(BaseModel):
    """Settings as returned by the API (the key itself is never echoed)"""
    user_name: str
    onboarding_done: bool
    use_api: bool
    api_url: str
    has_api_key: bool

    @classmethod
    def from_settings(cls, settings: UserSettings) -> "UserSettingsView":
        return cls(
            user_name=settings.user_name,
            onboarding_done=settings.onboarding_done,
            use_api=settings.use_api,
            api_url=settings.api_url,
            has_api_key=bool(settings.api_key),
        )
