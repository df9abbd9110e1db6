"""Settings repository"""
import logging
from typing import Any, Dict

from app import config
from app.infra.storage.key_value_store import KeyValueStore
from app.models.settings import UserSettings, UserSettingsUpdate
from app.services.reflection.models.reflection_result import ReflectionApiConfig

logger = logging.getLogger(__name__)

# Field name -> persisted key
SETTINGS_KEYS: Dict[str, str] = {
    "user_name": "userName",
    "onboarding_done": "onboardingDone",
    "use_api": "useApi",
    "api_url": "apiUrl",
    "api_key": "apiKey",
}


class SettingsRepository:
    """Repository for scalar user settings, one key per field"""

    def __init__(self, store: KeyValueStore):
        self._store = store

    def _defaults(self) -> Dict[str, Any]:
        return {
            **UserSettings().model_dump(),
            "use_api": config.USE_REFLECTION_API,
            "api_url": config.REFLECTION_API_URL,
            "api_key": config.REFLECTION_API_KEY,
        }

    def get(self) -> UserSettings:
        """Load settings, falling back to defaults for missing keys"""
        defaults = self._defaults()
        values = {
            field: self._store.get(key, defaults[field])
            for field, key in SETTINGS_KEYS.items()
        }
        return UserSettings(**values)

    def update(self, data: UserSettingsUpdate) -> UserSettings:
        """Persist the fields that were set"""
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        for field, value in changes.items():
            self._store.set(SETTINGS_KEYS[field], value)

        if changes:
            logger.info(f"Updated settings: {', '.join(sorted(changes))}")
        return self.get()

    def clear_api_config(self) -> UserSettings:
        """Disable the reflection API and forget its URL and key"""
        self._store.set(SETTINGS_KEYS["use_api"], False)
        self._store.set(SETTINGS_KEYS["api_url"], "")
        self._store.set(SETTINGS_KEYS["api_key"], "")
        logger.info("Reflection API configuration cleared")
        return self.get()

    def reflection_api_config(self) -> ReflectionApiConfig:
        settings = self.get()
        return ReflectionApiConfig(
            enabled=settings.use_api,
            url=settings.api_url,
            api_key=settings.api_key,
        )
