from datetime import datetime, timedelta, timezone

from app.db.session import create_session_factory
from app.infra.storage.key_value_store import KeyValueStore
from app.infra.storage.repositories import MAX_SESSIONS, SettingsRepository
from app.models.diary import DiaryEntryCreate
from app.models.session import SessionRecord
from app.models.settings import UserSettingsUpdate


def _session(index: int, minutes: int = 10, date: datetime = None) -> SessionRecord:
    return SessionRecord(
        id=f"sess-{index}",
        date=date or datetime(2026, 1, 1, tzinfo=timezone.utc) + timedelta(minutes=index),
        minutes=minutes,
        type="Anapana",
    )


def test_values_survive_a_new_store(engine, store):
    store.set("userName", "Ana")
    store.set("sessions", [{"a": 1}])

    fresh = KeyValueStore(create_session_factory(engine))

    assert fresh.get("userName") == "Ana"
    assert fresh.get("sessions") == [{"a": 1}]
    assert fresh.get("missing", "default") == "default"


def test_clear_removes_everything(engine, store):
    store.set("diary", [])
    store.set("useApi", True)
    store.clear()

    fresh = KeyValueStore(create_session_factory(engine))
    assert fresh.get("diary") is None
    assert fresh.get("useApi") is None


def test_sessions_newest_first(session_repo):
    session_repo.prepend(_session(1))
    session_repo.prepend(_session(2))

    assert [s.id for s in session_repo.find_all()] == ["sess-2", "sess-1"]
    assert [s.id for s in session_repo.find_all(limit=1, offset=1)] == ["sess-1"]


def test_session_list_capped_at_200(session_repo):
    for index in range(MAX_SESSIONS):
        session_repo.prepend(_session(index))
    assert session_repo.count() == MAX_SESSIONS

    session_repo.prepend(_session(MAX_SESSIONS))

    sessions = session_repo.find_all()
    assert len(sessions) == MAX_SESSIONS
    assert sessions[0].id == f"sess-{MAX_SESSIONS}"
    assert session_repo.find_by_id("sess-0") is None
    assert session_repo.find_by_id("sess-1") is not None


def test_session_stats(session_repo):
    day = datetime(2026, 3, 1, 7, 0, tzinfo=timezone.utc)
    session_repo.prepend(_session(1, minutes=10, date=day))
    session_repo.prepend(_session(2, minutes=20, date=day + timedelta(hours=2)))
    session_repo.prepend(_session(3, minutes=15, date=day + timedelta(days=1)))

    stats = session_repo.stats()

    assert stats.count == 3
    assert stats.total_minutes == 45 == session_repo.total_minutes()
    assert stats.days_logged == 2 == session_repo.days_logged()


def test_invalid_and_duplicate_entries_are_skipped(store, session_repo):
    valid = _session(1).model_dump(mode="json")
    store.set("sessions", [valid, valid, {"id": "sess-bad", "minutes": -3}, "garbage"])

    assert [s.id for s in session_repo.find_all()] == ["sess-1"]


def test_delete_session(session_repo):
    session_repo.prepend(_session(1))

    assert session_repo.delete("sess-1") is True
    assert session_repo.delete("sess-1") is False
    assert session_repo.count() == 0


def test_diary_create(diary_repo):
    entry = diary_repo.create(DiaryEntryCreate(text="  Hoje eu observei a respiração.  "))

    assert entry.id.startswith("diary-")
    assert entry.text == "Hoje eu observei a respiração."
    assert diary_repo.find_all() == [entry]


def test_settings_defaults_and_update(settings_repo, store):
    settings = settings_repo.get()
    assert settings.user_name == "Praticante"
    assert settings.onboarding_done is False

    updated = settings_repo.update(UserSettingsUpdate(
        user_name="Ana",
        use_api=True,
        api_url="https://reflect.example.com",
        api_key="k",
    ))

    assert updated.user_name == "Ana"
    assert store.get("userName") == "Ana"
    assert store.get("useApi") is True

    api_config = settings_repo.reflection_api_config()
    assert api_config.is_configured
    assert api_config.api_key == "k"


def test_clear_api_config(settings_repo):
    settings_repo.update(UserSettingsUpdate(use_api=True, api_url="https://reflect.example.com"))

    cleared = settings_repo.clear_api_config()

    assert cleared.use_api is False
    assert cleared.api_url == ""
    assert not settings_repo.reflection_api_config().is_configured


def test_settings_from_store_without_cache(engine, store):
    store.set("onboardingDone", True)

    repo = SettingsRepository(KeyValueStore(create_session_factory(engine)))

    assert repo.get().onboarding_done is True
