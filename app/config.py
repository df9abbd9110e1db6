import os
from dotenv import load_dotenv

load_dotenv(dotenv_path=".env")

# Local key-value storage (SQLite by default)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./meditation.db")

# Reflection API defaults (overridable from the settings endpoints)
REFLECTION_API_URL = os.getenv("REFLECTION_API_URL", "")
REFLECTION_API_KEY = os.getenv("REFLECTION_API_KEY", "")
USE_REFLECTION_API = os.getenv("USE_REFLECTION_API", "0").lower() in ("1", "true", "yes")

# Sessions shorter than this are not recorded (0 keeps every positive elapsed time)
MIN_SESSION_SECONDS = int(os.getenv("MIN_SESSION_SECONDS", "0"))

# Audio relay
PROXY_TOKEN = os.getenv("PROXY_TOKEN") or None
ALLOWED_ORIGIN = os.getenv("ALLOWED_ORIGIN", "*")
