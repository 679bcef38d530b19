import sqlite3

from fusion_recipes.core.config import Settings
from fusion_recipes.db.sqlite import get_conn
from fusion_recipes.services.errors import AuthConfigError

LLM_API_KEY_SECRET = "llm_api_key"


def get_llm_api_key(settings: Settings) -> str:
    """Upstream credential lookup; server-side only, never sent to callers."""
    if settings.llm_api_key:
        return settings.llm_api_key

    try:
        with get_conn() as conn:
            row = conn.execute(
                "SELECT value FROM secrets WHERE name = ?", (LLM_API_KEY_SECRET,)
            ).fetchone()
    except sqlite3.Error as exc:
        raise AuthConfigError("Secrets store is unavailable") from exc

    if row is None or not str(row["value"]).strip():
        raise AuthConfigError("LLM API key is not configured")
    return str(row["value"]).strip()
