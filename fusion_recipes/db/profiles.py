import json
from datetime import UTC, datetime

from fusion_recipes.db.sqlite import get_conn
from fusion_recipes.schemas.preferences import Profile

_LIST_FIELDS = (
    "medical_health_preferences",
    "lifestyle_dietary_preferences",
    "religious_preferences",
    "pantry_items",
)


def get_profile(user_id: str) -> Profile | None:
    with get_conn() as conn:
        row = conn.execute(
            """
            SELECT medical_health_preferences, lifestyle_dietary_preferences,
                   religious_preferences, pantry_items
            FROM profiles
            WHERE id = ?
            """,
            (user_id,),
        ).fetchone()

    if row is None:
        return None
    return Profile.model_validate({field: json.loads(row[field]) for field in _LIST_FIELDS})


def save_profile(user_id: str, profile: Profile) -> None:
    values = {field: json.dumps(getattr(profile, field)) for field in _LIST_FIELDS}
    with get_conn() as conn:
        conn.execute(
            """
            INSERT INTO profiles (
                id, medical_health_preferences, lifestyle_dietary_preferences,
                religious_preferences, pantry_items, updated_at
            )
            VALUES (
                :id, :medical_health_preferences, :lifestyle_dietary_preferences,
                :religious_preferences, :pantry_items, :updated_at
            )
            ON CONFLICT(id) DO UPDATE SET
                medical_health_preferences = excluded.medical_health_preferences,
                lifestyle_dietary_preferences = excluded.lifestyle_dietary_preferences,
                religious_preferences = excluded.religious_preferences,
                pantry_items = excluded.pantry_items,
                updated_at = excluded.updated_at
            """,
            {"id": user_id, "updated_at": datetime.now(UTC).isoformat(), **values},
        )
