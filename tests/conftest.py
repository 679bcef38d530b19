import sys
from pathlib import Path

import pytest

# Ensure project root is importable when pytest is invoked from non-root directories.
ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    from fusion_recipes.core.config import get_settings
    from fusion_recipes.db.sqlite import init_db

    # Keep tests deterministic regardless of caller shell environment.
    monkeypatch.setenv("APP_ENV", "test")
    monkeypatch.setenv("RECIPE_DB_PATH", str(tmp_path / "recipes.db"))
    for name in ("GENERATION_TRANSPORT", "RELAY_URL", "RELAY_TOKEN", "LLM_API_KEY"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    init_db()
