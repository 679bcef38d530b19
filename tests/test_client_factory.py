import pytest

from fusion_recipes.core.config import Settings
from fusion_recipes.db.sqlite import get_conn
from fusion_recipes.services.client_direct import DirectGenerationClient
from fusion_recipes.services.client_factory import get_generation_client
from fusion_recipes.services.client_relay import RelayGenerationClient
from fusion_recipes.services.credentials import get_llm_api_key
from fusion_recipes.services.errors import AuthConfigError


def test_factory_selects_relay_by_default() -> None:
    client = get_generation_client(Settings(relay_url="https://relay.invalid/fn"))

    assert isinstance(client, RelayGenerationClient)


def test_factory_relay_without_url_is_a_config_error() -> None:
    with pytest.raises(AuthConfigError):
        get_generation_client(Settings())


def test_factory_selects_direct_with_key(monkeypatch) -> None:
    class FakeDirectClient:
        def __init__(self, api_key: str, model: str, base_url: str, timeout_seconds: float) -> None:
            self.api_key = api_key
            self.model = model
            self.base_url = base_url
            self.timeout_seconds = timeout_seconds

    monkeypatch.setattr(
        "fusion_recipes.services.client_factory.DirectGenerationClient", FakeDirectClient
    )
    settings = Settings(
        generation_transport="direct",
        llm_api_key="test-key",
        llm_model="deepseek-chat",
        generation_timeout_seconds=10,
    )

    client = get_generation_client(settings)

    assert isinstance(client, FakeDirectClient)
    assert client.api_key == "test-key"
    assert client.model == "deepseek-chat"
    assert client.base_url == "https://api.deepseek.com"
    assert client.timeout_seconds == 10


def test_factory_direct_without_any_credential_is_a_config_error() -> None:
    with pytest.raises(AuthConfigError):
        get_generation_client(Settings(generation_transport="direct"))


def test_credential_is_read_from_secrets_table_when_env_missing() -> None:
    with get_conn() as conn:
        conn.execute("INSERT INTO secrets (name, value) VALUES ('llm_api_key', ' stored-key ')")

    assert get_llm_api_key(Settings()) == "stored-key"


def test_env_credential_takes_precedence_over_secrets_table() -> None:
    with get_conn() as conn:
        conn.execute("INSERT INTO secrets (name, value) VALUES ('llm_api_key', 'stored-key')")

    assert get_llm_api_key(Settings(llm_api_key="env-key")) == "env-key"


def test_factory_builds_real_direct_client_from_stored_secret() -> None:
    with get_conn() as conn:
        conn.execute("INSERT INTO secrets (name, value) VALUES ('llm_api_key', 'stored-key')")

    client = get_generation_client(Settings(generation_transport="direct"))

    assert isinstance(client, DirectGenerationClient)
