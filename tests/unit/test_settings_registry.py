from config import ollama_route
from config.registry import GENERATE_KEY, bind_model, find_model, get_model, unbind_model
from config.settings import Settings


def test_settings_defaults():
    settings = Settings(_env_file=None)
    assert settings.TOTAL_QUESTIONS == 6
    assert settings.CHUNK_SIZE == 900
    assert settings.CHUNK_OVERLAP == 150
    assert settings.STORE_BACKEND == "memory"
    assert settings.cors_origins() == ["*"]


def test_cors_origins_are_split():
    settings = Settings(_env_file=None, CORS_ORIGIN="http://a.test, http://b.test,")
    assert settings.cors_origins() == ["http://a.test", "http://b.test"]


def test_ollama_route_reads_settings():
    route = ollama_route(Settings(_env_file=None, OLLAMA_HOST="http://gpu:11434/", OLLAMA_MODEL="mistral"))
    assert route.base_url == "http://gpu:11434"
    assert route.endpoint == "/api/chat"
    assert route.model == "mistral"


def test_registry_bind_and_retrieve():
    marker = object()
    bind_model(GENERATE_KEY, lambda **_: marker)
    assert get_model(GENERATE_KEY)() is marker
    unbind_model(GENERATE_KEY)
    assert find_model(GENERATE_KEY) is None
