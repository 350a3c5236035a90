# tests/test_config.py
from storefront.config import load_settings


def test_defaults():
    s = load_settings({})
    assert s.gateway_url == "http://127.0.0.1:8085"
    assert s.api_key is None
    assert s.timeout == 10


def test_environment_overrides():
    s = load_settings({"DASTKAR_GATEWAY_URL": "http://api:8085", "DASTKAR_TIMEOUT": "2.5",
                       "DASTKAR_API_KEY": "k", "DASTKAR_LOG_LEVEL": "debug"})
    assert s.gateway_url == "http://api:8085"
    assert s.timeout == 2.5
    assert s.api_key == "k"
    assert s.log_level == "debug"
