import json

import pytest

from soapbridge.config.loader import camel_to_snake, convert_keys, get_config_path, load_config
from soapbridge.config.schema import DEFAULT_CHARSET, DEFAULT_URL, ClientConfig
from soapbridge.utils.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("ACCESS_TOKEN", "URL", "CHARSET", "NAMESPACE", "TIMEOUT", "DIAGNOSTIC_POLICY"):
        monkeypatch.delenv(f"SOAPBRIDGE_{name}", raising=False)


def test_defaults_when_file_is_missing(tmp_path) -> None:
    config = load_config(tmp_path / "missing.json")
    assert config.url == DEFAULT_URL
    assert config.charset == DEFAULT_CHARSET
    assert config.access_token == ""
    assert config.timeout == 20.0
    assert config.diagnostic_policy == "log"
    assert config.target_namespace == DEFAULT_URL


def test_file_with_camel_case_keys(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(
        json.dumps({"accessToken": "abc", "charset": "UTF-8", "diagnosticPolicy": "raise", "unknownKey": 1}),
        encoding="utf-8",
    )
    config = load_config(path)
    assert config.access_token == "abc"
    assert config.charset == "utf-8"
    assert config.diagnostic_policy == "raise"


def test_overrides_win_over_file(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"accessToken": "from-file", "timeout": 5}), encoding="utf-8")
    config = load_config(path, access_token="override")
    assert config.access_token == "override"
    assert config.timeout == 5.0


def test_environment_prefix(monkeypatch, tmp_path) -> None:
    monkeypatch.setenv("SOAPBRIDGE_ACCESS_TOKEN", "from-env")
    monkeypatch.setenv("SOAPBRIDGE_CHARSET", "latin-1")
    config = load_config(tmp_path / "missing.json")
    assert config.access_token == "from-env"
    assert config.charset == "latin-1"


def test_bad_json_is_a_configuration_error(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigurationError) as err:
        load_config(path)
    assert err.value.code == "CONFIG_ERROR"


def test_non_object_file_is_rejected(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ConfigurationError):
        load_config(path)


def test_invalid_values_name_the_field(tmp_path) -> None:
    with pytest.raises(ConfigurationError) as err:
        load_config(tmp_path / "missing.json", charset="klingon-8")
    assert err.value.details == {"field": "charset"}
    with pytest.raises(ConfigurationError) as err:
        load_config(tmp_path / "missing.json", diagnostic_policy="shout")
    assert err.value.details == {"field": "diagnostic_policy"}


def test_config_is_frozen() -> None:
    config = ClientConfig(access_token="x")
    with pytest.raises(Exception):
        config.access_token = "y"


def test_key_helpers() -> None:
    assert camel_to_snake("accessToken") == "access_token"
    assert camel_to_snake("diagnosticPolicy") == "diagnostic_policy"
    assert convert_keys({"outerKey": [{"innerKey": 1}]}) == {"outer_key": [{"inner_key": 1}]}
    assert get_config_path().name == "config.json"
    assert get_config_path().parent.name == ".soapbridge"
