import dataclasses
import json

import pytest

from config.settings import Config


def test_defaults_are_valid():
    config = Config()

    assert config.chain_id == 84532
    assert config.delay_seconds == 10
    assert config.validate() == []


def test_config_is_immutable():
    config = Config()

    with pytest.raises(dataclasses.FrozenInstanceError):
        config.delay_seconds = 0


def test_load_applies_file_then_environment(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"rpc_url": "http://file", "delay_seconds": 5, "unknown": 1}))

    config = Config.load(str(config_path), environ={"RPC_URL": "http://env", "CHAIN_ID": "1"})

    assert config.rpc_url == "http://env"
    assert config.chain_id == 1
    assert config.delay_seconds == 5


def test_load_ignores_broken_file_and_bad_env(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json")

    config = Config.load(str(config_path), environ={"CHAIN_ID": "abc", "DELAY_SECONDS": " "})

    assert config == Config()


def test_load_without_file(tmp_path):
    config = Config.load(str(tmp_path / "missing.json"), environ={"WALLETS_FILE": "custom.json"})

    assert config.wallets_file == "custom.json"


def test_validate_reports_problems():
    config = dataclasses.replace(
        Config(),
        rpc_url="",
        router_address="0x123",
        delay_seconds=-1,
        swap_amount_min=0.003,
        swap_gas_limit=0,
    )

    issues = config.validate()

    assert "RPC URL is empty" in issues
    assert any("router_address" in issue for issue in issues)
    assert "delay_seconds must not be negative" in issues
    assert any("swap amount range" in issue for issue in issues)
    assert "swap_gas_limit must be positive" in issues


def test_token_addresses():
    config = Config()

    assert set(config.token_addresses) == {"PRIOR", "USDT", "USDC"}
    assert config.token_addresses["PRIOR"] == config.prior_address


def test_load_coerces_json_values(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"delay_seconds": "5", "chain_id": "84532", "swap_gas_limit": 400000.0}))

    config = Config.load(str(config_path), environ={})

    assert config.delay_seconds == 5.0
    assert config.chain_id == 84532
    assert config.swap_gas_limit == 400000
    assert config.validate() == []


@pytest.mark.parametrize("field_name,bad_value", [
    ("delay_seconds", "soon"),
    ("chain_id", None),
    ("swap_amount_min", [0.001]),
    ("approve_gas_limit", True),
])
def test_invalid_json_values_fall_back_to_defaults(tmp_path, field_name, bad_value):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({field_name: bad_value}))

    config = Config.load(str(config_path), environ={})

    assert getattr(config, field_name) == getattr(Config(), field_name)
    assert config.validate() == []


def test_log_file_can_be_disabled_from_json(tmp_path):
    config_path = tmp_path / "config.json"
    config_path.write_text(json.dumps({"log_file": None}))

    assert Config.load(str(config_path), environ={}).log_file is None
