from functools import partial
from types import SimpleNamespace

import click
import pytest
import yaml

from deployment.constants import StartTimeSource
from deployment.runner import deploy_staking
from scripts import deploy_staking as deploy_script
from tests.conftest import STAKING_ADDRESS, FakeAccount

TESTNET = SimpleNamespace(name="testnet", ecosystem=SimpleNamespace(name="bsc"))
MAINNET = SimpleNamespace(name="mainnet", ecosystem=SimpleNamespace(name="bsc"))


@pytest.fixture
def params_filepath(tmp_path, params):
    filepath = tmp_path / "staking.yml"
    filepath.write_text(yaml.safe_dump(params))
    return filepath


@pytest.fixture
def run(monkeypatch, staking_container):
    monkeypatch.setattr(
        deploy_script, "networks", SimpleNamespace(provider=SimpleNamespace(chain_id=97))
    )
    monkeypatch.setattr(
        deploy_script,
        "deploy_staking",
        partial(deploy_staking, contract_lookup=lambda name: staking_container),
    )

    def invoke(params_filepath, account, network=TESTNET, **overrides):
        options = dict(
            start_time_source=None,
            start_time_offset=None,
            verify=False,
            auto=True,
        )
        options.update(overrides)
        deploy_script.cli.callback(
            account=account, network=network, params_filepath=params_filepath, **options
        )

    return invoke


def test_exits_zero_after_deployment(capsys, run, params_filepath):
    account = FakeAccount()
    with pytest.raises(SystemExit) as exc_info:
        run(params_filepath, account)

    assert exc_info.value.code == 0
    assert len(account.deployments) == 1
    out = capsys.readouterr().out
    assert "Network: bsc:testnet" in out
    assert "Chain ID: 97" in out
    assert f"staking has been deployed to: {STAKING_ADDRESS}" in out


def test_exits_one_for_unconfigured_network(capsys, run, params_filepath):
    account = FakeAccount()
    with pytest.raises(SystemExit) as exc_info:
        run(params_filepath, account, network=MAINNET)

    assert exc_info.value.code == 1
    assert account.deployments == []
    assert "bsc:mainnet" in capsys.readouterr().err


def test_exits_one_when_deployment_fails(run, params_filepath):
    account = FakeAccount(error=RuntimeError("nonce too low"))
    with pytest.raises(SystemExit) as exc_info:
        run(params_filepath, account)

    assert exc_info.value.code == 1
    assert len(account.deployments) == 1


def test_start_time_source_override(capsys, run, params_filepath):
    with pytest.raises(SystemExit) as exc_info:
        run(
            params_filepath,
            FakeAccount(),
            start_time_source=StartTimeSource.FIXED_CONFIGURED.value,
        )

    assert exc_info.value.code == 0
    assert "Start time source: fixed-configured" in capsys.readouterr().out


def test_malformed_params_file(tmp_path, run):
    filepath = tmp_path / "staking.yml"
    filepath.write_text("networks: [bsc:testnet]\n")
    account = FakeAccount()
    with pytest.raises(click.ClickException) as exc_info:
        run(filepath, account)

    assert exc_info.value.exit_code == 1
    assert str(filepath) in exc_info.value.format_message()
    assert account.deployments == []
