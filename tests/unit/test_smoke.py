"""Unit tests for the post-deployment smoke test."""

from datetime import datetime, timezone

import pytest

from launchpad_deployments.constants import ZERO_ADDRESS
from launchpad_deployments.exceptions import EventNotFoundError, TokenNotRegisteredError
from launchpad_deployments.smoke import SmokeTestParams, parse_token_info, run_smoke_test

FACTORY = "0xe7f1725e7734ce288f8367e1bb143e90bb3f0512"
REGISTRY = "0x5fbdb2315678afecb367f032d93f642f64180aa3"
TOKEN = "0x9fe46736679d2d9a65f0992f2272de9f3c7fa6e0"
CREATOR = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
CREATED_AT = 1_700_000_000


def registry_record(name="Test Token", symbol="TEST", metadata_uri="ipfs://test", verified=False):
    return (name, symbol, CREATOR, True, CREATED_AT, metadata_uri, verified)


@pytest.fixture
def deployed_pair(deployer):
    """Attach fake factory/registry contracts that behave like a linked pair."""
    factory = deployer.at("TokenFactory", FACTORY)
    registry = deployer.at("TokenRegistry", REGISTRY)
    factory.transaction_events = {"TokenCreated": [{"tokenAddress": TOKEN, "creator": CREATOR}]}
    registry.call_results = {"tokenInfo": registry_record()}
    return factory, registry


class TestSmokeTestParams:
    """Test the default token creation parameters."""

    def test_defaults(self):
        """Test the defaults used by the original smoke test."""
        params = SmokeTestParams()

        assert params.name == "Test Token"
        assert params.symbol == "TEST"
        assert params.total_supply == 1_000_000 * 10**18
        assert params.is_clanker is True
        assert params.metadata_uri == "ipfs://test"
        assert params.value == 10**17


class TestRunSmokeTest:
    """Test the run_smoke_test function."""

    def test_creates_token_and_reads_registry(self, deployer, deployed_pair, call_log):
        """Test the full scenario: createToken, TokenCreated event, tokenInfo lookup."""
        report = run_smoke_test(deployer, FACTORY, REGISTRY)

        assert report.token_address == TOKEN
        assert report.transaction_hash == "0xcreateToken"
        assert report.info.name == "Test Token"
        assert report.info.symbol == "TEST"
        assert report.info.metadata_uri == "ipfs://test"
        assert report.info.verified is False

        transactions = [c for c in call_log if c[0] == "transact"]
        assert transactions == [
            (
                "transact",
                "TokenFactory",
                "createToken",
                ("Test Token", "TEST", 1_000_000 * 10**18, True, "ipfs://test"),
                10**17,
            )
        ]
        assert ("call", "TokenRegistry", "tokenInfo", (TOKEN,)) in call_log

    def test_uses_supplied_addresses(self, deployer, deployed_pair, call_log):
        """Test that the contracts are attached at the addresses passed in."""
        run_smoke_test(deployer, FACTORY, REGISTRY)

        attached = [c for c in call_log if c[0] == "at"]
        assert ("at", "TokenFactory", FACTORY) in attached
        assert ("at", "TokenRegistry", REGISTRY) in attached

    def test_custom_params(self, deployer, deployed_pair, call_log):
        """Test that custom parameters reach createToken."""
        params = SmokeTestParams(name="Other", symbol="OTH", total_supply=5, is_clanker=False, value=1)
        run_smoke_test(deployer, FACTORY, REGISTRY, params)

        transaction = next(c for c in call_log if c[0] == "transact")
        assert transaction[3] == ("Other", "OTH", 5, False, "ipfs://test")
        assert transaction[4] == 1

    def test_missing_event_raises(self, deployer, deployed_pair):
        """Test that a receipt without TokenCreated fails the smoke test."""
        factory, _ = deployed_pair
        factory.transaction_events = {}

        with pytest.raises(EventNotFoundError):
            run_smoke_test(deployer, FACTORY, REGISTRY)

    def test_missing_registry_record_raises(self, deployer, deployed_pair):
        """Test that an empty registry record fails the smoke test."""
        _, registry = deployed_pair
        registry.call_results = {"tokenInfo": ("", "", ZERO_ADDRESS, False, 0, "", False)}

        with pytest.raises(TokenNotRegisteredError) as exc_info:
            run_smoke_test(deployer, FACTORY, REGISTRY)

        assert TOKEN in str(exc_info.value)


class TestParseTokenInfo:
    """Test the parse_token_info function."""

    def test_parses_record(self):
        """Test converting a tokenInfo tuple."""
        info = parse_token_info(registry_record(verified=True))

        assert info.creator == CREATOR
        assert info.is_clanker is True
        assert info.verified is True
        assert info.created_at == datetime.fromtimestamp(CREATED_AT, tz=timezone.utc)

    def test_as_dict_uses_contract_field_names(self):
        """Test the printed record keys."""
        record = parse_token_info(registry_record()).as_dict()

        assert set(record) == {
            "name",
            "symbol",
            "creator",
            "isClanker",
            "createdAt",
            "metadataURI",
            "verified",
        }
        assert record["createdAt"] == "2023-11-14T22:13:20+00:00"

    def test_empty_record_raises(self):
        """Test that zeroed records are rejected."""
        with pytest.raises(TokenNotRegisteredError):
            parse_token_info(("", "", ZERO_ADDRESS, False, 0, "", False))
