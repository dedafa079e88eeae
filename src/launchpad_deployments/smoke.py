"""Post-deployment smoke test: create a token through the factory and read it back."""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Sequence

from .constants import TOKEN_FACTORY, TOKEN_REGISTRY, ZERO_ADDRESS
from .exceptions import EventNotFoundError, TokenNotRegisteredError
from .interfaces import Deployer
from .types import TokenInfo

logger = logging.getLogger(__name__)

WEI_PER_ETHER = 10**18


@dataclass(frozen=True)
class SmokeTestParams:
    """Arguments for TokenFactory.createToken."""

    name: str = "Test Token"
    symbol: str = "TEST"
    total_supply: int = 1_000_000 * 10**18  # 1 million tokens, 18 decimals
    is_clanker: bool = True
    metadata_uri: str = "ipfs://test"
    value: int = WEI_PER_ETHER // 10  # 0.1 ETH of liquidity


@dataclass(frozen=True)
class SmokeTestReport:
    token_address: str
    transaction_hash: str
    info: TokenInfo


def parse_token_info(record: Sequence[Any]) -> TokenInfo:
    """
    Convert a TokenRegistry.tokenInfo return value into TokenInfo.

    Args:
        record: (name, symbol, creator, isClanker, createdAt, metadataURI, verified)

    Raises:
        TokenNotRegisteredError: If the record is empty (unknown token)
    """
    name, symbol, creator, is_clanker, created_at, metadata_uri, verified = record

    # Solidity mappings return zeroed structs for missing keys
    if not name and (not creator or int(creator, 16) == int(ZERO_ADDRESS, 16)):
        raise TokenNotRegisteredError("TokenRegistry returned an empty record")

    return TokenInfo(
        name=name,
        symbol=symbol,
        creator=creator,
        is_clanker=bool(is_clanker),
        created_at=datetime.fromtimestamp(int(created_at), tz=timezone.utc),
        metadata_uri=metadata_uri,
        verified=bool(verified),
    )


def run_smoke_test(
    deployer: Deployer,
    factory_address: str,
    registry_address: str,
    params: SmokeTestParams = SmokeTestParams(),
) -> SmokeTestReport:
    """
    Create a token through an already deployed and linked pair and check the registry saw it.

    Args:
        deployer: Sends the transaction and performs the registry lookup
        factory_address: Deployed TokenFactory address
        registry_address: Deployed TokenRegistry address
        params: Token creation arguments and payment

    Returns:
        SmokeTestReport with the new token address and its registry record

    Raises:
        EventNotFoundError: If the receipt carries no TokenCreated event
        TokenNotRegisteredError: If the registry has no record for the new token
    """
    logger.info("Testing with account: %s", deployer.signer())

    factory = deployer.at(TOKEN_FACTORY, factory_address)
    registry = deployer.at(TOKEN_REGISTRY, registry_address)

    logger.info("Creating a test token...")
    receipt = factory.transact(
        "createToken",
        params.name,
        params.symbol,
        params.total_supply,
        params.is_clanker,
        params.metadata_uri,
        value=params.value,
    )
    logger.info("Transaction hash: %s", receipt.transaction_hash)

    created = receipt.events("TokenCreated")
    if not created:
        raise EventNotFoundError(
            f"No TokenCreated event in transaction {receipt.transaction_hash}"
        )
    token_address = created[0]["tokenAddress"]
    logger.info("Token address: %s", token_address)

    try:
        info = parse_token_info(registry.call("tokenInfo", token_address))
    except TokenNotRegisteredError as e:
        raise TokenNotRegisteredError(
            f"TokenRegistry at {registry_address} has no record for {token_address}"
        ) from e

    logger.info("Token info: %s", info.as_dict())
    return SmokeTestReport(
        token_address=token_address,
        transaction_hash=receipt.transaction_hash,
        info=info,
    )
