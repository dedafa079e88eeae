"""Command line interface: `launchpad-deploy deploy` and `launchpad-deploy smoke-test`."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .chain import Web3Deployer
from .config import load_settings
from .constants import NETWORK_CONFIG, TOKEN_FACTORY, TOKEN_REGISTRY
from .pipeline import DeploymentPipeline
from .smoke import run_smoke_test
from .verification import EtherscanVerifier

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the deployment CLI."""
    parser = argparse.ArgumentParser(
        prog="launchpad-deploy",
        description="Deploy, link and verify TokenRegistry and TokenFactory",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    common.add_argument(
        "--network",
        required=True,
        choices=sorted(NETWORK_CONFIG),
        help="Target network",
    )
    common.add_argument(
        "--artifacts",
        type=Path,
        help="Hardhat artifacts directory (defaults to $ARTIFACTS_DIR or ./artifacts)",
    )

    subparsers.add_parser(
        "deploy",
        parents=[common],
        help="Deploy both contracts, link them and verify on non-local networks",
    )

    smoke_parser = subparsers.add_parser(
        "smoke-test",
        parents=[common],
        help="Create a test token through a deployed pair",
    )
    smoke_parser.add_argument("--factory", required=True, help="TokenFactory address")
    smoke_parser.add_argument("--registry", required=True, help="TokenRegistry address")

    return parser


def explorer_link(browser_url: str, address: str) -> str:
    return f"{browser_url.rstrip('/')}/address/{address}"


def cmd_deploy(args: argparse.Namespace) -> int:
    settings = load_settings(args.network, artifacts_dir=args.artifacts)
    pipeline = DeploymentPipeline(
        Web3Deployer.from_settings(settings),
        EtherscanVerifier.from_settings(settings),
        settings.network,
        settings.uniswap_v3_factory,
        settings.weth,
    )
    outcome = pipeline.run()

    if not outcome.succeeded:
        logger.error("Deployment failed: %s", outcome.error)
        print(json.dumps(outcome.result.as_dict(), indent=2), file=sys.stderr)
        return outcome.exit_code

    if settings.explorer_browser_url:
        for name, address in [
            (TOKEN_REGISTRY, outcome.result.token_registry),
            (TOKEN_FACTORY, outcome.result.token_factory),
        ]:
            logger.info(
                "%s (%s): %s",
                name,
                outcome.verification[name].value,
                explorer_link(settings.explorer_browser_url, address),
            )

    print("Contract addresses:")
    print(json.dumps(outcome.result.as_dict(), indent=2))
    return outcome.exit_code


def cmd_smoke_test(args: argparse.Namespace) -> int:
    settings = load_settings(args.network, artifacts_dir=args.artifacts)
    report = run_smoke_test(Web3Deployer.from_settings(settings), args.factory, args.registry)
    print(json.dumps({"tokenAddress": report.token_address, **report.info.as_dict()}, indent=2))
    logger.info("Test completed successfully!")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    commands = {
        "deploy": cmd_deploy,
        "smoke-test": cmd_smoke_test,
    }

    try:
        return commands[args.command](args)
    except Exception as e:
        logger.error("%s failed: %s", args.command, e, exc_info=args.verbose)
        return 1


if __name__ == "__main__":
    sys.exit(main())
