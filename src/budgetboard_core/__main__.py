"""
CLI entry point for the Budget Board MCP server.
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from budgetboard_core.core.exceptions import BudgetBoardError
from budgetboard_core.core.ledger import LedgerSnapshot
from budgetboard_core.core.widgets import find_cyclic_lines, parse_net_worth_configuration
from budgetboard_core.server import run_server


def check_ledger(ledger_path: Optional[Path]) -> int:
    """
    Load every record of a ledger snapshot and print a summary.

    Args:
        ledger_path: Path to the snapshot, or None for the default

    Returns:
        Process exit code: 0 when the snapshot loads, 1 otherwise
    """
    ledger = LedgerSnapshot(ledger_path)
    try:
        counts = {
            "categories": len(ledger.get_categories()),
            "transactions": len(ledger.get_transactions()),
            "budgets": len(ledger.get_budgets()),
            "accounts": len(ledger.get_accounts()),
            "assets": len(ledger.get_assets()),
            "rules": len(ledger.get_rules()),
        }
        raw_configuration = ledger.get_net_worth_configuration()
    except BudgetBoardError as e:
        print(f"Ledger check failed: {e}", file=sys.stderr)
        return 1

    configuration = parse_net_worth_configuration(raw_configuration)
    if configuration is None and raw_configuration:
        print("Stored net worth configuration is unreadable; the default is used", file=sys.stderr)

    report = {
        "ledger_path": str(ledger.ledger_path),
        **counts,
        "custom_net_worth_configuration": configuration is not None,
        "cyclic_lines": find_cyclic_lines(configuration) if configuration is not None else [],
    }
    print(json.dumps(report, indent=2))
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Budget Board MCP Server - Expose budget and net worth rollups through MCP"
    )
    parser.add_argument(
        "--ledger-path",
        type=Path,
        help="Path to ledger snapshot JSON (default: ~/.budgetboard/ledger.json)",
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Validate the ledger snapshot, print a summary and exit",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args(argv)

    ledger_path = args.ledger_path.expanduser() if args.ledger_path else None
    if ledger_path is not None and ledger_path.is_dir():
        parser.error(f"--ledger-path must be a JSON file, not a directory: {ledger_path}")

    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,  # MCP uses stdout for protocol, so log to stderr
    )

    if args.check:
        sys.exit(check_ledger(ledger_path))

    ledger = LedgerSnapshot(ledger_path)
    if not ledger.is_available():
        logging.warning(
            f"Ledger snapshot not found at {ledger.ledger_path}; "
            "tools will report it as unavailable until it exists"
        )

    try:
        asyncio.run(run_server(ledger_path=ledger_path))
    except KeyboardInterrupt:
        logging.info("Server stopped by user")
        sys.exit(0)
    except Exception as e:
        logging.exception(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
