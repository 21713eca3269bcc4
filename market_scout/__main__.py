"""Main entry point for Market Scout."""

import argparse
import json
import sys
from pathlib import Path

from loguru import logger

from .scoring import (
    DegenerateInputError,
    MarketReportBuilder,
    MarketSignals,
    OpportunityFinder,
    ProfitabilityCalculator,
)
from .utils.config import get_config_manager
from .utils.logger import setup_logging


def load_signals(path: str) -> MarketSignals:
    """Load market signals from a JSON file ("-" reads stdin).

    Args:
        path: Path to the JSON document

    Returns:
        MarketSignals instance
    """
    if path == "-":
        payload = json.load(sys.stdin)
    else:
        with open(path, "r", encoding="utf-8") as f:
            payload = json.load(f)
    return MarketSignals.model_validate(payload)


def emit(result, indent: int):
    """Print a result model as camelCase JSON."""
    print(json.dumps(result.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=indent))


def run_report(args, config: dict):
    """Build and print a full market report."""
    signals = load_signals(args.input)
    report = MarketReportBuilder(config).build(signals, args.lang)
    emit(report, args.indent)


def run_opportunities(args, config: dict):
    """Run the opportunity classifier only."""
    signals = load_signals(args.input)
    result = OpportunityFinder(config).find(
        signals.demand_score,
        signals.competitor_strength,
        signals.profit_margin,
        signals.competitors,
    )
    emit(result, args.indent)


def run_profitability(args, config: dict):
    """Run the profitability estimator only."""
    signals = load_signals(args.input)
    result = ProfitabilityCalculator(config).calculate(
        signals.market_stats,
        signals.competitors,
        signals.demand_score,
        args.lang or config["report"]["default_language"],
    )
    emit(result, args.indent)


COMMANDS = {
    "report": run_report,
    "opportunities": run_opportunities,
    "profitability": run_profitability,
}


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Market Scout")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    for name, help_text in [
        ("report", "Build a full market report"),
        ("opportunities", "Find market opportunities"),
        ("profitability", "Estimate profitability"),
    ]:
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("input", help="Market signals JSON file, or - for stdin")
        sub.add_argument("--lang", choices=["ar", "en"], default=None, help="Report language")
        sub.add_argument("--indent", type=int, default=2, help="JSON indentation")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = get_config_manager(args.config).config
    setup_logging(args.log_level)

    try:
        COMMANDS[args.command](args, config.model_dump())
    except DegenerateInputError as e:
        logger.error(f"Cannot build {args.command}: {e}")
        sys.exit(2)
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
    except Exception as e:
        logger.exception(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
