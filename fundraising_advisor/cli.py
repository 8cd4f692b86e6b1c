"""
Fundraising Advisor CLI.

Usage:
    # Recommend strategies for a questionnaire answer file (JSON or YAML)
    fundraising-advisor recommend answers.json

    # Use a single algorithm and return the top 3
    fundraising-advisor recommend answers.yaml --mode rule --top 3

    # Machine-readable output, including the audit trail
    fundraising-advisor recommend answers.json --json --audit --output run.json

    # Browse the strategy catalog
    fundraising-advisor strategies

    # Strategies similar to CSR partnerships
    fundraising-advisor similar csr --threshold 0.6

    # Run a generated scenario
    fundraising-advisor demo --seed 42
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fundraising_advisor.config import load_settings
from fundraising_advisor.engine import RecommendationEngine, RecommendationRun
from fundraising_advisor.schemas.enums import RecommendationMode, RiskLevel
from fundraising_advisor.scenarios import ScenarioGenerator
from fundraising_advisor.scorers.similarity import find_similar_strategies
from fundraising_advisor.utils.logger import configure_global_logging

console = Console()

RISK_COLORS = {
    RiskLevel.OPTIMAL: "green",
    RiskLevel.ACCEPTABLE: "yellow",
    RiskLevel.CAUTIOUS: "red",
}


def load_answers(path: Path) -> dict[str, Any]:
    """Read an answer set from a JSON or YAML file.

    Raises:
        FileNotFoundError: The file does not exist
        ValueError: The file does not parse or is not a mapping
    """
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    text = path.read_text()
    try:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Could not parse {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"{path} must contain a mapping of question id to answer")
    return data


def _error(message: str) -> int:
    console.print(f"[red]Error:[/red] {message}")
    return 1


def _render_run(run: RecommendationRun, title: str):
    profile = run.profile
    summary = (
        f"Maturity: {profile.maturity.value}\n"
        f"Size: {profile.size.value}\n"
        f"Digital capacity: {profile.digital_capacity}/8\n"
        f"Volunteer capacity: {profile.volunteer_capacity}/10\n"
        f"Foreign funding: {profile.foreign_funding.tier.value}"
    )
    console.print(Panel(summary, title=title, border_style="blue"))

    if not run.recommendations:
        console.print("[yellow]No strategies could be recommended for this profile[/yellow]")
        return

    table = Table(title=f"Recommendations ({run.mode.value})")
    table.add_column("#", justify="right")
    table.add_column("Strategy", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Confidence")
    table.add_column("Risk")
    table.add_column("Algorithms")

    for rank, record in enumerate(run.recommendations, start=1):
        color = RISK_COLORS[record.risk_profile.level]
        if record.consensus is not None:
            algorithms = ", ".join(t.value for t in record.consensus.algorithm_types)
        else:
            algorithms = record.algorithm_type.value if record.algorithm_type else ""
        table.add_row(
            str(rank),
            record.name,
            str(record.score),
            f"{record.confidence_level.label} ({record.confidence:.0%})",
            f"[{color}]{record.risk_profile.level.value}[/{color}]",
            algorithms,
        )

    console.print(table)

    top = run.recommendations[0]
    if top.reasons:
        console.print(f"\n[bold]Why {top.name} works for you:[/bold]")
        for reason in top.reasons:
            console.print(f"  - {reason}")


def _emit_run(run: RecommendationRun, args: argparse.Namespace, title: str) -> int:
    payload = run.to_dict()
    if not args.audit:
        payload.pop("audit")

    if args.output:
        Path(args.output).write_text(json.dumps(payload, indent=2))
        console.print(f"[green]Wrote {len(run.recommendations)} recommendations to {args.output}[/green]")

    if args.json:
        print(json.dumps(payload, indent=2))
    else:
        _render_run(run, title)
        if args.audit:
            summary = run.audit.get_summary()
            console.print(
                f"\nAudit: {summary['excluded']} excluded, {summary['matched']} matched, "
                f"{summary['filled']} filled, {summary['merged']} merged"
            )
    return 0


def cmd_recommend(args: argparse.Namespace) -> int:
    """Recommend strategies for an answer file."""
    try:
        answers = load_answers(Path(args.answers))
        engine = RecommendationEngine(load_settings())
        run = engine.run(answers, mode=args.mode, top_n=args.top, current_year=args.year)
    except (FileNotFoundError, ValueError) as e:
        return _error(str(e))

    return _emit_run(run, args, title=str(answers.get("ngoName") or args.answers))


def cmd_strategies(args: argparse.Namespace) -> int:
    """List the strategy catalog grouped by donor category."""
    try:
        engine = RecommendationEngine(load_settings())
    except (FileNotFoundError, ValueError) as e:
        return _error(str(e))

    table = Table(title=f"Strategy Catalog ({len(engine.catalog)} strategies)")
    table.add_column("Donor Category")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Scale", justify="right")
    table.add_column("Risk", justify="right")

    for category, strategies in engine.catalog.by_donor_category().items():
        for strategy in strategies:
            table.add_row(
                category.label,
                strategy.id,
                strategy.name,
                str(strategy.criterion("fundingScale")),
                str(strategy.criterion("executionRisk")),
            )

    console.print(table)
    return 0


def cmd_similar(args: argparse.Namespace) -> int:
    """Show catalog neighbours of a strategy."""
    try:
        engine = RecommendationEngine(load_settings())
    except (FileNotFoundError, ValueError) as e:
        return _error(str(e))

    if args.strategy_id not in engine.catalog:
        return _error(f"Unknown strategy id: {args.strategy_id}")

    matches = find_similar_strategies(args.strategy_id, threshold=args.threshold, catalog=engine.catalog)
    if not matches:
        console.print(f"No strategies at or above {args.threshold:.2f} similarity to {args.strategy_id}")
        return 0

    table = Table(title=f"Similar to {engine.catalog[args.strategy_id].name}")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Similarity", justify="right")
    for strategy, score in matches:
        table.add_row(strategy.id, strategy.name, f"{score:.2f}")
    console.print(table)
    return 0


def cmd_demo(args: argparse.Namespace) -> int:
    """Run the engine on a generated scenario."""
    generator = ScenarioGenerator(seed=args.seed)
    try:
        if args.scenario:
            name, answers = args.scenario, generator.scenario(args.scenario)
        else:
            name, answers = generator.random_scenario()
        engine = RecommendationEngine(load_settings())
        run = engine.run(answers, mode=args.mode, top_n=args.top, current_year=args.year)
    except (KeyError, FileNotFoundError, ValueError) as e:
        return _error(str(e).strip("'\""))

    return _emit_run(run, args, title=f"Scenario: {name}")


def _add_run_options(parser: argparse.ArgumentParser):
    parser.add_argument(
        "--mode",
        choices=[m.value for m in RecommendationMode],
        default=RecommendationMode.COMBINED.value,
        help="Algorithm to use (default: combined)",
    )
    parser.add_argument("--top", type=int, help="Number of recommendations (default: settings top_n)")
    parser.add_argument("--year", type=int, help="Reference year for maturity (default: current year)")
    parser.add_argument("--json", action="store_true", help="Print JSON instead of tables")
    parser.add_argument("--output", help="Also write the JSON result to this path")
    parser.add_argument("--audit", action="store_true", help="Include the decision audit trail")


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Fundraising strategy recommendations for NGOs",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    recommend_parser = subparsers.add_parser("recommend", help="Recommend strategies for an answer file")
    recommend_parser.add_argument("answers", help="Path to a JSON or YAML answer file")
    _add_run_options(recommend_parser)

    subparsers.add_parser("strategies", help="List the strategy catalog")

    similar_parser = subparsers.add_parser("similar", help="Find strategies similar to one strategy")
    similar_parser.add_argument("strategy_id", help="Strategy id (e.g. csr)")
    similar_parser.add_argument("--threshold", type=float, default=0.7, help="Minimum similarity (default: 0.7)")

    demo_parser = subparsers.add_parser("demo", help="Run a generated scenario")
    demo_parser.add_argument("--seed", type=int, help="Random seed for reproducible scenarios")
    demo_parser.add_argument("--scenario", help="Named scenario (default: random)")
    _add_run_options(demo_parser)

    args = parser.parse_args(argv)
    configure_global_logging(args.log_level, context=args.command)

    if args.command == "recommend":
        return cmd_recommend(args)
    elif args.command == "strategies":
        return cmd_strategies(args)
    elif args.command == "similar":
        return cmd_similar(args)
    elif args.command == "demo":
        return cmd_demo(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
