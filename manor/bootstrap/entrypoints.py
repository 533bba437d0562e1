"""
bootstrap/entrypoints.py - Application entry points v1.0

Provides the CLI and API server entry points.
"""

from __future__ import annotations
from typing import Any, Dict, List
from pathlib import Path
import argparse
import json
import logging
import sys

from pydantic import ValidationError

from ..errors import ManorError
from .config import ManorConfig, load_config

logger = logging.getLogger("bootstrap.entrypoints")

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_INPUT_ERROR = 2


def setup_logging(level: str = "INFO", log_file: str = None, json_format: bool = False) -> None:
    """
    Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path
        json_format: Use JSON format for logs
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if json_format:

        class JSONFormatter(logging.Formatter):
            def format(self, record):
                return json.dumps({
                    "timestamp": self.formatTime(record),
                    "level": record.levelname,
                    "logger": record.name,
                    "message": record.getMessage(),
                })

        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    # Console handler on stderr; stdout is reserved for command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(log_level)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(log_level)
        root_logger.addHandler(file_handler)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


def _read_json(path: str) -> Dict[str, Any]:
    with open(Path(path)) as f:
        return json.load(f)


def _emit(payload: Dict[str, Any], as_json: bool, text: List[str]) -> None:
    if as_json:
        print(json.dumps(payload, indent=2, default=str))
    else:
        print("\n".join(text))


# =============================================================================
# COMMANDS
# =============================================================================

def _cmd_preset(parsed, config: ManorConfig) -> int:
    from ..program.presets import get_preset, tier_for_area

    tier = parsed.tier or tier_for_area(parsed.sf)
    preset = get_preset(tier)
    lines = [f"{preset.label} ({preset.tier}): {len(preset.spaces)} spaces, "
             f"{preset.total_sf:,} SF"]
    for space in preset.spaces:
        lines.append(f"  {space.code:<10} {space.name:<32} L{space.level}  {space.target_sf:>6,} SF")
    _emit(preset.to_dict(), parsed.json, lines)
    return EXIT_OK


def _cmd_validate(parsed, config: ManorConfig) -> int:
    from ..program.enums import GateStatus
    from ..validation.engine import ValidationInput

    request = ValidationInput.from_dict(_read_json(parsed.file))
    result = config.validation.create_engine().validate(request)

    lines = [f"Gate: {result.gate.value.upper()}  overall={result.overall_score}  "
             f"mode={result.mode.value}"]
    for module in result.module_scores:
        mark = "ok" if module.passed else "--"
        lines.append(f"  [{mark}] {module.module_id} {module.name:<26} {module.score:>3}")
    for flag in result.red_flags:
        lines.append(f"  {flag.severity.value.upper():<8} {flag.flag_id}: {flag.description}")
    for bridge in result.missing_bridges:
        lines.append(f"  BRIDGE   {bridge.name} ({bridge.presence.value}): {bridge.trigger}")
    _emit(result.to_dict(), parsed.json, lines)
    return EXIT_FAILED if result.gate == GateStatus.FAIL else EXIT_OK


def _cmd_recommend(parsed, config: ManorConfig) -> int:
    from ..advisor.recommender import (
        choices_from_recommendations,
        evaluate_personalization,
        recommend_adjacencies,
    )
    from ..intake.mapping import map_intake_to_validation
    from ..intake.schema import IntakeResponse

    intake = IntakeResponse.from_dict(_read_json(parsed.file))
    context = map_intake_to_validation(intake)
    tier = parsed.tier or context.recommended_tier
    recommendations = recommend_adjacencies(intake, tier)
    summary = evaluate_personalization(choices_from_recommendations(recommendations))

    lines = [f"Tier {tier} (complexity {context.complexity}, "
             f"intake {context.confidence}% complete)"]
    for rec in recommendations:
        lines.append(f"  {rec.decision.title:<34} -> {rec.recommended_option.label} "
                     f"[{rec.confidence.value}]")
        lines.append(f"      {rec.reasoning}")
    lines.append(f"SF impact {summary.total_sf_impact:+d}, {summary.warning_count} warnings, "
                 f"bridges: {', '.join(b.value for b in summary.required_bridges) or 'none'}")
    for warning in context.warnings:
        lines.append(f"  ! {warning}")

    payload = {
        "tier": tier,
        "context": context.to_dict(),
        "recommendations": [r.to_dict() for r in recommendations],
        "personalization": summary.to_dict(),
    }
    _emit(payload, parsed.json, lines)
    return EXIT_OK


def _cmd_assess(parsed, config: ManorConfig) -> int:
    from ..site.engine import SiteScores, TrafficLight, assess_site, compare_sites

    data = _read_json(parsed.file)
    engine = config.site.create_engine()

    if "sites" in data:
        rankings = compare_sites([SiteScores.from_dict(s) for s in data["sites"]], engine)
        lines = []
        for r in rankings:
            a = r.assessment
            lines.append(f"{r.rank}. {r.site.name or r.site.site_id:<24} "
                         f"{(a.verdict.value if a.verdict else 'n/a').upper():<6} "
                         f"{a.display_score}  deal-breakers={len(a.triggered_deal_breakers)}")
        _emit({"rankings": [r.to_dict() for r in rankings]}, parsed.json, lines)
        top = rankings[0].assessment.verdict if rankings else None
        return EXIT_FAILED if top == TrafficLight.RED else EXIT_OK

    assessment = assess_site(SiteScores.from_dict(data), engine)
    lines = [f"Verdict: {(assessment.verdict.value if assessment.verdict else 'n/a').upper()}  "
             f"overall={assessment.display_score}  complete={assessment.completion_pct}%"]
    for category_id, score in assessment.category_scores.items():
        light = assessment.category_lights[category_id]
        shown = f"{score:.2f}" if score is not None else "-"
        lines.append(f"  {category_id:<22} {shown:>5}  {light.value if light else ''}")
    for db in assessment.triggered_deal_breakers:
        lines.append(f"  {db.db_id}: {db.name}")
    lines.append(assessment.recommendation)
    _emit(assessment.to_dict(), parsed.json, lines)
    return EXIT_FAILED if assessment.verdict == TrafficLight.RED else EXIT_OK


def _cmd_serve(parsed, config: ManorConfig) -> int:
    if parsed.port:
        config.api.port = parsed.port
    if parsed.host:
        config.api.host = parsed.host
    run_api(config)
    return EXIT_OK


_COMMANDS = {
    "preset": _cmd_preset,
    "validate": _cmd_validate,
    "recommend": _cmd_recommend,
    "assess": _cmd_assess,
    "serve": _cmd_serve,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="MANOR Residential Program Advisor CLI",
        prog="manor",
    )

    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
        default=None,
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="WARNING",
        help="Log level",
    )
    parser.add_argument(
        "--log-file",
        help="Log file path",
        default=None,
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output in JSON format",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    preset = sub.add_parser("preset", help="Show a benchmark program")
    preset.add_argument("tier", nargs="?", default=None, help="Tier (5k, 10k, 15k, 20k)")
    preset.add_argument("--sf", type=float, default=10000, help="Pick the tier for this area")

    validate = sub.add_parser("validate", help="Validate a program JSON file")
    validate.add_argument("file", help="Program payload (program or tier, context, plan)")

    recommend = sub.add_parser("recommend", help="Recommend adjacencies from an intake file")
    recommend.add_argument("file", help="Intake response JSON")
    recommend.add_argument("--tier", default=None, help="Override the recommended tier")

    assess = sub.add_parser("assess", help="Assess one site or compare several")
    assess.add_argument("file", help="Site scores JSON ({scores} or {sites: [...]})")

    serve = sub.add_parser("serve", help="Start the API server")
    serve.add_argument("-H", "--host", default=None, help="API host")
    serve.add_argument("-p", "--port", type=int, default=None, help="API port")

    return parser


def cli_main(args: list = None) -> int:
    """
    CLI entry point.

    Args:
        args: Command line arguments (defaults to sys.argv)

    Returns:
        Exit code: 0 ok, 1 failing gate or RED verdict, 2 bad input
    """
    parsed = build_parser().parse_args(args)

    log_level = "DEBUG" if parsed.verbose else parsed.log_level
    setup_logging(level=log_level, log_file=parsed.log_file)

    try:
        config = load_config(parsed.config)
        return _COMMANDS[parsed.command](parsed, config)

    except (ManorError, ValidationError) as e:
        logger.error(f"Invalid input: {e}")
        if parsed.json and isinstance(e, ManorError):
            print(json.dumps({"error": e.to_dict()}, indent=2, default=str))
        return EXIT_INPUT_ERROR
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Could not read input: {e}")
        return EXIT_INPUT_ERROR
    except KeyboardInterrupt:
        print("\nInterrupted")
        return 130
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        return EXIT_FAILED


def run_api(config: ManorConfig) -> None:
    """Serve the API with uvicorn."""
    import uvicorn

    from ..api.app import create_app

    app = create_app(config)
    logger.info(f"Starting API on {config.api.host}:{config.api.port}")
    uvicorn.run(
        app,
        host=config.api.host,
        port=config.api.port,
        log_level=config.logging.level.lower(),
    )


def api_main(args: list = None) -> None:
    """
    API server entry point.

    Args:
        args: Command line arguments
    """
    parser = argparse.ArgumentParser(
        description="MANOR API Server",
        prog="manor-api",
    )

    parser.add_argument(
        "-c", "--config",
        help="Path to configuration file",
        default=None,
    )
    parser.add_argument(
        "-p", "--port",
        type=int,
        help="API port",
        default=None,
    )
    parser.add_argument(
        "-H", "--host",
        help="API host",
        default=None,
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Log level",
    )

    parsed = parser.parse_args(args)

    setup_logging(level=parsed.log_level)

    try:
        config = load_config(parsed.config)

        # Override config with CLI args
        if parsed.port:
            config.api.port = parsed.port
        if parsed.host:
            config.api.host = parsed.host

        run_api(config)

    except KeyboardInterrupt:
        print("\nShutting down...")
    except Exception as e:
        logger.exception(f"Fatal error: {e}")
        sys.exit(1)


def main():
    """Main entry point for the package."""
    if len(sys.argv) > 1 and sys.argv[1] == "api":
        api_main(sys.argv[2:])
    else:
        sys.exit(cli_main(sys.argv[1:]))


if __name__ == "__main__":
    main()
