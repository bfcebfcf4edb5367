import argparse
import asyncio
import logging
import sys

from src.config.pipeline import Edition, build_pipeline_config
from src.config.settings import Settings, settings
from src.modules.aggregation_pipeline.service import AggregationPipelineService
from src.modules.summarizer.diagnostics import check_provider, inspect_api_key
from src.modules.summarizer.providers import PROVIDERS, build_provider

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="limat-frontier",
        description="Aggregate automotive materials news into data/news.json.",
    )
    sub = parser.add_subparsers(dest="command")

    run = sub.add_parser("run", help="run the pipeline once (default)")
    run.add_argument("--edition", choices=[e.value for e in Edition], default=None)
    run.add_argument("--output", default=None, help="snapshot path (default: data/news.json)")

    schedule = sub.add_parser("schedule", help="run now, then on the configured cron schedule")
    schedule.add_argument("--edition", choices=[e.value for e in Edition], default=None)
    schedule.add_argument("--cron", default=None, help="crontab expression")

    check = sub.add_parser("check-provider", help="verify a summarization API key")
    check.add_argument("--provider", choices=sorted(PROVIDERS), default=None)

    return parser


async def _run(args: argparse.Namespace, cfg: Settings) -> int:
    config = build_pipeline_config(cfg, edition=args.edition, output_path=args.output)
    snapshot = await AggregationPipelineService(config).run_once()
    logger.info("Done: %d articles written to %s", snapshot.total_articles, config.output_path)
    return 0


async def _schedule(args: argparse.Namespace, cfg: Settings) -> int:
    config = build_pipeline_config(cfg, edition=args.edition)
    service = AggregationPipelineService(config)
    await service.start(args.cron or cfg.schedule_cron)
    try:
        await asyncio.Event().wait()
    finally:
        await service.stop()
    return 0


async def _check_provider(args: argparse.Namespace, cfg: Settings) -> int:
    name = args.provider or cfg.ai_provider.strip().lower()
    if name not in PROVIDERS:
        logger.error(
            "Unknown summarization provider '%s' (expected one of: %s)",
            name, ", ".join(sorted(PROVIDERS)),
        )
        return 1
    raw_key = getattr(cfg, f"{name}_api_key", None)
    problems = inspect_api_key(raw_key, PROVIDERS[name].key_prefix)
    for problem in problems:
        logger.warning("%s API key: %s", name, problem)

    provider = build_provider(name, raw_key)
    if provider is None:
        logger.error("%s API key is not configured", name)
        return 1

    ok, failed = await check_provider(provider)
    logger.info("%s check finished: %d ok, %d failed", name, ok, failed)
    return 0 if failed == 0 else 1


COMMANDS = {
    "run": _run,
    "schedule": _schedule,
    "check-provider": _check_provider,
}


def _with_default_command(argv: list[str]) -> list[str]:
    """Route option-only invocations such as ``--edition recency`` to ``run``."""
    if argv and (argv[0] in COMMANDS or argv[0] in ("-h", "--help")):
        return list(argv)
    return ["run", *argv]


def main(argv: list[str] | None = None, cfg: Settings = settings) -> int:
    args = build_parser().parse_args(_with_default_command(sys.argv[1:] if argv is None else argv))

    logging.basicConfig(
        level=cfg.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return asyncio.run(COMMANDS[args.command](args, cfg))
    except KeyboardInterrupt:
        return 130
    except Exception:
        logger.exception("Command '%s' failed", args.command)
        return 1


if __name__ == "__main__":
    sys.exit(main())
