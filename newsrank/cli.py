"""
Command-line interface for newsrank.
"""
import sys
import json
import argparse
import asyncio
import logging
from datetime import datetime
from typing import Any, List, Optional

from dotenv import load_dotenv

from newsrank.config import Config, load_config
from newsrank.core.article import Article, parse_timestamp
from newsrank.core.classifier import CategoryClassifier
from newsrank.core.hero import validate_hero
from newsrank.core.homepage import assemble_homepage, quality_metrics
from newsrank.core.lexicon import load_lexicon
from newsrank.core.placement import Placement, rank_for_placement
from newsrank.core.processor import BatchProcessor
from newsrank.fetchers.local import load_articles
from newsrank.formatters.markdown import MarkdownFormatter

logger = logging.getLogger(__name__)


def setup_logging(config: Config, verbose: bool = False) -> None:
    """
    Configure root logging from the ``logging`` config section.
    """
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    log_file = config.get('logging.file')
    if log_file:
        handlers.append(logging.FileHandler(log_file))

    level = logging.DEBUG if verbose else config.get('logging.level', 'INFO')
    logging.basicConfig(
        level=level,
        format=config.get('logging.format'),
        handlers=handlers,
        force=True,
    )


def parse_now(value: str) -> datetime:
    parsed = parse_timestamp(value)
    if parsed is None:
        raise argparse.ArgumentTypeError(f"Invalid timestamp: {value!r}")
    return parsed


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("articles", help="Article file (.json, .jsonl, .yaml)")
    common.add_argument("--config", help="Path to a YAML or JSON config file")
    common.add_argument("--format", choices=["json", "markdown"], help="Output format")
    common.add_argument("--output", help="Write the report to this file instead of stdout")
    common.add_argument("--now", type=parse_now, help="Reference time (ISO-8601), defaults to now")
    common.add_argument("--verbose", action="store_true", help="Enable debug logging")

    parser = argparse.ArgumentParser(
        prog="newsrank",
        description="Classify news articles and rank them for homepage placements",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("classify", parents=[common], help="Classify every article")

    rank = commands.add_parser("rank", parents=[common], help="Rank articles for a placement")
    rank.add_argument("--placement", required=True, choices=[p.value for p in Placement])
    rank.add_argument("--limit", type=int, help="Maximum number of articles to return")

    hero = commands.add_parser("validate-hero", parents=[common],
                               help="Validate the hero placement winner")
    hero.add_argument("--id", dest="article_id", help="Validate this article instead")

    commands.add_parser("homepage", parents=[common], help="Assemble the whole homepage")

    return parser.parse_args(argv)


def render(report: Any, markdown: str, output_format: str) -> str:
    if output_format == "markdown":
        return markdown
    return json.dumps(report, indent=2) + "\n"


async def run_command(args: argparse.Namespace, config: Config) -> str:
    """
    Execute one subcommand and return the rendered report.
    """
    now = args.now or datetime.now().astimezone()
    output_format = args.format or config.get('output.format', 'json')
    formatter = MarkdownFormatter(today=now)
    articles: List[Article] = load_articles(args.articles, now=now)

    if args.command == "classify":
        processor = BatchProcessor(
            classifier=CategoryClassifier(load_lexicon(config)),
            max_concurrent=config.get('processing.max_concurrent', 8),
            show_progress=config.get('processing.show_progress', True),
        )
        results = await processor.classify_articles(articles)
        pairs = list(zip(articles, results))
        report = [{'id': article.id, **result.to_dict()} for article, result in pairs]
        return render(report, formatter.format_classifications(pairs), output_format)

    if args.command == "rank":
        placement = Placement.parse(args.placement)
        ranked = rank_for_placement(articles, placement, limit=args.limit, now=now)
        report = [{'article': article.to_dict(), 'score': score.to_dict()} for article, score in ranked]
        return render(report, formatter.format_ranking(placement, ranked), output_format)

    if args.command == "validate-hero":
        if args.article_id:
            matches = [article for article in articles if article.id == args.article_id]
            if not matches:
                raise ValueError(f"No article with id {args.article_id!r}")
            candidate = matches[0]
        else:
            ranked = rank_for_placement(articles, Placement.HERO, limit=1, now=now)
            if not ranked:
                logger.warning("No article is eligible for the hero placement")
                return render({'hero': None}, "_No eligible hero article._\n", output_format)
            candidate = ranked[0][0]
        result = validate_hero(candidate, now)
        report = {'article': candidate.to_dict(), 'validation': result.to_dict()}
        return render(report, formatter.format_validation(candidate, result), output_format)

    homepage = assemble_homepage(articles, now)
    metrics = quality_metrics(homepage, now)
    report = {'homepage': homepage.to_dict(), 'metrics': metrics.to_dict()}
    return render(report, formatter.format_homepage(homepage, metrics), output_format)


async def async_main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the application.
    """
    load_dotenv(override=True)

    args = parse_args(argv)
    config = load_config(args.config)
    setup_logging(config, args.verbose)

    logger.debug(f"Running {args.command} on {args.articles}")
    report = await run_command(args, config)

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(report)
        logger.info(f"Report written to {args.output}")
    else:
        sys.stdout.write(report)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Entry point for the command-line script.
    """
    try:
        return asyncio.run(async_main(argv))
    except KeyboardInterrupt:
        logger.info("Process interrupted by user")
        return 1
    except (OSError, ValueError) as e:
        logger.error(f"newsrank failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
