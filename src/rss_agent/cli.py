"""CLI entry point for rss-agent."""

import asyncio
import json
import sys
from enum import Enum
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer

from rss_agent import __version__
from rss_agent.adapters.cache import FileCache
from rss_agent.adapters.generators import Rss2Generator
from rss_agent.adapters.http import RssHttpClient
from rss_agent.adapters.output import (
    analysis_result_to_dict,
    feed_to_dict,
    format_batch_pretty,
    format_feed_pretty,
    format_validation_pretty,
    validation_result_to_dict,
    validation_summary_to_dict,
)
from rss_agent.adapters.parsers import Rss2Parser
from rss_agent.config import Settings, get_settings
from rss_agent.core import RssAgentError
from rss_agent.logging import setup_logging
from rss_agent.use_cases import (
    BatchAnalyzer,
    FeedService,
    TimezoneValidator,
    build_feed_from_config,
    parse_feed_config,
    parse_url_list,
)

cli = typer.Typer(
    name="rss-agent",
    help="Analyze, batch-check and generate RSS 2.0 feeds.",
    no_args_is_help=True,
)


class OutputFormat(str, Enum):
    JSON = "json"
    PRETTY = "pretty"


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2, ensure_ascii=False))


def _init(verbose: bool) -> Settings:
    settings = get_settings()
    setup_logging(
        "DEBUG" if verbose else settings.log_level,
        json_output=settings.env == "prod",
    )
    return settings


def _read_input(input_file: Optional[Path]) -> str:
    """Read from ``input_file``, or from stdin when no file is given."""
    if input_file is None:
        return sys.stdin.read()

    try:
        return input_file.read_text(encoding="utf-8")
    except OSError as e:
        _fail(f"Cannot read {input_file}: {e}")


def _http_client(settings: Settings) -> RssHttpClient:
    return RssHttpClient(
        timeout=settings.http.timeout,
        user_agent=settings.http.user_agent,
        max_redirects=settings.http.max_redirects,
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"rss-agent {__version__}")
        raise typer.Exit()


@cli.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """Analyze, batch-check and generate RSS 2.0 feeds."""


@cli.command()
def analyze(
    url: Optional[str] = typer.Argument(None, help="Feed URL to fetch"),
    input_file: Optional[Path] = typer.Option(None, "--input", "-i", help="Read feed XML from file"),
    output_format: OutputFormat = typer.Option(OutputFormat.JSON, "--format", "-f"),
    no_cache: bool = typer.Option(False, "--no-cache", help="Always download the feed"),
    cache_dir: Optional[Path] = typer.Option(None, "--cache-dir", help="Cache directory"),
    cache_expired_time: Optional[int] = typer.Option(
        None, "--cache-expired-time", min=0, help="Cache expiration in seconds"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Parse a feed from a URL, a file or stdin."""
    settings = _init(verbose)

    if url:
        cache = None
        if settings.cache.enabled and not no_cache:
            cache = FileCache(
                cache_dir=cache_dir or settings.cache.cache_dir,
                expiration_seconds=(
                    settings.cache.expiration_seconds
                    if cache_expired_time is None
                    else cache_expired_time
                ),
            )
        service = FeedService(_http_client(settings), cache=cache)
        try:
            feed = asyncio.run(service.fetch_feed(url))
        except RssAgentError as e:
            _fail(e.message)
        source = url
    else:
        content = _read_input(input_file)
        if not content.strip():
            _fail("No input provided")
        try:
            feed = Rss2Parser().parse(content)
        except RssAgentError as e:
            _fail(str(e))
        source = str(input_file) if input_file else "stdin"

    if output_format == OutputFormat.PRETTY:
        typer.echo(format_feed_pretty(feed, source))
    else:
        _echo_json(feed_to_dict(feed))


@cli.command()
def batch(
    input_file: Optional[Path] = typer.Option(
        None, "--input", "-i", help="JSON file with the list of feed URLs"
    ),
    output_format: OutputFormat = typer.Option(OutputFormat.JSON, "--format", "-f"),
    concurrent: Optional[int] = typer.Option(
        None, "--concurrent", "-c", help="Concurrent requests (1-10)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Analyze many feeds listed as a JSON array."""
    settings = _init(verbose)

    try:
        urls = parse_url_list(_read_input(input_file))
    except ValueError as e:
        _fail(str(e))

    if not urls:
        _fail("No URLs found in input")

    analyzer = BatchAnalyzer(_http_client(settings))
    concurrency = settings.batch.concurrency if concurrent is None else concurrent
    results = asyncio.run(analyzer.analyze(urls, concurrency=concurrency))

    if output_format == OutputFormat.PRETTY:
        typer.echo(format_batch_pretty(results))
        return

    successful = sum(1 for r in results if r.success)
    _echo_json({
        "summary": {
            "total": len(results),
            "successful": successful,
            "failed": len(results) - successful,
        },
        "results": [
            analysis_result_to_dict(r, max_items=settings.batch.preview_items) for r in results
        ],
    })


@cli.command()
def generate(
    input_file: Optional[Path] = typer.Option(None, "--input", "-i", help="JSON feed config"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write XML to file"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Generate an RSS 2.0 feed from a JSON list of links."""
    _init(verbose)

    try:
        config = parse_feed_config(_read_input(input_file))
        feed = build_feed_from_config(config)
    except ValueError as e:
        _fail(str(e))

    xml = Rss2Generator().generate(feed)

    if output is None:
        typer.echo(xml, nl=False)
        return

    try:
        output.write_text(xml, encoding="utf-8")
    except OSError as e:
        _fail(f"Cannot write {output}: {e}")
    typer.echo(f"RSS feed written to {output} ({len(feed.items)} items)", err=True)


@cli.command()
def timezone(
    date_input: Optional[str] = typer.Option(None, "--input", "-i", help="RSS pubDate string"),
    to_timezone: Optional[str] = typer.Option(
        None, "--to-timezone", "-t", help="Target zone, e.g. +0800, GMT, JST"
    ),
    validate: bool = typer.Option(False, "--validate", help="Run the built-in validation cases"),
    as_json: bool = typer.Option(False, "--json", help="Output JSON"),
) -> None:
    """Parse pubDate strings and check their UTC conversion."""
    _init(False)
    validator = TimezoneValidator()

    if validate:
        results = validator.validate_batch(TimezoneValidator.DEFAULT_CASES)
        if as_json:
            _echo_json(validation_summary_to_dict(results))
        else:
            for result in results:
                typer.echo(format_validation_pretty(result))
            passed = sum(1 for r in results if r.success)
            typer.echo(f"\nPassed: {passed}/{len(results)}")
        if not all(r.success for r in results):
            raise typer.Exit(code=1)
        return

    if not date_input:
        _fail("Provide a date with --input or use --validate")

    result = validator.validate(date_input)
    converted = None
    if to_timezone:
        if result.parsed is None:
            _fail(f"Cannot parse date: {date_input}")
        converted = validator.convert_to_timezone(result.parsed, to_timezone)
        if converted is None:
            _fail(f"Unknown timezone: {to_timezone}")

    if as_json:
        data = validation_result_to_dict(result)
        if converted is not None:
            data["converted"] = {"timezone": to_timezone, "time": converted.isoformat()}
        _echo_json(data)
    else:
        typer.echo(format_validation_pretty(result))
        if converted is not None:
            typer.echo(f"   Converted ({to_timezone}): {converted.isoformat()}")

    if not result.success:
        raise typer.Exit(code=1)


def app() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    app()
