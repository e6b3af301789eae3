# === FILE: pagewalk/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for PageWalk.

Commands:
  walk      Walk a paginated feed and print/save its items
  config    Show the effective configuration

Global options:
  --config PATH       Path to a YAML/JSON config (default: configs/default.yaml)
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stderr only if omitted)
  --log-format FORMAT Logging format (e.g. "%(asctime)s %(levelname)s %(message)s")

walk options:
  URL                 First page; overrides start_url from the config
  --limit INT         Stop after this many items (overrides max_items)
  --json PATH         Save the JSON report to a file
  --html PATH         Save the HTML report to a file
  --template DIR      Directory with Jinja2 templates
  --pretty            Indent JSON output (2 spaces)
  --walk-timeout SEC  Timeout for the whole walk (seconds)

Also:
  --version, -v       Show the PageWalk version

Example:
  pagewalk walk https://example.com/feed.atom --limit 50 --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from pagewalk import __version__
from pagewalk.config import WalkerConfig, load_config
from pagewalk.engine import collect_items
from pagewalk.logger import DEFAULT_FORMAT, configure, logger
from pagewalk.report.html_report import render_html
from pagewalk.report.json_report import render_json, to_records

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _resolve_config(config_path, url) -> WalkerConfig:
    """Load the config; a URL replaces only its start_url."""
    if url is None:
        return load_config(config_path)
    try:
        cfg = load_config(config_path)
    except FileNotFoundError:
        # no --config and no configs/default.yaml
        if config_path is not None:
            raise
        return WalkerConfig(start_url=url)
    return WalkerConfig(**{**cfg.model_dump(), "start_url": url})


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='PageWalk, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Path to the YAML/JSON config (default: configs/default.yaml).'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Path to the log file (stderr only if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Log format string'
)
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format):
    """PageWalk: walk paginated feeds lazily."""
    configure(level=log_level, log_file=log_file, log_format=log_format)
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('walk', context_settings=CONTEXT_SETTINGS)
@click.argument('url', required=False)
@click.option(
    '--limit', '-l', 'limit',
    type=click.IntRange(min=0),
    default=None,
    help='Stop after this many items (override max_items)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the JSON report to a file'
)
@click.option(
    '--html', 'html_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Save the HTML report to a file'
)
@click.option(
    '--template', '-t', 'template_dir',
    default=None,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help='Directory with Jinja2 templates (bundled template if omitted)'
)
@click.option(
    '--pretty', is_flag=True,
    help='Indent JSON output (2 spaces)'
)
@click.option(
    '--walk-timeout', 'walk_timeout',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Timeout for the whole walk (seconds, > 0)'
)
@click.pass_context
def walk_cmd(ctx, url, limit, json_output, html_output, template_dir, pretty, walk_timeout):
    """Walk the feed starting at URL and output its items."""
    try:
        cfg = _resolve_config(ctx.obj['config_path'], url)
    except (OSError, ValueError, TypeError, ValidationError) as e:
        print_error(f'Failed to load configuration: {e}')

    logger.info('Walking from %s', cfg.start_url)
    try:
        if walk_timeout is not None:
            items = asyncio.run(
                asyncio.wait_for(collect_items(cfg, limit), timeout=walk_timeout)
            )
        else:
            items = asyncio.run(collect_items(cfg, limit))
    except asyncio.TimeoutError:
        print_error(f'Walk did not finish within {walk_timeout} seconds')
    except Exception as e:
        print_error(f'Walk failed: {e}')

    # Nothing to save: print to stdout
    if not json_output and not html_output:
        indent = 2 if pretty else None
        try:
            click.echo(json.dumps(to_records(items), ensure_ascii=False, indent=indent))
        except TypeError as e:
            print_error(f'JSON serialization failed: {e}')
        return

    if json_output:
        try:
            saved_json = render_json(items, json_output)
            click.echo(f'JSON report: {saved_json}')
        except Exception as e:
            print_error(f'Failed to save JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(items, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Failed to save HTML: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Show the effective configuration as JSON."""
    try:
        cfg = load_config(ctx.obj['config_path'])
    except (OSError, ValueError, TypeError, ValidationError) as e:
        print_error(f'Failed to load configuration: {e}')
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
