"""
Command-line interface for depsolve cache maintenance.

This module provides CLI commands for cache operations including:
- shrink: Evict old repository metadata down to the size budget
- cleanup: Remove caches of retired distributions and legacy elements
- cache-stats: Display cache statistics
"""

import json
import logging
from pathlib import Path
from typing import Optional, Tuple

import click

from depsolve_cache.cache import RepoCache, cleanup_old_cache_dirs
from depsolve_cache.config import get_settings
from depsolve_cache.exceptions import DepsolveCacheException

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def _cache_root(cache_dir: Optional[Path]) -> Path:
    if cache_dir is not None:
        return cache_dir
    return get_settings().cache_root_path


def _scan_root(cache_dir: Optional[Path], distro: Optional[str]) -> Path:
    root = _cache_root(cache_dir)
    return root / distro if distro else root


@click.group()
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def cli(verbose: bool):
    """
    Depsolve cache maintenance CLI.

    Command-line tools for repository metadata cache maintenance.
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.debug("Verbose logging enabled")


@cli.command('shrink')
@click.option(
    '--cache-dir',
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help='Cache root directory (default: from config)'
)
@click.option(
    '--distro', '-d',
    default=None,
    help='Only shrink this distribution\'s cache (default: whole root)'
)
@click.option(
    '--max-size', '-s',
    type=click.IntRange(min=1),
    default=None,
    help='Size budget in bytes (default: from config)'
)
def shrink_command(cache_dir: Optional[Path], distro: Optional[str], max_size: Optional[int]):
    """
    Evict the oldest repositories until the cache fits its size budget.

    Examples:

        \b
        # Shrink the whole cache to the configured budget
        python -m depsolve_cache.cli shrink

        \b
        # Shrink one distribution's cache to 500MB
        python -m depsolve_cache.cli shrink -d fedora-41 -s 524288000
    """
    if max_size is None:
        max_size = get_settings().cache_max_size
    root = _scan_root(cache_dir, distro)

    try:
        cache = RepoCache(root, max_size)
        before = cache.size
        repos_before = len(cache.repo_elements)
        cache.shrink()
    except DepsolveCacheException as e:
        click.echo(click.style(f"Error shrinking cache: {e.message}", fg='red'), err=True)
        logger.exception("Cache shrink failed")
        raise SystemExit(1)

    evicted = repos_before - len(cache.repo_elements)
    click.echo(click.style("Cache shrink complete!", fg='green', bold=True))
    click.echo(f"  Cache directory: {root}")
    click.echo(f"  Evicted repositories: {evicted}")
    click.echo(f"  Size: {before} -> {cache.size} bytes (budget {max_size})")


@cli.command('cleanup')
@click.option(
    '--cache-dir',
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help='Cache root directory (default: from config)'
)
@click.option(
    '--distro', '-d',
    'distros',
    multiple=True,
    help='Distribution to keep (repeatable, default: from config)'
)
@click.option(
    '--force', '-f',
    is_flag=True,
    help='Skip confirmation prompt'
)
def cleanup_command(cache_dir: Optional[Path], distros: Tuple[str, ...], force: bool):
    """
    Remove caches of distributions that are no longer built.

    Every subdirectory of the cache root not named with --distro is removed,
    as are repository files left directly under the root by the legacy
    flat layout.

    Examples:

        \b
        # Keep only the fedora-40 and fedora-41 caches
        python -m depsolve_cache.cli cleanup -d fedora-40 -d fedora-41
    """
    root = _cache_root(cache_dir)
    if not distros:
        distros = tuple(get_settings().distro_names)

    if not distros and not force:
        if not click.confirm("No distributions given, remove ALL distribution caches?"):
            click.echo("Operation cancelled.")
            return

    try:
        removed = cleanup_old_cache_dirs(root, distros)
    except DepsolveCacheException as e:
        click.echo(click.style(f"Error cleaning cache: {e.message}", fg='red'), err=True)
        logger.exception("Cache cleanup failed")
        raise SystemExit(1)

    click.echo(click.style("Cache cleanup complete!", fg='green', bold=True))
    click.echo(f"  Removed paths: {len(removed)}")
    for path in removed:
        click.echo(f"    {path}")


@cli.command('cache-stats')
@click.option(
    '--cache-dir',
    type=click.Path(file_okay=False, dir_okay=True, path_type=Path),
    default=None,
    help='Cache root directory (default: from config)'
)
@click.option(
    '--distro', '-d',
    default=None,
    help='Only report this distribution\'s cache'
)
@click.option(
    '--json',
    'output_json',
    is_flag=True,
    help='Output statistics as JSON'
)
def cache_stats_command(cache_dir: Optional[Path], distro: Optional[str], output_json: bool):
    """
    Display repository metadata cache statistics.

    Examples:

        \b
        # Display cache statistics
        python -m depsolve_cache.cli cache-stats

        \b
        # Output as JSON
        python -m depsolve_cache.cli cache-stats --json
    """
    root = _scan_root(cache_dir, distro)
    try:
        cache = RepoCache(root, get_settings().cache_max_size)
    except DepsolveCacheException as e:
        click.echo(click.style(f"Error getting cache stats: {e.message}", fg='red'), err=True)
        logger.exception("Failed to get cache stats")
        raise SystemExit(1)

    stats = cache.stats()
    if output_json:
        click.echo(json.dumps(stats, indent=2))
        return

    click.echo(click.style("Cache Statistics", fg='blue', bold=True))
    click.echo()
    click.echo(f"  Cache directory: {stats['root']}")
    click.echo(f"  Repositories: {stats['repos']}")
    click.echo(f"  Size: {stats['size'] / (1024 * 1024):.2f} MB")
    click.echo(f"  Size limit: {stats['max_size'] / (1024 * 1024):.2f} MB")

    usage_pct = stats['usage'] * 100
    click.echo(f"Cache Usage: {usage_pct:.1f}%")

    bar_width = 40
    filled = min(bar_width, int(bar_width * usage_pct / 100))
    bar = '█' * filled + '░' * (bar_width - filled)
    if usage_pct < 50:
        color = 'green'
    elif usage_pct < 80:
        color = 'yellow'
    else:
        color = 'red'
    click.echo(click.style(bar, fg=color))


if __name__ == '__main__':
    cli()
