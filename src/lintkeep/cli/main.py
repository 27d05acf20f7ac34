"""CLI entrypoint for Lintkeep."""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from lintkeep import __version__
from lintkeep.config import LintkeepConfig, load_config
from lintkeep.constants.branding import CLI_DESCRIPTION
from lintkeep.constants.cache import CACHE_TEMP_PREFIX, CACHE_TEMP_SUFFIX
from lintkeep.engine import CommandEngine
from lintkeep.exceptions import CachePersistError, ConfigError, EnumerationError, WatchSubscriptionError
from lintkeep.reporting import CommandNotifier, CompositeReporter, Reporter, StdoutReporter
from lintkeep.scanner.cache import CacheStore, clear_cache, load_cache, prune_missing, save_cache
from lintkeep.scanner.discovery import relative_key
from lintkeep.scanner.evaluator import BatchEvaluator
from lintkeep.watch import WatchLoop

logger = logging.getLogger(__name__)

WATCH_POLL_SECONDS: float = 0.5


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="lintkeep",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lint = subparsers.add_parser("lint", help="Lint files that changed since the last clean run")
    _add_common_arguments(lint)
    lint.add_argument("-w", "--watch", action="store_true", help="Keep running and re-lint on file changes")
    lint.add_argument("-j", "--jobs", type=int, default=None, help="Files analyzed in parallel")
    lint.add_argument("-n", "--no-cache", action="store_true", help="Ignore and do not write the cache")
    lint.add_argument("--no-color", action="store_true", help="Disable colored output")
    lint.add_argument("-v", "--verbose", action="store_true", help="Show warnings and diagnostics")

    clear = subparsers.add_parser("clear-cache", help="Delete the cache so every file is linted again")
    _add_common_arguments(clear)

    prune = subparsers.add_parser("prune-cache", help="Drop cache records for files that no longer exist")
    _add_common_arguments(prune)

    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-r", "--root", type=Path, default=Path("."), help="Source tree to lint (default: cwd)")
    parser.add_argument("-c", "--config", type=Path, default=None, help="Explicit config file")
    parser.add_argument("--cache", type=Path, default=None, help="Cache file location")


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    verbose = getattr(args, "verbose", False)
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING, format="%(levelname)s %(message)s")

    root = args.root.resolve()
    try:
        config = load_config(root, args.config)
    except ConfigError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    cache_path = args.cache.resolve() if args.cache is not None else config.resolve_cache_path(root)

    if args.command == "clear-cache":
        removed = clear_cache(cache_path)
        print(f"Removed {cache_path}" if removed else f"No cache at {cache_path}")
        return 0

    if args.command == "prune-cache":
        return _handle_prune(cache_path)

    if args.command != "lint":
        parser.error(f"Unsupported command: {args.command}")

    jobs = args.jobs if args.jobs is not None else config.jobs
    if jobs <= 0:
        print("Configuration error: --jobs must be a positive integer", file=sys.stderr)
        return 2

    use_color = not args.no_color and sys.stdout.isatty()
    reporter = _build_reporter(root, config, color=use_color, verbose=verbose)
    evaluator = BatchEvaluator(
        root=root,
        engine=CommandEngine(config.engine.command, timeout_seconds=config.engine.timeout_seconds),
        store=CacheStore() if args.no_cache else load_cache(cache_path),
        ignore_patterns=_ignore_patterns(config, root, cache_path),
        cache_path=None if args.no_cache else cache_path,
        jobs=jobs,
    )

    if args.watch:
        return _handle_watch(evaluator, reporter, root=root, config=config)
    return _handle_lint_once(evaluator, reporter)


def _handle_lint_once(evaluator: BatchEvaluator, reporter: Reporter) -> int:
    reporter.report_start([])
    try:
        result = evaluator.run()
    except EnumerationError as exc:
        reporter.report_failure(exc)
        return 2
    reporter.report_batch(result)
    return 0 if result.passed else 1


def _handle_watch(evaluator: BatchEvaluator, reporter: Reporter, *, root: Path, config: LintkeepConfig) -> int:
    def run_batch(changed: list[str]) -> None:
        reporter.report_start(changed)
        reporter.report_batch(evaluator.run())

    loop = WatchLoop(
        root,
        run_batch,
        ignore_patterns=evaluator.ignore_patterns,
        debounce_seconds=config.watch.debounce_seconds,
        on_error=reporter.report_failure,
    )
    try:
        loop.start()
    except WatchSubscriptionError as exc:
        print(f"Watch error: {exc}", file=sys.stderr)
        return 2

    try:
        while not loop.wait(WATCH_POLL_SECONDS):
            pass
    except KeyboardInterrupt:
        logger.info("Interrupted; finishing the current batch before exiting")
        loop.stop()
        loop.wait()
    return 0


def _handle_prune(cache_path: Path) -> int:
    """Rewrite the cache without stale or malformed records."""
    store = load_cache(cache_path)
    removed = prune_missing(store)
    try:
        save_cache(cache_path, store)
    except CachePersistError as exc:
        print(f"Warning: cache not saved: {exc}", file=sys.stderr)
        return 1
    print(f"Pruned {len(removed)} stale record(s) from {cache_path}")
    return 0


def _build_reporter(root: Path, config: LintkeepConfig, *, color: bool, verbose: bool) -> Reporter:
    stdout = StdoutReporter(root, color=color, verbose=verbose)
    if config.notify_command is None:
        return stdout
    return CompositeReporter(stdout, CommandNotifier(config.notify_command))


def _ignore_patterns(config: LintkeepConfig, root: Path, cache_path: Path) -> tuple[str, ...]:
    """Configured ignores plus the cache file and its temp siblings."""
    cache_key = relative_key(cache_path, root)
    return tuple(
        dict.fromkeys(
            (
                *config.ignore_patterns,
                cache_key,
                f"{CACHE_TEMP_PREFIX}*{CACHE_TEMP_SUFFIX}",
            )
        )
    )


if __name__ == "__main__":
    raise SystemExit(main())
