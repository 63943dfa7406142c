"""CLI for generating Joplin disk usage reports."""

import argparse
import sys
from pathlib import Path

from common.env import env
from common.logger import error, get_logger, progress, setup_logging, success, warning

from .clients.base import DiskUsageError
from .clients.joplin import JoplinClient
from .clients.rate_limiter import RateLimiter
from .pending import PendingPlaceholders
from .renderer import format_size_mb
from .report import DiskUsageReport

logger = get_logger(__name__)


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {value}")
    return number


def build_client(args) -> JoplinClient:
    """Create a Data API client from CLI flags, falling back to the environment."""
    rps = getattr(args, "requests_per_second", None)
    return JoplinClient(
        token=env.joplin_token(),
        base_url=env.joplin_api_url(),
        notebook=getattr(args, "notebook", None) or env.joplin_notebook(),
        timeout=env.joplin_timeout(),
        rate_limiter=RateLimiter(requests_per_period=rps, period_seconds=1) if rps else None,
    )


def cmd_report(args):
    """Compute the report and publish it, or write it out."""
    pending = PendingPlaceholders(env.state_dir())
    workers = args.workers or env.joplin_workers()

    with build_client(args) as api:
        leftovers = pending.pending()
        if leftovers:
            warning(
                f"{len(leftovers)} placeholder note(s) from an earlier run are still present. "
                "Run 'joplin-disk-usage cleanup' to remove them."
            )

        report = DiskUsageReport(api, workers=workers, pending=pending)

        if args.stdout or args.output:
            body, stats = report.build_body()
            if args.output:
                Path(args.output).write_text(body, encoding="utf-8")
                success(f"Wrote report to {args.output}")
            else:
                sys.stdout.write(body)
        else:
            progress("Generating disk usage report...")
            result = report.generate()
            stats = result.stats
            success(f"Published report note {result.report_id}")

    logger.info(f"  Resources:          {stats.resources}")
    logger.info(f"  Note links:         {stats.link_entries}")
    logger.info(f"  Orphaned resources: {stats.orphaned_resources}")
    logger.info(f"  Notebooks:          {stats.notebooks}")
    logger.info(f"  Total size:         {format_size_mb(stats.total_size_bytes)} MB")


def cmd_cleanup(args):
    """Delete placeholder notes left behind by interrupted runs."""
    pending = PendingPlaceholders(env.state_dir())
    if not pending.pending():
        success("No leftover placeholders")
        return

    with build_client(args) as api:
        collected = pending.collect_garbage(api)
    success(f"Removed {len(collected)} leftover placeholder(s)")


def cmd_ping(args):
    """Check that the Joplin Data API is reachable."""
    with build_client(args) as api:
        if api.ping():
            success(f"Joplin Data API is up at {api.base_url}")
        else:
            error(f"Unexpected reply from {api.base_url}; is this a Joplin clipper server?")
            sys.exit(1)


def main(argv: list[str] | None = None):
    """Main entry point for the disk usage CLI."""
    parser = argparse.ArgumentParser(
        description="Report disk usage of Joplin resources, grouped by notebook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    report_parser = subparsers.add_parser(
        "report",
        help="Create the disk usage report note",
        description=(
            "Create a 'Joplin Disk Usage Report' note in the selected notebook.\n\n"
            "Every resource is listed under each notebook whose notes link to it,\n"
            "largest notebooks first.\n\n"
            "Examples:\n"
            "  # Publish into the notebook titled Inbox\n"
            "  joplin-disk-usage report --notebook Inbox\n\n"
            "  # Print the markdown instead of creating a note\n"
            "  joplin-disk-usage report --stdout\n"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    report_parser.add_argument(
        "--notebook",
        default=None,
        help="Id or exact title of the notebook to publish into (default: $JOPLIN_NOTEBOOK)",
    )
    report_parser.add_argument(
        "--workers",
        type=positive_int,
        default=None,
        help="Concurrent linked-note lookups (default: $JOPLIN_WORKERS or 1)",
    )
    report_parser.add_argument(
        "--requests-per-second",
        type=positive_int,
        default=None,
        help="Throttle Data API requests (default: unlimited)",
    )
    output_group = report_parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--stdout", action="store_true", help="Print the report instead of creating a note"
    )
    output_group.add_argument("--output", help="Write the report to a file instead")

    subparsers.add_parser(
        "cleanup",
        help="Delete placeholder notes left by interrupted runs",
        description="Delete placeholder notes recorded by runs that did not finish.",
    )

    subparsers.add_parser(
        "ping",
        help="Check that the Joplin Data API is reachable",
    )

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(level=args.log_level)

    commands = {"report": cmd_report, "cleanup": cmd_cleanup, "ping": cmd_ping}
    try:
        commands[args.command](args)
    except DiskUsageError as e:
        error(str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
