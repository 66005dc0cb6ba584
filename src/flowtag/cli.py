"""Command line entry point for flowtag."""
from __future__ import annotations

import argparse
import logging
import sys
import typing as t

from . import __version__
from .logging_config import setup_logging
from .lookup import load_lookup_table, reverse_lookup_table
from .report import build_summary, dumps_summary, print_report
from .scan import scan_flow_logs

DEFAULT_FLOW_LOGS = "flow_logs.txt"
DEFAULT_LOOKUP_TABLE = "lookup_table.csv"

# exit codes: 2 unreadable input, 10 internal/output failure
EXIT_INPUT = 2
EXIT_INTERNAL = 10


def build_parser():
    p = argparse.ArgumentParser(prog="flowtag", description="Tag flow-log records by destination port and protocol")
    p.add_argument("--flow-logs", default=DEFAULT_FLOW_LOGS, metavar="PATH", help=f"Flow log file (default: {DEFAULT_FLOW_LOGS})")
    p.add_argument("--lookup", default=DEFAULT_LOOKUP_TABLE, metavar="PATH", help=f"Lookup table CSV (default: {DEFAULT_LOOKUP_TABLE})")
    p.add_argument("--sort", action="store_true", help="Sort every report section for reproducible output")
    p.add_argument("--json", action="store_true", help="Print the canonical JSON summary instead of the text report")
    p.add_argument("--out", metavar="FILE", help="Also write the JSON summary to FILE")
    p.add_argument("--resolve-protocol-numbers", action="store_true", help="Translate numeric protocol fields (6, 17, ...) to names before lookup")
    p.add_argument("--log", default="WARNING", help="Log level")
    p.add_argument("--version", action="version", version=f"flowtag {__version__}")
    return p


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log)
    log = logging.getLogger("flowtag.cli")

    resolver = None
    if args.resolve_protocol_numbers:
        from .protocols import resolve_protocol
        resolver = resolve_protocol

    tag_counts: t.Dict[str, int] = {}
    port_protocol_counts: t.Dict[str, int] = {}
    try:
        table = load_lookup_table(args.lookup)
        tag_index = reverse_lookup_table(table)
        stats = scan_flow_logs(args.flow_logs, table, tag_counts, port_protocol_counts, resolve_protocol=resolver)
    except OSError as e:
        log.error("cannot read input: %s", e)
        sys.exit(EXIT_INPUT)

    summary = None
    if args.json or args.out:
        summary = build_summary(
            tag_counts, port_protocol_counts, tag_index,
            stats=stats.as_dict(), flow_logs=args.flow_logs, lookup_table=args.lookup,
        )

    if args.json:
        print(dumps_summary(summary))
    else:
        print_report(tag_counts, port_protocol_counts, tag_index, sort_keys=args.sort)

    if args.out:
        try:
            with open(args.out, "w", encoding="utf-8") as fh:
                fh.write(dumps_summary(summary))
        except OSError:
            log.exception("failed to write summary to %s", args.out)
            sys.exit(EXIT_INTERNAL)
    return 0


if __name__ == "__main__":
    main()
