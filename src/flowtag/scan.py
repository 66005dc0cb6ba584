"""Flow-log scanning: resolve each version 2 record to tags and tally it."""
from __future__ import annotations

import dataclasses
import logging
import typing as t

from . import UNTAGGED
from .lookup import LookupTable, make_key, split_fields

log = logging.getLogger(__name__)

FLOW_LOG_VERSION = "2"
MIN_FIELDS = 8
PORT_FIELD = 5
PROTOCOL_FIELD = 7


@dataclasses.dataclass
class ScanStats:
    lines_read: int = 0
    records_counted: int = 0
    lines_skipped: int = 0
    untagged: int = 0

    def as_dict(self) -> dict:
        return dataclasses.asdict(self)


def parse_flow_line(line: str, resolve_protocol: t.Optional[t.Callable[[str], str]] = None) -> t.Optional[str]:
    """Return the combination key for a countable flow-log line, else None."""
    fields = split_fields(line, " ")
    if len(fields) < MIN_FIELDS or fields[0] != FLOW_LOG_VERSION:
        return None
    protocol = fields[PROTOCOL_FIELD]
    if resolve_protocol is not None:
        protocol = resolve_protocol(protocol)
    return make_key(fields[PORT_FIELD], protocol)


def resolve_tags(key: str, table: LookupTable) -> t.Set[str]:
    return table.get(key, {UNTAGGED})


def scan_flow_logs(
    path: str,
    table: LookupTable,
    tag_counts: t.Dict[str, int],
    port_protocol_counts: t.Dict[str, int],
    resolve_protocol: t.Optional[t.Callable[[str], str]] = None,
) -> ScanStats:
    """Tally the flow log at ``path`` into the caller's count mappings.

    Every tag resolved for a record gains one count; the record's port/protocol
    combination gains exactly one count however many tags it carries.
    Records whose combination is absent from ``table`` count under the
    ``Untagged`` sentinel. I/O errors propagate.
    """
    stats = ScanStats()
    with open(path, "r", encoding="utf-8", errors="replace") as fh:
        for lineno, line in enumerate(fh, start=1):
            stats.lines_read += 1
            key = parse_flow_line(line, resolve_protocol)
            if key is None:
                log.debug("skipping flow log line %d", lineno)
                stats.lines_skipped += 1
                continue
            tags = resolve_tags(key, table)
            if key not in table:
                stats.untagged += 1
            for tag in tags:
                tag_counts[tag] = tag_counts.get(tag, 0) + 1
            port_protocol_counts[key] = port_protocol_counts.get(key, 0) + 1
            stats.records_counted += 1
    log.info(
        "Scanned %s: %d lines, %d records counted, %d skipped, %d untagged",
        path, stats.lines_read, stats.records_counted, stats.lines_skipped, stats.untagged,
    )
    return stats
