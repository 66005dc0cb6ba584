"""Lookup table loading and the tag -> combination reverse index.

A lookup table row is ``dstport,protocol,tag``. Rows sharing a port/protocol
key accumulate their tags as a set; protocol and tag are lower-cased, the port
is kept verbatim.
"""
from __future__ import annotations

import logging
import typing as t

log = logging.getLogger(__name__)

LookupTable = t.Dict[str, t.Set[str]]
TagIndex = t.Dict[str, t.Set[str]]


def make_key(port: str, protocol: str) -> str:
    return f"{port},{protocol.lower()}"


def split_key(key: str) -> t.Tuple[str, str]:
    port, _, protocol = key.partition(",")
    return port, protocol


def split_fields(line: str, sep: str) -> t.List[str]:
    """Split ``line`` on ``sep``, dropping the line ending and trailing empty fields."""
    parts = line.rstrip("\r\n").split(sep)
    while parts and parts[-1] == "":
        parts.pop()
    return parts


def load_lookup_table(path: str) -> LookupTable:
    """Read ``path`` and return a mapping of combination key -> set of tags.

    Lines that do not have exactly three comma-separated fields are skipped.
    I/O errors propagate to the caller.
    """
    table: LookupTable = {}
    loaded = 0
    skipped = 0
    with open(path, "r", encoding="utf-8", errors="replace") as fh:
        for lineno, line in enumerate(fh, start=1):
            parts = split_fields(line, ",")
            if len(parts) != 3:
                log.debug("skipping lookup row %d with %d fields", lineno, len(parts))
                skipped += 1
                continue
            port, protocol, tag = parts
            table.setdefault(make_key(port, protocol), set()).add(tag.lower())
            loaded += 1
    log.info("Loaded %d lookup rows into %d combinations from %s (skipped %d)", loaded, len(table), path, skipped)
    return table


def reverse_lookup_table(table: LookupTable) -> TagIndex:
    """Invert ``table`` so each tag maps to every combination that carries it."""
    index: TagIndex = {}
    for key, tags in table.items():
        for tag in tags:
            index.setdefault(tag, set()).add(key)
    return index
