"""Report rendering for tag counts, combination counts and the tag index.

The text report keeps mapping iteration order unless ``sort_keys`` is set.
"""
from __future__ import annotations

import json
import sys
import typing as t

from . import __version__
from .lookup import TagIndex, split_key


def _items(mapping: t.Mapping, sort_keys: bool):
    if sort_keys:
        return sorted(mapping.items())
    return mapping.items()


def render_report(
    tag_counts: t.Mapping[str, int],
    port_protocol_counts: t.Mapping[str, int],
    tag_index: TagIndex,
    sort_keys: bool = False,
) -> t.Iterator[str]:
    yield "Tag Counts:"
    yield "Tag,Count"
    for tag, count in _items(tag_counts, sort_keys):
        yield f"{tag},{count}"

    yield ""
    yield "Port/Protocol Combination Counts:"
    yield "Port,Protocol,Count"
    for key, count in _items(port_protocol_counts, sort_keys):
        port, protocol = split_key(key)
        yield f"{port},{protocol},{count}"

    yield ""
    yield "Tag to Port/Protocol Combinations:"
    for tag, combinations in _items(tag_index, sort_keys):
        yield f"Tag: {tag}"
        for combination in (sorted(combinations) if sort_keys else combinations):
            yield f" - {combination}"


def print_report(tag_counts, port_protocol_counts, tag_index, sort_keys=False, stream=None):
    stream = stream if stream is not None else sys.stdout
    for line in render_report(tag_counts, port_protocol_counts, tag_index, sort_keys=sort_keys):
        stream.write(line + "\n")


def build_summary(
    tag_counts: t.Mapping[str, int],
    port_protocol_counts: t.Mapping[str, int],
    tag_index: TagIndex,
    stats: t.Optional[dict] = None,
    flow_logs: t.Optional[str] = None,
    lookup_table: t.Optional[str] = None,
) -> t.Dict[str, t.Any]:
    """Build a JSON-serializable summary of a run with deterministic list order."""
    combos = []
    for key in sorted(port_protocol_counts):
        port, protocol = split_key(key)
        combos.append({"port": port, "protocol": protocol, "count": port_protocol_counts[key]})
    return {
        "meta": {"version": __version__, "flow_logs": flow_logs, "lookup_table": lookup_table},
        "tag_counts": dict(tag_counts),
        "port_protocol_counts": combos,
        "tag_combinations": {tag: sorted(keys) for tag, keys in tag_index.items()},
        "stats": dict(stats or {}),
    }


def dumps_summary(summary: t.Mapping[str, t.Any]) -> str:
    return json.dumps(summary, sort_keys=True, separators=(",", ":"), ensure_ascii=False)
