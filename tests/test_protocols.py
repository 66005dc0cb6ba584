from flowtag.lookup import load_lookup_table
from flowtag.protocols import resolve_protocol
from flowtag.scan import scan_flow_logs

from utils_flowlog import flow_line


def test_common_protocol_numbers_resolve():
    assert resolve_protocol("6") == "tcp"
    assert resolve_protocol("17") == "udp"
    assert resolve_protocol("1") == "icmp"


def test_names_and_unknown_numbers_pass_through():
    assert resolve_protocol("tcp") == "tcp"
    assert resolve_protocol("") == ""
    assert resolve_protocol("9999") == "9999"


def test_scan_with_resolver_matches_named_lookup(write_inputs):
    lookup, flows = write_inputs(["443,tcp,https"], [flow_line("443", "6")])
    tag_counts, pp_counts = {}, {}
    scan_flow_logs(flows, load_lookup_table(lookup), tag_counts, pp_counts, resolve_protocol=resolve_protocol)
    assert tag_counts == {"https": 1}
    assert pp_counts == {"443,tcp": 1}
