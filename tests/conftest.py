import pytest


@pytest.fixture
def write_inputs(tmp_path):
    def _write(lookup_rows, flow_lines):
        lookup = tmp_path / "lookup_table.csv"
        flows = tmp_path / "flow_logs.txt"
        lookup.write_text("".join(row + "\n" for row in lookup_rows), encoding="utf-8")
        flows.write_text("".join(line + "\n" for line in flow_lines), encoding="utf-8")
        return str(lookup), str(flows)
    return _write
