"""flowtag: tag network flow-log records from a port/protocol lookup table."""

__version__ = "0.1.0"

UNTAGGED = "Untagged"
