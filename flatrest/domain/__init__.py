"""Pure domain rules (no I/O) for file-backed collections."""
