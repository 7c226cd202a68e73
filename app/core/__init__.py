"""Cross-cutting infrastructure: logging and credentials."""
