"""Production adapters for TaskHub ports."""
