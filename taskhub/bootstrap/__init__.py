"""Bootstrap wiring: configuration, logging and persistence selection."""
