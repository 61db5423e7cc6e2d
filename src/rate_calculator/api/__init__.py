"""HTTP API for the rate calculator."""
