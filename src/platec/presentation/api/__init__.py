"""HTTP API for platec."""
