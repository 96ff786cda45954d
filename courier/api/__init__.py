"""HTTP API for Courier."""
