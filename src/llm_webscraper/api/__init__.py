"""REST API for field extraction."""
