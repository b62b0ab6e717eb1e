"""HTTP client for the marketplace API."""
