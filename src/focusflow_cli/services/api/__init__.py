"""Cloud API client."""
