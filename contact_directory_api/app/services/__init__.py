"""Business services used by the API endpoints."""
