"""Models shared between the API and the services."""
