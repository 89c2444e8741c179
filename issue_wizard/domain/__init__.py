"""Domain layer for the issue creation wizard."""
