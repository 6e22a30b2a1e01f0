"""Business logic for the events app."""
