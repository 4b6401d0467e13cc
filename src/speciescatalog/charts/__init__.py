"""Charts rendered by the species catalog."""
