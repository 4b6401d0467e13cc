"""Species catalog web service."""
