"""Blinker signals emitted when catalog data changes."""

from blinker import signal

# Sent with species_id=<int> after a comment is created or deleted
comments_changed_signal = signal("comments-changed")
