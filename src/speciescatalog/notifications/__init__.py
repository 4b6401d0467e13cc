"""Notifications domain: change signals and websocket refresh broadcasting."""

from speciescatalog.notifications.refresh import RefreshBroadcaster
from speciescatalog.notifications.signals import comments_changed_signal

__all__ = [
    "RefreshBroadcaster",
    "comments_changed_signal",
]
