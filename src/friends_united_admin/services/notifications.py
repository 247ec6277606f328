"""Notification collection for a single request."""

from dataclasses import dataclass, field

from friends_united_admin.domain.notifications import Notification, Variant


@dataclass
class Notifier:
    """Collects toasts raised while handling one request."""

    items: list[Notification] = field(default_factory=list)

    def notify(
        self, title: str, description: str, variant: Variant = Variant.DEFAULT
    ) -> None:
        """Queue a notification for the next rendered page."""
        self.items.append(Notification(title, description, variant))

    def success(self, description: str, title: str = "Success!") -> None:
        self.notify(title, description)

    def error(self, description: str, title: str = "Error") -> None:
        self.notify(title, description, Variant.DESTRUCTIVE)

    def drain(self) -> list[Notification]:
        """Return and forget every queued notification."""
        drained, self.items = self.items, []
        return drained
