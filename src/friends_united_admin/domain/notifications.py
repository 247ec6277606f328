"""User-facing notification models."""

from dataclasses import asdict, dataclass
from enum import Enum


class Variant(str, Enum):
    """Visual style of a notification."""

    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    """A toast shown at the top of the next rendered page."""

    title: str
    description: str
    variant: Variant = Variant.DEFAULT

    def to_dict(self) -> dict[str, str]:
        data = asdict(self)
        data["variant"] = self.variant.value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "Notification":
        return cls(
            title=str(data.get("title", "")),
            description=str(data.get("description", "")),
            variant=Variant(data.get("variant", Variant.DEFAULT.value)),
        )
