from dataclasses import asdict, dataclass
from typing import Any, ClassVar, Dict


@dataclass(frozen=True)
class MenuItemStyle:
    """
    Base class for additional styles attached to a menu item.

    A style is an immutable payload identified by its kind. The menu item
    never interprets it; it is up to the renderer to honour a particular
    style (or ignore it).
    """

    kind: ClassVar[str] = "style"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the payload, tagged with its kind."""
        data = {"kind": self.kind}
        data.update(asdict(self))
        return data
