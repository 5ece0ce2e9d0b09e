from dataclasses import dataclass
from typing import ClassVar, Iterable, Optional

from ..config import DEFAULT_RESERVED_PREFIXES
from ..utils import resolve_url
from .base import MenuItemStyle


@dataclass(frozen=True)
class IconStyle(MenuItemStyle):
    """Icon to display next to the menu item."""

    kind: ClassVar[str] = "icon"

    url: str = ""

    def get_url(
        self, root_url: str = "/", prefixes: Optional[Iterable[str]] = None
    ) -> str:
        """The icon URL, relative to root_url unless it starts with a reserved prefix."""
        return resolve_url(self.url, root_url, prefixes or DEFAULT_RESERVED_PREFIXES)
