from dataclasses import dataclass
from typing import ClassVar

from .base import MenuItemStyle


@dataclass(frozen=True)
class TargetStyle(MenuItemStyle):
    """Target attribute for the menu item link (default: "_blank")."""

    kind: ClassVar[str] = "target"

    target: str = "_blank"
