from .base import MenuItemStyle
from .registry import StyleRegistry
from .icon import IconStyle
from .target import TargetStyle

# Register built-in styles
StyleRegistry.register(IconStyle.kind, IconStyle)
StyleRegistry.register(TargetStyle.kind, TargetStyle)

__all__ = ["MenuItemStyle", "StyleRegistry", "IconStyle", "TargetStyle"]
