from .config import MenuConfig
from .errors import (
    AmbiguousStyleError,
    MenuDefinitionError,
    MenuError,
    MenuImportError,
    UnknownStyleError,
)
from .interfaces import CallableCondition, CallableTranslation, DisplayCondition, TranslationService
from .models import Menu, MenuNode, MenuSeparator
from .request import RequestContext
from .styles import IconStyle, MenuItemStyle, StyleRegistry, TargetStyle
from .loader import load_menu, menu_from_dict, menu_to_dict, save_menu

__all__ = [
    "MenuConfig",
    "MenuNode",
    "Menu",
    "MenuSeparator",
    "RequestContext",
    "DisplayCondition",
    "TranslationService",
    "CallableCondition",
    "CallableTranslation",
    "MenuItemStyle",
    "IconStyle",
    "TargetStyle",
    "StyleRegistry",
    "MenuError",
    "AmbiguousStyleError",
    "UnknownStyleError",
    "MenuDefinitionError",
    "MenuImportError",
    "menu_to_dict",
    "menu_from_dict",
    "load_menu",
    "save_menu",
]
