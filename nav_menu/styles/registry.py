import logging
from typing import Any, Dict, List, Type

from ..errors import UnknownStyleError
from .base import MenuItemStyle

logger = logging.getLogger(__name__)


class StyleRegistry:
    """Registry mapping style kinds to style classes."""

    _styles: Dict[str, Type[MenuItemStyle]] = {}

    @classmethod
    def register(cls, kind: str, style_class: Type[MenuItemStyle]) -> None:
        """
        Register a style class.

        Args:
            kind (str): Tag identifying the style
            style_class (Type[MenuItemStyle]): The style class
        """
        cls._styles[kind] = style_class
        logger.debug(f"Registered style: {kind}")

    @classmethod
    def get(cls, kind: str) -> Type[MenuItemStyle]:
        """
        Get the style class registered for a kind.

        Raises:
            UnknownStyleError: If nothing is registered under that kind
        """
        try:
            return cls._styles[kind]
        except KeyError:
            logger.error(f"No style registered for kind: {kind}")
            raise UnknownStyleError(kind) from None

    @classmethod
    def create(cls, kind: str, **payload: Any) -> MenuItemStyle:
        """
        Instantiate the style registered for a kind.

        Args:
            kind (str): Tag identifying the style
            **payload: Constructor arguments of the style

        Returns:
            MenuItemStyle: The new style
        """
        style_class = cls.get(kind)
        return style_class(**payload)

    @classmethod
    def list_styles(cls) -> List[str]:
        """
        List all registered style kinds.

        Returns:
            List[str]: Kinds of registered styles
        """
        return list(cls._styles.keys())
