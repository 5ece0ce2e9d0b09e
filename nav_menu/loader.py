import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .config import MenuConfig
from .errors import MenuDefinitionError, UnknownStyleError
from .models import MenuNode, MenuSeparator
from .styles import StyleRegistry

logger = logging.getLogger(__name__)

NODE_KEYS = {
    "label",
    "url",
    "priority",
    "css_class",
    "is_extended",
    "is_active",
    "activate_based_on_url",
    "propagated_url_parameters",
    "styles",
    "children",
    "separator",
}


def menu_to_dict(node: MenuNode) -> Dict[str, Any]:
    """Convert a menu tree to a JSON-compatible dict (conditions and translators are not kept)."""
    if node.is_separator():
        return {"separator": True}

    data: Dict[str, Any] = {"label": node.label, "url": node.url}
    if node.priority is not None:
        data["priority"] = node.priority
    if node.css_class is not None:
        data["css_class"] = node.css_class
    if node.is_extended is not None:
        data["is_extended"] = node.is_extended
    if node.is_active_override:
        data["is_active"] = True
    if not node.activate_based_on_url:
        data["activate_based_on_url"] = False
    if node.propagated_url_parameters:
        data["propagated_url_parameters"] = list(node.propagated_url_parameters)
    if node.get_styles():
        data["styles"] = [style.to_dict() for style in node.get_styles()]
    data["children"] = [menu_to_dict(child) for child in node.get_children()]
    return data


def menu_from_dict(data: Dict[str, Any], config: Optional[MenuConfig] = None) -> MenuNode:
    """
    Build a menu tree from a dict as produced by menu_to_dict.

    Args:
        data (Dict[str, Any]): The menu definition
        config (Optional[MenuConfig]): Configuration given to every node

    Returns:
        MenuNode: The root of the tree

    Raises:
        MenuDefinitionError: If the definition is malformed
    """
    if not isinstance(data, dict):
        raise MenuDefinitionError(f"Menu definition must be an object, got {type(data).__name__}")

    unknown = set(data) - NODE_KEYS
    if unknown:
        logger.error(f"Unknown keys in menu definition: {sorted(unknown)}")
        raise MenuDefinitionError(f"Unknown keys in menu definition: {', '.join(sorted(unknown))}")

    if data.get("separator"):
        return MenuSeparator(config=config)

    children = data.get("children") or []
    if not isinstance(children, list):
        raise MenuDefinitionError(f"'children' must be a list in menu {data.get('label')!r}")

    node = MenuNode(
        data.get("label"),
        data.get("url"),
        [menu_from_dict(child, config) for child in children],
        config=config,
        priority=_priority_from_dict(data),
        css_class=data.get("css_class"),
        propagated_url_parameters=_parameters_from_dict(data),
        is_active=bool(data.get("is_active", False)),
        activate_based_on_url=bool(data.get("activate_based_on_url", True)),
        is_extended=data.get("is_extended"),
    )

    for style_data in data.get("styles") or []:
        node.add_style(_style_from_dict(style_data))

    return node


def _priority_from_dict(data: Dict[str, Any]) -> Optional[float]:
    """A number, or None when absent. An empty string means no priority."""
    priority = data.get("priority")
    if priority is None or priority == "":
        return None
    if isinstance(priority, bool) or not isinstance(priority, (int, float)):
        logger.error(f"Invalid priority {priority!r} in menu {data.get('label')!r}")
        raise MenuDefinitionError(
            f"'priority' must be a number in menu {data.get('label')!r}, got {priority!r}"
        )
    return priority


def _parameters_from_dict(data: Dict[str, Any]) -> List[str]:
    parameters = data.get("propagated_url_parameters")
    if parameters is None:
        return []
    if not isinstance(parameters, list) or not all(isinstance(p, str) for p in parameters):
        logger.error(f"Invalid propagated_url_parameters {parameters!r} in menu {data.get('label')!r}")
        raise MenuDefinitionError(
            f"'propagated_url_parameters' must be a list of strings in menu {data.get('label')!r}"
        )
    return parameters


def _style_from_dict(style_data: Any):
    if not isinstance(style_data, dict) or "kind" not in style_data:
        raise MenuDefinitionError(f"Style must be an object with a 'kind': {style_data!r}")
    payload = dict(style_data)
    kind = payload.pop("kind")
    try:
        return StyleRegistry.create(kind, **payload)
    except UnknownStyleError as e:
        raise MenuDefinitionError(str(e)) from e
    except TypeError as e:
        logger.error(f"Invalid payload for style {kind!r}: {str(e)}")
        raise MenuDefinitionError(f"Invalid payload for style '{kind}': {str(e)}") from e


def load_menu(path: Union[str, Path], config: Optional[MenuConfig] = None) -> MenuNode:
    """Load a menu tree from a JSON file."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in {path}: {str(e)}")
        raise MenuDefinitionError(f"Invalid JSON in {path}: {str(e)}") from e
    menu = menu_from_dict(data, config)
    logger.info(f"Menu loaded from {path}")
    return menu


def save_menu(node: MenuNode, path: Union[str, Path]) -> None:
    """Save a menu tree to a JSON file."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(menu_to_dict(node), f, indent=2)
        logger.info(f"Menu tree saved to {output_path}")
    except Exception as e:
        logger.error(f"Error saving menu tree: {str(e)}")
        raise
