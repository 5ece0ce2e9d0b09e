import logging
import threading
from typing import Iterable, Iterator, List, Optional, Tuple, Type, Union

from .config import MenuConfig
from .errors import AmbiguousStyleError
from .interfaces import DisplayCondition, TranslationService
from .request import RequestContext
from .styles import MenuItemStyle
from .utils import append_query, extract_path, resolve_url

logger = logging.getLogger(__name__)

StyleKind = Union[str, Type[MenuItemStyle]]


class MenuNode:
    """
    A node of a menu tree: either a top-level menu or a menu item.

    A node does not render itself. A renderer walks the tree through the
    read accessors (get_children, get_label, get_link, is_active, ...) and
    decides what to output.
    """

    def __init__(
        self,
        label: Optional[str] = None,
        url: Optional[str] = None,
        children: Optional[Iterable["MenuNode"]] = None,
        *,
        root_url: Optional[str] = None,
        config: Optional[MenuConfig] = None,
        priority: Optional[float] = None,
        css_class: Optional[str] = None,
        propagated_url_parameters: Optional[Iterable[str]] = None,
        display_condition: Optional[DisplayCondition] = None,
        translation_service: Optional[TranslationService] = None,
        is_active: bool = False,
        activate_based_on_url: bool = True,
        is_extended: Optional[bool] = None,
        styles: Optional[Iterable[MenuItemStyle]] = None,
    ):
        """
        Initialize the menu node.

        Args:
            label (Optional[str]): Text of the item, translated on read if a translation service is set
            url (Optional[str]): Link of the item (relative to root_url unless it starts with a reserved prefix)
            children (Optional[Iterable[MenuNode]]): Child items, in insertion order
            root_url (Optional[str]): Prefix for relative URLs, defaults to config.root_url
            config (Optional[MenuConfig]): Shared menu configuration
            is_active (bool): Force the active state regardless of the current URL
        """
        self.config = config or MenuConfig()
        self.label = label
        self.url = url
        self.root_url = root_url if root_url is not None else self.config.root_url
        self.priority = priority
        self.css_class = css_class
        self.propagated_url_parameters: List[str] = list(propagated_url_parameters or [])
        self.display_condition = display_condition
        self.translation_service = translation_service
        self.is_active_override = is_active
        self.activate_based_on_url = activate_based_on_url
        self.is_extended = is_extended
        self._styles: List[MenuItemStyle] = list(styles or [])

        self._lock = threading.RLock()
        self._children: List[MenuNode] = list(children or [])
        self._sorted = False

    def __repr__(self):
        return f"{type(self).__name__}(label={self.label!r}, url={self.url!r}, priority={self.priority!r})"

    # ------------------------------------------------------------------
    # Children
    # ------------------------------------------------------------------

    def get_children(self) -> List["MenuNode"]:
        """
        Return the children, ordered by priority.

        Children with a priority come first, in ascending order; children
        without one follow, in insertion order. Equal priorities keep their
        insertion order. The order is computed once and reused until the
        children are modified.
        """
        with self._lock:
            if not self._children:
                return []
            if not self._sorted:
                with_priority = [c for c in self._children if c.priority is not None]
                without_priority = [c for c in self._children if c.priority is None]
                with_priority.sort(key=lambda c: c.priority)
                self._children = with_priority + without_priority
                self._sorted = True
                logger.debug(f"Sorted {len(self._children)} children of {self!r}")
            return list(self._children)

    def set_children(self, children: Iterable["MenuNode"]) -> None:
        """Replace all children of this node."""
        with self._lock:
            self._children = list(children)
            self._sorted = False

    def add_child(self, child: "MenuNode") -> None:
        """Add a menu item as the last child of this node."""
        with self._lock:
            self._children.append(child)
            self._sorted = False

    # Item-level name for add_child
    add_menu_item = add_child

    @property
    def children(self) -> Tuple["MenuNode", ...]:
        return tuple(self.get_children())

    @children.setter
    def children(self, children: Iterable["MenuNode"]) -> None:
        self.set_children(children)

    def has_children(self) -> bool:
        with self._lock:
            return bool(self._children)

    def walk(self, depth: int = 0) -> Iterator[Tuple[int, "MenuNode"]]:
        """Yield (depth, node) for this node and all its descendants, depth-first in display order."""
        yield depth, self
        for child in self.get_children():
            yield from child.walk(depth + 1)

    # ------------------------------------------------------------------
    # Plain accessors
    # ------------------------------------------------------------------

    def get_label(self) -> Optional[str]:
        if self.label is not None and self.translation_service is not None:
            return self.translation_service.translate(self.label)
        return self.label

    def get_url(self) -> Optional[str]:
        """Returns the raw URL of this item (or None if it is not a link)."""
        return self.url

    def get_css_class(self) -> Optional[str]:
        return self.css_class

    def get_priority(self) -> Optional[float]:
        return self.priority

    def is_separator(self) -> bool:
        return False

    def is_hidden(self) -> bool:
        """
        True if the item should not be displayed.

        The display condition is evaluated on each call, it may depend on
        state that changes between requests (current user, flags...).
        """
        if self.display_condition is None:
            return False
        return not self.display_condition.is_ok()

    def enable(self) -> "MenuNode":
        """Force this item into the active state."""
        self.is_active_override = True
        return self

    # ------------------------------------------------------------------
    # Links and active state
    # ------------------------------------------------------------------

    def _get_link_without_params(self) -> str:
        return resolve_url(self.url, self.root_url, self.config.reserved_prefixes)

    def get_link(self, request: Optional[RequestContext] = None) -> Optional[str]:
        """
        Returns the resolved link, with propagated parameters if required.

        Args:
            request (Optional[RequestContext]): The current request, source of propagated parameters

        Returns:
            Optional[str]: The link, or None if this item is not a link
        """
        if not self.url:
            return None
        link = self._get_link_without_params()

        if not self.propagated_url_parameters or request is None:
            return link

        params = []
        for name in self.propagated_url_parameters:
            if name in request.params:
                params.append((name, request.params[name]))
            else:
                logger.debug(f"Parameter {name!r} not in current request, not propagated")
        return append_query(link, params)

    def is_active(self, request: Optional[RequestContext] = None) -> bool:
        """
        True if the item is in active state (we are on the page of this item).

        An explicitly activated item is always active. Otherwise, when
        activate_based_on_url is set, the path of the item link is compared
        to the path of the current request; query strings and fragments are
        ignored.
        """
        if self.is_active_override:
            return True
        if not self.activate_based_on_url or not self.url:
            return False

        default_path = self.config.default_path
        request_url = request.url if request is not None else default_path
        link_path = extract_path(self._get_link_without_params(), default_path)
        request_path = extract_path(request_url, default_path)
        return link_path == request_path

    # ------------------------------------------------------------------
    # Styles
    # ------------------------------------------------------------------

    def add_style(self, style: MenuItemStyle) -> None:
        self._styles.append(style)

    def set_styles(self, styles: Iterable[MenuItemStyle]) -> None:
        self._styles = list(styles)

    def get_styles(self) -> List[MenuItemStyle]:
        """Returns all additional styles, in insertion order."""
        return list(self._styles)

    def get_styles_by_type(self, kind: StyleKind) -> List[MenuItemStyle]:
        """
        Returns all styles of the given kind, in insertion order.

        Args:
            kind (Union[str, Type[MenuItemStyle]]): A style kind tag or a style class
        """
        tag = _style_tag(kind)
        return [style for style in self._styles if style.kind == tag]

    def get_style_by_type(self, kind: StyleKind) -> Optional[MenuItemStyle]:
        """
        Returns the only style of the given kind, or None.

        Raises:
            AmbiguousStyleError: If more than one style of that kind is attached
        """
        matches = self.get_styles_by_type(kind)
        if not matches:
            return None
        if len(matches) > 1:
            tag = _style_tag(kind)
            logger.error(f"{len(matches)} styles of kind {tag!r} attached to {self!r}")
            raise AmbiguousStyleError(tag, len(matches))
        return matches[0]

    # Accessor names used by renderers
    get_additional_styles = get_styles
    get_additional_style_by_type = get_style_by_type
    get_additional_styles_by_type = get_styles_by_type
    set_additional_styles = set_styles


class MenuSeparator(MenuNode):
    """A bar separating menu items. It has no label and no URL."""

    def __init__(self, **kwargs):
        super().__init__(None, None, **kwargs)

    def is_separator(self) -> bool:
        return True


# A top-level menu is a node without label or URL holding the items
Menu = MenuNode


def _style_tag(kind: StyleKind) -> str:
    if isinstance(kind, str):
        return kind
    return kind.kind
