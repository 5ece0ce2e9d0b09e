import logging
from typing import List, Optional
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup, Tag
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from .config import MenuConfig
from .errors import MenuImportError
from .models import MenuNode, MenuSeparator
from .styles import TargetStyle

logger = logging.getLogger(__name__)

SEPARATOR_CLASSES = {"divider", "separator", "dropdown-divider"}


def create_session(config: MenuConfig) -> requests.Session:
    """Create a requests session with retry strategy."""
    session = requests.Session()

    retry_strategy = Retry(
        total=config.retry_count,
        backoff_factor=config.retry_delay,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["GET", "HEAD"],
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({"User-Agent": config.user_agent})

    return session


def is_valid_url(url: str) -> bool:
    """
    Check if the URL is valid.

    Args:
        url (str): The URL to validate

    Returns:
        bool: True if the URL has a scheme and a host, False otherwise
    """
    try:
        result = urlparse(url)
        return all([result.scheme, result.netloc])
    except ValueError:
        return False


def fetch_menu(url: str, config: Optional[MenuConfig] = None) -> MenuNode:
    """
    Download a page and build a menu tree from its navigation.

    Args:
        url (str): The page to read the navigation from
        config (Optional[MenuConfig]): Configuration (timeouts, retries, selectors)

    Returns:
        MenuNode: The root of the imported menu

    Raises:
        ValueError: If the URL is invalid
        MenuImportError: If the page cannot be fetched or has no navigation
    """
    config = config or MenuConfig()
    if not is_valid_url(url):
        logger.error(f"Invalid URL provided: {url}")
        raise ValueError("Invalid URL provided")

    session = create_session(config)
    try:
        response = session.get(url, timeout=config.timeout, allow_redirects=True)
        response.raise_for_status()
    except requests.Timeout:
        logger.error(f"Timeout while fetching {url}")
        raise MenuImportError(f"Request timed out after {config.timeout} seconds")
    except requests.RequestException as e:
        logger.error(f"Request failed for {url}: {str(e)}")
        if getattr(e, "response", None) is not None:
            raise MenuImportError(f"Failed to fetch URL (HTTP {e.response.status_code})")
        raise MenuImportError(f"Failed to fetch URL: {str(e)}")
    finally:
        session.close()

    return menu_from_html(response.text, base_url=url, config=config)


def menu_from_html(
    html: str,
    base_url: Optional[str] = None,
    selectors: Optional[List[str]] = None,
    config: Optional[MenuConfig] = None,
) -> MenuNode:
    """
    Build a menu tree from the navigation block of an HTML page.

    The first element matching one of the selectors is used as the menu
    root. Its list items become menu items: the direct link of an <li>
    gives the label and URL, a nested <ul>/<ol> gives the children.

    Args:
        html (str): The page source
        base_url (Optional[str]): If set, links are made absolute against it
        selectors (Optional[List[str]]): CSS selectors tried in order, defaults to config.nav_selectors
        config (Optional[MenuConfig]): Configuration given to every node

    Returns:
        MenuNode: A label-less root node holding the imported items
    """
    config = config or MenuConfig()
    soup = BeautifulSoup(html, "html.parser")

    nav = None
    for selector in selectors or config.nav_selectors:
        nav = soup.select_one(selector)
        if nav:
            logger.debug(f"Menu root found with selector {selector!r}")
            break

    if nav is None:
        logger.error("No navigation found in page")
        raise MenuImportError("No navigation found in page")

    menu = MenuNode(config=config)
    item_list = nav if nav.name in ("ul", "ol") else nav.find(["ul", "ol"])
    if item_list is None:
        # Flat navigation: a sequence of links without list markup
        for link in nav.find_all("a"):
            menu.add_child(_node_from_link(link, base_url, config))
        return menu

    menu.set_children(_nodes_from_list(item_list, base_url, config))
    return menu


def _nodes_from_list(item_list: Tag, base_url: Optional[str], config: MenuConfig) -> List[MenuNode]:
    nodes = []
    for li in item_list.find_all("li", recursive=False):
        if _is_separator(li):
            nodes.append(MenuSeparator(config=config))
            continue

        sub_list = li.find(["ul", "ol"], recursive=False)
        link = li.find("a", recursive=False)
        if link is None:
            # Wrapped link, e.g. <li><span><a>..</a></span></li>
            candidate = li.find("a")
            if candidate is not None and not any(p is sub_list for p in candidate.parents):
                link = candidate

        if link is not None:
            node = _node_from_link(link, base_url, config)
        else:
            label = _own_text(li)
            node = MenuNode(label or None, config=config)

        if sub_list is not None:
            node.set_children(_nodes_from_list(sub_list, base_url, config))

        if "active" in (li.get("class") or []):
            node.enable()
        nodes.append(node)
    return nodes


def _node_from_link(link: Tag, base_url: Optional[str], config: MenuConfig) -> MenuNode:
    href = link.get("href")
    if href and base_url:
        href = urljoin(base_url, href)
    node = MenuNode(
        link.get_text().strip() or None,
        href or None,
        config=config,
        css_class=" ".join(link.get("class") or []) or None,
    )
    target = link.get("target")
    if target:
        node.add_style(TargetStyle(target))
    return node


def _is_separator(li: Tag) -> bool:
    classes = set(li.get("class") or [])
    if classes & SEPARATOR_CLASSES:
        return True
    return li.get("role") == "separator" or (not li.get_text().strip() and li.find("a") is None)


def _own_text(tag: Tag) -> str:
    """Text of the tag itself, without the text of nested lists."""
    parts = []
    for child in tag.children:
        if isinstance(child, Tag) and child.name in ("ul", "ol"):
            continue
        text = child.get_text() if isinstance(child, Tag) else str(child)
        parts.append(text.strip())
    return " ".join(p for p in parts if p)
