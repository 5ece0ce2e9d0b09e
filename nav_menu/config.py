from dataclasses import dataclass, field
from typing import List


DEFAULT_RESERVED_PREFIXES = ["/", "javascript:", "http://", "https://", "?", "#"]


@dataclass
class MenuConfig:
    """Configuration shared by the menu nodes of one tree."""

    root_url: str = "/"
    default_path: str = "/"
    # URLs starting with one of these are used as-is instead of being joined to root_url
    reserved_prefixes: List[str] = field(
        default_factory=lambda: list(DEFAULT_RESERVED_PREFIXES)
    )
    timeout: int = 60
    retry_count: int = 3
    retry_delay: int = 2
    user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )
    # Checked in order when importing a menu from an HTML page
    nav_selectors: List[str] = field(
        default_factory=lambda: [
            'nav[role="navigation"]',
            ".sidebar-menu",
            ".docs-menu",
            ".navbar-nav",
            ".nav-tree",
            ".main-nav",
            ".menu",
            "nav",
        ]
    )

    def __post_init__(self):
        if self.reserved_prefixes is None:
            self.reserved_prefixes = list(DEFAULT_RESERVED_PREFIXES)
        if self.nav_selectors is None:
            self.nav_selectors = ["nav", ".menu"]
        if not self.root_url:
            self.root_url = ""
