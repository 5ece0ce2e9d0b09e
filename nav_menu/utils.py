import logging
from typing import Iterable, List, Optional, Tuple
from urllib.parse import quote, urlparse

logger = logging.getLogger(__name__)

# Schemes whose URLs carry a meaningful path component
HIERARCHICAL_SCHEMES = ("", "http", "https")


def has_reserved_prefix(url: str, prefixes: Iterable[str]) -> bool:
    """Return True if the URL starts with any of the given prefixes."""
    return any(url.startswith(prefix) for prefix in prefixes)


def resolve_url(url: str, root_url: str, prefixes: Iterable[str]) -> str:
    """
    Resolve a possibly-relative menu URL.

    Args:
        url (str): The raw URL
        root_url (str): Prefix used for relative URLs
        prefixes (Iterable[str]): URLs starting with one of these are kept verbatim

    Returns:
        str: The URL as-is, or root_url + url
    """
    if has_reserved_prefix(url, prefixes):
        return url
    return f"{root_url or ''}{url}"


def extract_path(url: Optional[str], default: str = "/") -> str:
    """
    Extract the path component of a URL, ignoring scheme, host, query and fragment.

    Opaque targets (javascript:, mailto:...) and unparsable URLs have no path
    and give back the default.
    """
    if not url:
        return default
    try:
        parsed = urlparse(url)
    except ValueError as e:
        logger.debug(f"Could not parse URL {url!r}: {str(e)}")
        return default

    if parsed.scheme not in HIERARCHICAL_SCHEMES:
        return default
    return parsed.path or default


def append_query(link: str, params: List[Tuple[str, str]]) -> str:
    """
    Append already-ordered query parameters to a link.

    Values are percent-encoded (a space becomes %20). The separator is "?"
    unless the link already has a query string.
    """
    if not params:
        return link
    separator = "&" if "?" in link else "?"
    query = "&".join(
        f"{quote(str(name), safe='')}={quote(str(value), safe='')}"
        for name, value in params
    )
    return f"{link}{separator}{query}"
