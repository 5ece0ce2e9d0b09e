from dataclasses import dataclass, field
from typing import Dict, Optional
from urllib.parse import parse_qsl, urlparse

from .utils import extract_path


@dataclass
class RequestContext:
    """
    The parts of the current request a menu needs.

    url is the request URI as received (path plus optional query string and
    fragment); params holds the request parameters by name.
    """

    url: str = "/"
    params: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_url(cls, url: str, params: Optional[Dict[str, str]] = None) -> "RequestContext":
        """
        Build a context from a request URI, reading params from its query string.

        When a parameter is repeated the last value wins. Explicit params
        override the ones found in the query string.
        """
        query_params: Dict[str, str] = {}
        try:
            query = urlparse(url).query
        except ValueError:
            query = ""
        for name, value in parse_qsl(query, keep_blank_values=True):
            query_params[name] = value
        if params:
            query_params.update(params)
        return cls(url=url, params=query_params)

    @property
    def path(self) -> str:
        """Path component of the request URI, "/" when it cannot be determined."""
        return extract_path(self.url)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self.params.get(name, default)

    def __contains__(self, name: str) -> bool:
        return name in self.params
