#!/usr/bin/env python3
import click
import logging
import sys
from pathlib import Path
from typing import Optional

from .config import MenuConfig
from .importers import fetch_menu, menu_from_html
from .loader import load_menu, save_menu
from .models import MenuNode
from .request import RequestContext


def setup_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity level."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def format_node(node: MenuNode, depth: int, request: RequestContext) -> str:
    """One line of the tree listing: markers, label and resolved link."""
    indent = "  " * depth
    if node.is_separator():
        return f"{indent}----"

    markers = ""
    markers += "*" if node.is_active(request) else " "
    markers += "+" if node.is_extended else " "
    markers += "h" if node.is_hidden() else " "

    line = f"{indent}[{markers}] {node.get_label() or '(no label)'}"
    link = node.get_link(request)
    if link:
        line += f" -> {link}"
    if node.priority is not None:
        line += f" (priority {node.priority:g})"
    return line


@click.group()
def cli():
    """Nav Menu CLI - inspect and import navigation menu trees."""
    pass


@cli.command()
@click.argument("menu_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "-u", "--request-url", default="/", help="Current request URI used for active state and parameters"
)
@click.option("-r", "--root-url", default="/", help="Root URL prepended to relative links")
@click.option("-a", "--all", "show_all", is_flag=True, help="Also show hidden items")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
def show(menu_file: str, request_url: str, root_url: str, show_all: bool, verbose: bool):
    """Print the menu tree stored in MENU_FILE as seen from a request."""
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        config = MenuConfig(root_url=root_url)
        menu = load_menu(menu_file, config)
        request = RequestContext.from_url(request_url)

        for depth, node in _visible_nodes(menu, show_all):
            click.echo(format_node(node, depth, request))
        return 0

    except Exception as e:
        logger.error(f"Failed to show menu: {str(e)}")
        return 1


@cli.command(name="import")
@click.argument("source")
@click.option(
    "-o", "--output", default="menu.json", help="JSON file the imported menu is written to"
)
@click.option("-s", "--selector", multiple=True, help="CSS selector of the menu root (repeatable)")
@click.option("-b", "--base-url", default=None, help="Base URL for links of a local HTML file")
@click.option("-t", "--timeout", default=60, help="Timeout for requests in seconds")
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
def import_menu(
    source: str,
    output: str,
    selector: tuple,
    base_url: Optional[str],
    timeout: int,
    verbose: bool,
):
    """Build a menu from the navigation of SOURCE (a URL or an HTML file)."""
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        config = MenuConfig(timeout=timeout)
        if selector:
            config.nav_selectors = list(selector)

        if source.startswith(("http://", "https://")):
            click.echo(f"Fetching menu from {source}...")
            menu = fetch_menu(source, config)
        else:
            html = Path(source).read_text(encoding="utf-8")
            menu = menu_from_html(html, base_url=base_url, config=config)

        save_menu(menu, output)
        count = sum(1 for _ in menu.walk()) - 1
        click.echo(f"Imported {count} menu items into {output}")
        return 0

    except Exception as e:
        logger.error(f"Failed to import menu: {str(e)}")
        return 1


def _visible_nodes(menu: MenuNode, show_all: bool):
    """Walk the tree below the root, pruning hidden branches unless show_all."""

    def visit(node: MenuNode, depth: int):
        for child in node.get_children():
            if child.is_hidden() and not show_all:
                continue
            yield depth, child
            yield from visit(child, depth + 1)

    return visit(menu, 0)


def main():
    return cli(standalone_mode=False) or 0


if __name__ == "__main__":
    sys.exit(main())
