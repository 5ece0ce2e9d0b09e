import threading

import pytest
from unittest.mock import MagicMock

from nav_menu.config import MenuConfig
from nav_menu.interfaces import CallableCondition, CallableTranslation
from nav_menu.models import Menu, MenuNode, MenuSeparator
from nav_menu.request import RequestContext


@pytest.fixture
def config():
    return MenuConfig(root_url="/app/")


def item(label, priority=None, **kwargs):
    return MenuNode(label, priority=priority, **kwargs)


def labels(nodes):
    return [node.label for node in nodes]


def test_children_sorted_by_priority_then_insertion_order():
    """Items with a priority come first; ties and unprioritized items keep insertion order."""
    p3a = item("p3a", 3)
    n_a = item("n_a")
    p1 = item("p1", 1)
    p3b = item("p3b", 3)
    n_b = item("n_b")
    menu = Menu(children=[p3a, n_a, p1, p3b, n_b])

    assert menu.get_children() == [p1, p3a, p3b, n_a, n_b]


def test_zero_priority_is_a_priority():
    """A priority of 0 must not be mistaken for a missing priority."""
    menu = Menu(children=[item("none"), item("zero", 0), item("negative", -1.5)])
    assert labels(menu.get_children()) == ["negative", "zero", "none"]


def test_add_child_invalidates_sort_cache():
    menu = Menu(children=[item("b", 2), item("c")])
    assert labels(menu.get_children()) == ["b", "c"]

    menu.add_child(item("a", 1))
    assert labels(menu.get_children()) == ["a", "b", "c"]

    menu.add_child(item("d"))
    assert labels(menu.get_children()) == ["a", "b", "c", "d"]


def test_set_children_invalidates_sort_cache():
    menu = Menu(children=[item("x", 1)])
    menu.get_children()

    menu.set_children([item("z"), item("y", 5)])
    assert labels(menu.get_children()) == ["y", "z"]

    menu.children = [item("w", 2), item("v", 1)]
    assert labels(menu.children) == ["v", "w"]


def test_get_children_is_idempotent():
    menu = Menu(children=[item("c", 3), item("a", 1), item("n"), item("b", 2)])
    first = menu.get_children()
    second = menu.get_children()

    assert first == second
    assert all(a is b for a, b in zip(first, second))


def test_get_children_returns_a_copy():
    """Mutating the returned list must not bypass cache invalidation."""
    menu = Menu(children=[item("a", 1)])
    menu.get_children().append(item("intruder"))
    assert labels(menu.get_children()) == ["a"]


def test_concurrent_readers_and_writer():
    """Readers sorting the children while another thread adds some see no lost or duplicated items."""
    menu = Menu(children=[item(f"seed{i}", i % 3) for i in range(10)])
    added = [item(f"added{i}", (i * 7) % 5 if i % 4 else None) for i in range(200)]
    errors = []
    start = threading.Barrier(5)

    def read():
        start.wait()
        try:
            for _ in range(200):
                children = menu.get_children()
                assert len(children) == len(set(map(id, children)))
        except Exception as e:
            errors.append(e)

    def write():
        start.wait()
        try:
            for child in added:
                menu.add_child(child)
        except Exception as e:
            errors.append(e)

    threads = [threading.Thread(target=read) for _ in range(4)]
    threads.append(threading.Thread(target=write))
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    children = menu.get_children()
    assert len(children) == 210
    assert len({id(child) for child in children}) == 210
    assert all(any(child is c for c in children) for child in added)
    prioritized = [c.priority for c in children if c.priority is not None]
    assert prioritized == sorted(prioritized)
    assert all(c.priority is None for c in children[len(prioritized):])

    expected = Menu(children=[item(f"seed{i}", i % 3) for i in range(10)] + added)
    assert labels(children) == labels(expected.get_children())


def test_empty_children():
    menu = Menu()
    assert menu.get_children() == []
    assert menu.children == ()
    assert not menu.has_children()


def test_walk_is_depth_first_in_display_order():
    child = item("child", children=[item("leaf2", 2), item("leaf1", 1)])
    menu = Menu(children=[item("last"), child])
    child.priority = 1

    walked = [(depth, node.label) for depth, node in menu.walk()]
    assert walked == [
        (0, None),
        (1, "child"),
        (2, "leaf1"),
        (2, "leaf2"),
        (1, "last"),
    ]


def test_hidden_defaults_to_false():
    assert MenuNode("Home", "/").is_hidden() is False


def test_hidden_follows_display_condition_on_each_call():
    state = {"ok": True}
    node = MenuNode("Admin", "admin", display_condition=CallableCondition(lambda: state["ok"]))

    assert node.is_hidden() is False
    state["ok"] = False
    assert node.is_hidden() is True


def test_hidden_with_condition_object():
    condition = MagicMock()
    condition.is_ok.return_value = False
    node = MenuNode("Secret", display_condition=condition)

    assert node.is_hidden() is True
    assert node.is_hidden() is True
    assert condition.is_ok.call_count == 2


def test_label_translation():
    node = MenuNode("menu.home", translation_service=CallableTranslation(str.upper))
    assert node.get_label() == "MENU.HOME"
    assert node.label == "menu.home"


def test_label_without_translation_or_label():
    assert MenuNode("Home").get_label() == "Home"
    translator = MagicMock()
    assert MenuNode(translation_service=translator).get_label() is None
    translator.translate.assert_not_called()


@pytest.mark.parametrize("url, expected", [
    ("http://x", "http://x"),
    ("https://example.com/page", "https://example.com/page"),
    ("/absolute", "/absolute"),
    ("javascript:void(0)", "javascript:void(0)"),
    ("?tab=2", "?tab=2"),
    ("#anchor", "#anchor"),
    ("sub", "/app/sub"),
    ("sub/page.php", "/app/sub/page.php"),
])
def test_link_resolution_prefixes(config, url, expected):
    assert MenuNode("L", url, config=config).get_link() == expected


def test_root_url_argument_overrides_config(config):
    node = MenuNode("L", "sub", root_url="/other/", config=config)
    assert node.get_link() == "/other/sub"


def test_default_root_url():
    assert MenuNode("L", "sub").get_link() == "/sub"


@pytest.mark.parametrize("url", [None, ""])
def test_link_is_none_when_not_a_link(url):
    assert MenuNode("Container", url).get_link(RequestContext.from_url("/?a=1")) is None


def test_propagated_parameters_order_and_encoding():
    node = MenuNode("P", "/p", propagated_url_parameters=["a", "b"])
    request = RequestContext(url="/current", params={"b": "x y", "a": "1"})

    assert node.get_link(request) == "/p?a=1&b=x%20y"


def test_propagated_parameters_appended_to_existing_query():
    node = MenuNode("P", "/p?mode=1", propagated_url_parameters=["lang"])
    request = RequestContext.from_url("/current?lang=fr&other=2")

    assert node.get_link(request) == "/p?mode=1&lang=fr"


def test_missing_propagated_parameters_are_skipped():
    node = MenuNode("P", "list", propagated_url_parameters=["missing", "page"], root_url="/app/")
    request = RequestContext(params={"page": "3"})
    assert node.get_link(request) == "/app/list?page=3"

    assert node.get_link(RequestContext()) == "/app/list"
    assert node.get_link() == "/app/list"


def test_propagated_parameter_values_are_fully_encoded():
    node = MenuNode("P", "/p", propagated_url_parameters=["q"])
    request = RequestContext(params={"q": "a&b=c/d"})
    assert node.get_link(request) == "/p?q=a%26b%3Dc%2Fd"


def test_active_override_wins():
    node = MenuNode("Home", "/home", is_active=True)
    assert node.activate_based_on_url is True
    assert node.is_active(RequestContext.from_url("/somewhere/else")) is True


def test_enable_sets_active_override():
    node = MenuNode("Home", "/home")
    assert node.enable() is node
    assert node.is_active(RequestContext.from_url("/elsewhere"))


@pytest.mark.parametrize("request_url, expected", [
    ("/foo", True),
    ("/foo?x=1#frag", True),
    ("/foo#frag", True),
    ("http://example.com/foo?x=1", True),
    ("/foo/bar", False),
    ("/fo", False),
    ("/", False),
])
def test_active_compares_paths_only(request_url, expected):
    node = MenuNode("Foo", "/foo")
    assert node.is_active(RequestContext.from_url(request_url)) is expected


def test_active_ignores_propagated_parameters():
    node = MenuNode("Foo", "/foo", propagated_url_parameters=["x"])
    assert node.is_active(RequestContext.from_url("/foo?x=1")) is True


def test_active_with_relative_url(config):
    node = MenuNode("Sub", "sub", config=config)
    assert node.is_active(RequestContext.from_url("/app/sub?page=2")) is True
    assert node.is_active(RequestContext.from_url("/sub")) is False


def test_active_with_absolute_url_compares_path():
    node = MenuNode("Docs", "https://example.com/docs")
    assert node.is_active(RequestContext.from_url("/docs")) is True


def test_not_active_when_url_matching_disabled():
    node = MenuNode("Foo", "/foo", activate_based_on_url=False)
    assert node.is_active(RequestContext.from_url("/foo")) is False


def test_not_active_without_url():
    assert MenuNode("Container").is_active(RequestContext.from_url("/")) is False


def test_opaque_and_malformed_urls_default_to_root_path():
    """Unresolvable paths count as "/" and never raise."""
    js = MenuNode("JS", "javascript:void(0)")
    assert js.is_active(RequestContext.from_url("/")) is True
    assert js.is_active(RequestContext.from_url("/page")) is False

    broken = MenuNode("Broken", "http://[::1")
    assert broken.is_active(RequestContext(url="http://[bad")) is True
    assert broken.is_active(RequestContext(url="/page")) is False


def test_active_without_request_uses_root_path():
    assert MenuNode("Home", "/").is_active() is True
    assert MenuNode("Foo", "/foo").is_active() is False


def test_separator():
    separator = MenuSeparator()
    assert separator.is_separator() is True
    assert separator.get_label() is None
    assert separator.get_link() is None
    assert separator.is_active(RequestContext.from_url("/")) is False
    assert MenuNode("Item", "/").is_separator() is False


def test_plain_accessors():
    node = MenuNode("Item", "page", css_class="nav-item", priority=2.5, is_extended=True)
    assert node.get_url() == "page"
    assert node.get_css_class() == "nav-item"
    assert node.get_priority() == 2.5
    assert node.is_extended is True
    assert MenuNode("Item").is_extended is None
