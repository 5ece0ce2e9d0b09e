"""
Capabilities a menu consumes from the outside world.

A display condition decides whether a node is shown; a translation service
turns a label into a localized string. Anything with the right method
works, the small adapters below wrap plain callables.
"""
from typing import Callable, Protocol, runtime_checkable


@runtime_checkable
class DisplayCondition(Protocol):
    def is_ok(self) -> bool:
        ...


@runtime_checkable
class TranslationService(Protocol):
    def translate(self, text: str) -> str:
        ...


class CallableCondition:
    """Display condition backed by a zero-argument predicate."""

    def __init__(self, predicate: Callable[[], bool]):
        self.predicate = predicate

    def is_ok(self) -> bool:
        return bool(self.predicate())

    def __repr__(self):
        return f"CallableCondition({self.predicate!r})"


class CallableTranslation:
    """Translation service backed by a function such as gettext."""

    def __init__(self, func: Callable[[str], str]):
        self.func = func

    def translate(self, text: str) -> str:
        return self.func(text)

    def __repr__(self):
        return f"CallableTranslation({self.func!r})"
