"""WordPress-like actions and filters around template rendering.

Actions run callbacks for their side effects; filters pass a value through
each callback in turn and return the result. Callbacks may be plain
functions or coroutines, and run in ascending priority order.

    from calendula.lib.hooks import filter, TEMPLATE_CONTEXT

    @filter(TEMPLATE_CONTEXT)
    async def add_today(context, template):
        context["today"] = date.today()
        return context
"""

import asyncio
from collections import defaultdict
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

T = TypeVar("T")

DEFAULT_PRIORITY = 10


@dataclass(order=True)
class HookHandler:
    priority: int
    callback: Callable = field(compare=False)

    async def call(self, *args: Any, **kwargs: Any) -> Any:
        result = self.callback(*args, **kwargs)
        if asyncio.iscoroutine(result):
            return await result
        return result


class HookRegistry:
    """Actions and filters, keyed by hook name."""

    def __init__(self) -> None:
        self._actions: dict[str, list[HookHandler]] = defaultdict(list)
        self._filters: dict[str, list[HookHandler]] = defaultdict(list)

    @staticmethod
    def _add(table: dict[str, list[HookHandler]], hook_name: str, callback: Callable, priority: int) -> None:
        # Stable sort keeps registration order within a priority
        table[hook_name].append(HookHandler(priority=priority, callback=callback))
        table[hook_name].sort()

    @staticmethod
    def _remove(table: dict[str, list[HookHandler]], hook_name: str, callback: Callable) -> bool:
        handlers = table.get(hook_name, [])
        for i, handler in enumerate(handlers):
            if handler.callback is callback:
                del handlers[i]
                return True
        return False

    def add_action(self, hook_name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        self._add(self._actions, hook_name, callback, priority)

    def add_filter(self, hook_name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
        self._add(self._filters, hook_name, callback, priority)

    def remove_action(self, hook_name: str, callback: Callable[..., Any]) -> bool:
        """Remove an action callback. Returns True if it was registered."""
        return self._remove(self._actions, hook_name, callback)

    def remove_filter(self, hook_name: str, callback: Callable[..., Any]) -> bool:
        """Remove a filter callback. Returns True if it was registered."""
        return self._remove(self._filters, hook_name, callback)

    def has_action(self, hook_name: str) -> bool:
        return bool(self._actions.get(hook_name))

    def has_filter(self, hook_name: str) -> bool:
        return bool(self._filters.get(hook_name))

    async def do_action(self, hook_name: str, *args: Any, **kwargs: Any) -> None:
        for handler in list(self._actions.get(hook_name, [])):
            await handler.call(*args, **kwargs)

    async def apply_filters(self, hook_name: str, value: T, *args: Any, **kwargs: Any) -> T:
        """Pass ``value`` through every filter registered for ``hook_name``."""
        for handler in list(self._filters.get(hook_name, [])):
            value = await handler.call(value, *args, **kwargs)
        return value

    def clear(self) -> None:
        """Clear all registered hooks. Useful for testing."""
        self._actions.clear()
        self._filters.clear()


# Global singleton registry
hooks = HookRegistry()


def add_action(hook_name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
    hooks.add_action(hook_name, callback, priority)


def add_filter(hook_name: str, callback: Callable[..., Any], priority: int = DEFAULT_PRIORITY) -> None:
    hooks.add_filter(hook_name, callback, priority)


async def do_action(hook_name: str, *args: Any, **kwargs: Any) -> None:
    await hooks.do_action(hook_name, *args, **kwargs)


async def apply_filters(hook_name: str, value: T, *args: Any, **kwargs: Any) -> T:
    return await hooks.apply_filters(hook_name, value, *args, **kwargs)


def action(hook_name: str, priority: int = DEFAULT_PRIORITY) -> Callable[[Callable], Callable]:
    """Decorator registering a function as an action handler."""

    def decorator(func: Callable) -> Callable:
        hooks.add_action(hook_name, func, priority)
        return func

    return decorator


def filter(hook_name: str, priority: int = DEFAULT_PRIORITY) -> Callable[[Callable], Callable]:
    """Decorator registering a function as a filter handler."""

    def decorator(func: Callable) -> Callable:
        hooks.add_filter(hook_name, func, priority)
        return func

    return decorator


# Filters
TEMPLATE_CONTEXT = "template_context"
TEMPLATE_HTML = "template_html"

# Actions
BEFORE_TEMPLATE_RENDER = "before_template_render"
AFTER_TEMPLATE_RENDER = "after_template_render"
