from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any, Callable, Collection

COLLECTIONS: tuple[str, ...] = ("list", "set", "dict")

DEFAULT_SIZE = 100
DEFAULT_KEY = "55"

_MISSING = object()


class UnknownScenarioError(KeyError):
    """Raised when a toggle scenario name is not in the catalog."""

    def __init__(self, name: str, known: Collection[str]) -> None:
        super().__init__(name)
        self.name = name
        self.known = tuple(known)

    def __str__(self) -> str:
        return f"unknown toggle scenario {self.name!r}; expected one of: {', '.join(self.known)}"


def toggle_list(items: list, key: Any) -> None:
    items.remove(key) if key in items else items.append(key)


def toggle_set(items: set, key: Any) -> None:
    items.remove(key) if key in items else items.add(key)


def toggle_set_xor(items: set, key: Any) -> None:
    items.symmetric_difference_update({key})


def toggle_set_eafp(items: set, key: Any) -> None:
    try:
        items.remove(key)
    except KeyError:
        items.add(key)


def toggle_dict(items: dict, key: Any) -> None:
    if key in items:
        del items[key]
    else:
        items[key] = None


def toggle_dict_pop(items: dict, key: Any) -> None:
    if items.pop(key, _MISSING) is _MISSING:
        items[key] = None


def is_member(container: Any, key: Any) -> bool:
    return key in container


def _keys(size: int) -> list[str]:
    if size < 0:
        raise ValueError(f"container size must be >= 0, got {size}")
    return [str(value) for value in range(size)]


FACTORIES: dict[str, Callable[[int], Any]] = {
    "list": _keys,
    "set": lambda size: set(_keys(size)),
    "dict": lambda size: dict.fromkeys(_keys(size)),
}


@dataclass(frozen=True)
class ToggleScenario:
    name: str
    collection: str
    description: str
    toggle: Callable[[Any, Any], None]

    def build(self, size: int = DEFAULT_SIZE, key: Any = None, present: bool = False) -> Any:
        """Create a container of ``size`` string keys, forcing ``key`` in or out."""
        container = FACTORIES[self.collection](size)
        if key is not None and is_member(container, key) != present:
            self.toggle(container, key)
        return container

    def bind(self, container: Any, key: Any = DEFAULT_KEY) -> Callable[[], None]:
        return functools.partial(self.toggle, container, key)


SCENARIOS: tuple[ToggleScenario, ...] = (
    ToggleScenario("list", "list", "remove if present, else append", toggle_list),
    ToggleScenario("set", "set", "remove if present, else add", toggle_set),
    ToggleScenario("set-xor", "set", "symmetric difference update", toggle_set_xor),
    ToggleScenario("set-eafp", "set", "remove, add on KeyError", toggle_set_eafp),
    ToggleScenario("dict", "dict", "del if present, else assign", toggle_dict),
    ToggleScenario("dict-pop", "dict", "pop with sentinel, assign when absent", toggle_dict_pop),
)


def build_scenarios() -> list[ToggleScenario]:
    return list(SCENARIOS)


def scenario_names() -> list[str]:
    return [scenario.name for scenario in SCENARIOS]


def get_scenario(name: str) -> ToggleScenario:
    for scenario in SCENARIOS:
        if scenario.name == name:
            return scenario
    raise UnknownScenarioError(name, scenario_names())


__all__ = [
    "COLLECTIONS",
    "DEFAULT_KEY",
    "DEFAULT_SIZE",
    "ToggleScenario",
    "UnknownScenarioError",
    "build_scenarios",
    "get_scenario",
    "is_member",
    "scenario_names",
]
