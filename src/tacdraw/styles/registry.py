"""
Style registry for tacdraw.

Maps symbol identifiers to generator functions. Generator modules tag
their functions with @style(...); a registry loads tagged functions from
whole modules, rejects duplicate identifiers and is frozen once built.
"""

import importlib
from types import MappingProxyType

from tacdraw.errors import ConflictingDefinition
from tacdraw.tracer import get_tracer

# Modules providing the built-in generators
GENERATOR_MODULES = (
    "tacdraw.styles.obstacles",
    "tacdraw.styles.tasks",
)


def style(*identifiers):
    """
    Mark a function as the generator for one or more symbol identifiers.

    Only tags the function; registration happens when a registry loads
    the defining module.
    """
    if not identifiers:
        raise ValueError("style() needs at least one identifier")

    def decorator(func):
        func.style_identifiers = tuple(getattr(func, "style_identifiers", ())) + identifiers
        return func
    return decorator


class StyleRegistry:
    """Identifier -> generator table."""

    def __init__(self):
        self._generators = {}
        self._frozen = False

    def register(self, identifier, generator):
        if self._frozen:
            raise RuntimeError(f"registry is frozen, cannot register {identifier!r}")
        if identifier in self._generators:
            existing = self._generators[identifier]
            raise ConflictingDefinition(
                f"{identifier!r} is claimed by both {_qualname(existing)} and {_qualname(generator)}"
            )
        self._generators[identifier] = generator

    def load(self, module):
        """
        Register every tagged generator defined in module.

        Functions a module merely imports from elsewhere are skipped.
        Returns the number of identifiers registered.
        """
        count = 0
        for obj in list(vars(module).values()):
            identifiers = getattr(obj, "style_identifiers", None)
            if not identifiers or getattr(obj, "__module__", None) != module.__name__:
                continue
            for identifier in identifiers:
                self.register(identifier, obj)
                count += 1
        return count

    def freeze(self):
        self._frozen = True
        self._generators = MappingProxyType(dict(self._generators))
        return self

    @property
    def frozen(self):
        return self._frozen

    def lookup(self, identifier):
        """Generator for identifier, or None when nothing is registered."""
        return self._generators.get(identifier)

    def identifiers(self):
        return sorted(self._generators)

    def __contains__(self, identifier):
        return identifier in self._generators

    def __len__(self):
        return len(self._generators)


def build_registry(module_names=GENERATOR_MODULES):
    """Load generator modules into a new frozen registry."""
    tracer = get_tracer()

    registry = StyleRegistry()
    for name in module_names:
        count = registry.load(importlib.import_module(name))
        tracer.event(f"Loaded {count} styles from {name}", level="DEBUG")

    return registry.freeze()


def _qualname(func):
    return f"{getattr(func, '__module__', '?')}.{getattr(func, '__qualname__', repr(func))}"
