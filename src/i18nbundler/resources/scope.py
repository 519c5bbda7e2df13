"""Scope hierarchy: Aspect, BladeSet and Blade.

Scopes form a strict three-level tree. Each scope may own resource files;
more specific scopes override same-key entries from their ancestors.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass

from i18nbundler.enums import ScopeLevel

__all__ = ["Scope"]

_EXPECTED_PARENT: dict[ScopeLevel, ScopeLevel | None] = {
    ScopeLevel.ASPECT: None,
    ScopeLevel.BLADESET: ScopeLevel.ASPECT,
    ScopeLevel.BLADE: ScopeLevel.BLADESET,
}


@dataclass(frozen=True, slots=True)
class Scope:
    """A node in the Aspect -> BladeSet -> Blade hierarchy.

    Use the ``aspect()`` factory and the ``bladeset()`` / ``blade()`` child
    builders rather than wiring parents by hand.

    Attributes:
        name: Scope name, unique among siblings
        level: Nesting level
        parent: Parent scope (None for an aspect)
        i18n: Whether the scope declares i18n support
        directory: Directory of the scope, relative to the loader root.
            Defaults to the scope path (e.g. ``default/orders/grid``).

    Example:
        >>> app = Scope.aspect("default")
        >>> grid = app.bladeset("orders").blade("grid")
        >>> grid.qualified_name
        'default.orders.grid'
        >>> [s.level.value for s in grid.lineage()]
        ['aspect', 'bladeset', 'blade']
    """

    name: str
    level: ScopeLevel
    parent: Scope | None = None
    i18n: bool = True
    directory: str | None = None

    def __post_init__(self) -> None:
        """Validate name and level/parent relationship.

        Raises:
            ValueError: If the name is empty or contains '.' or '/', or if the
                parent level does not match the hierarchy.
        """
        if not self.name or "." in self.name or "/" in self.name or "\\" in self.name:
            msg = f"Invalid scope name: {self.name!r}"
            raise ValueError(msg)

        expected = _EXPECTED_PARENT[self.level]
        actual = self.parent.level if self.parent is not None else None
        if actual != expected:
            msg = (
                f"A {self.level} scope requires a parent of level {expected}, "
                f"got {actual} for scope '{self.name}'"
            )
            raise ValueError(msg)

    @classmethod
    def aspect(cls, name: str, *, i18n: bool = True, directory: str | None = None) -> Scope:
        """Create a root aspect scope."""
        return cls(name, ScopeLevel.ASPECT, i18n=i18n, directory=directory)

    def bladeset(self, name: str, *, i18n: bool = True, directory: str | None = None) -> Scope:
        """Create a bladeset under this aspect."""
        return Scope(name, ScopeLevel.BLADESET, self, i18n=i18n, directory=directory)

    def blade(self, name: str, *, i18n: bool = True, directory: str | None = None) -> Scope:
        """Create a blade under this bladeset."""
        return Scope(name, ScopeLevel.BLADE, self, i18n=i18n, directory=directory)

    def lineage(self) -> tuple[Scope, ...]:
        """Return this scope and its ancestors, root first."""
        chain: list[Scope] = []
        node: Scope | None = self
        while node is not None:
            chain.append(node)
            node = node.parent
        return tuple(reversed(chain))

    @property
    def path(self) -> tuple[str, ...]:
        """Scope names from the root down to this scope."""
        return tuple(scope.name for scope in self.lineage())

    @property
    def qualified_name(self) -> str:
        """Dotted scope path (e.g. 'default.orders.grid')."""
        return ".".join(self.path)

    @property
    def relative_dir(self) -> str:
        """Directory of the scope relative to the loader root."""
        if self.directory is not None:
            return self.directory
        return "/".join(self.path)

    def is_ancestor_of(self, other: Scope) -> bool:
        """True if this scope is ``other`` or one of its ancestors."""
        return self in other.lineage()

    def __repr__(self) -> str:
        return f"Scope({self.qualified_name!r}, {self.level.value})"
