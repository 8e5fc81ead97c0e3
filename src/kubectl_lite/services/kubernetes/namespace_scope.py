"""Namespace targeting derived from the -n / -A flags."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class ScopeKind(StrEnum):
    ALL = "all"
    DEFAULT = "default"
    NAMED = "named"


@dataclass(frozen=True)
class NamespaceScope:
    """Which namespace(s) a command targets.

    ``ALL`` lists across every namespace and shows the NAMESPACE column,
    ``DEFAULT`` means the active context's namespace and ``NAMED`` carries
    an explicit namespace.
    """

    kind: ScopeKind
    namespace: str | None = None

    @classmethod
    def all(cls) -> NamespaceScope:
        return cls(ScopeKind.ALL)

    @classmethod
    def default(cls) -> NamespaceScope:
        return cls(ScopeKind.DEFAULT)

    @classmethod
    def named(cls, namespace: str) -> NamespaceScope:
        return cls(ScopeKind.NAMED, namespace)

    @classmethod
    def derive(cls, all_namespaces: bool, namespace: str | None) -> NamespaceScope:
        """Derive the scope from CLI flags; --all-namespaces wins over --namespace."""
        if all_namespaces:
            return cls.all()
        if namespace:
            return cls.named(namespace)
        return cls.default()

    @property
    def show_namespace_column(self) -> bool:
        return self.kind is ScopeKind.ALL

    def resolve(self, default_namespace: str) -> str | None:
        """Concrete namespace for a request, or None for a cross-namespace list."""
        if self.kind is ScopeKind.ALL:
            return None
        if self.kind is ScopeKind.NAMED:
            return self.namespace
        return default_namespace

    def __str__(self) -> str:
        if self.kind is ScopeKind.NAMED:
            return f"Named({self.namespace})"
        return self.kind.name.title()
