"""Symbol table for PHP name resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from phpreflect.domain.model.import_ import ImportKind

if TYPE_CHECKING:
    from phpreflect.domain.model.import_ import UseImport

# Names that are never rewritten by namespace rules
SPECIAL_CLASS_NAMES = frozenset({"self", "static", "parent"})


@dataclass(slots=True)
class SymbolTable:
    """Tracks `use` imports of one namespace block.

    Mutable - filled during discovery.

    Handles:
    - use A\\B;              (class alias B)
    - use A\\B as C;         (class alias C)
    - use function A\\f;     (function alias f)
    - use const A\\X;        (constant alias X)
    - use A\\{B, C as D};    (group imports)

    Class and function aliases are case-insensitive, constant aliases are
    case-sensitive, as in PHP.

    Attributes:
        namespace: Current namespace, "" for global
        _classes: lowercase alias → fully qualified class name
        _functions: lowercase alias → fully qualified function name
        _constants: alias → fully qualified constant name
        _imports: All registered imports in declaration order
    """

    namespace: str = ""
    _classes: dict[str, str] = field(default_factory=dict)
    _functions: dict[str, str] = field(default_factory=dict)
    _constants: dict[str, str] = field(default_factory=dict)
    _imports: list[UseImport] = field(default_factory=list)

    def add_import(self, imp: UseImport) -> None:
        """Register import in symbol table.

        Args:
            imp: Import to register
        """
        match imp.kind:
            case ImportKind.CLASS:
                self._classes[imp.alias.lower()] = imp.name
            case ImportKind.FUNCTION:
                self._functions[imp.alias.lower()] = imp.name
            case ImportKind.CONSTANT:
                self._constants[imp.alias] = imp.name
        self._imports.append(imp)

    def resolve_class(self, name: str) -> str:
        """Resolve a class reference to its fully qualified name.

        Args:
            name: Name as written in source

        Returns:
            Fully qualified name without leading backslash. `self`, `static`
            and `parent` are returned lowercased and unresolved.
        """
        # FAIL-FIRST: empty name
        if not name:
            raise ValueError("name must not be empty")

        if name.lower() in SPECIAL_CLASS_NAMES:
            return name.lower()

        # 1. Fully qualified: \A\B
        if name.startswith("\\"):
            return name[1:]

        # 2. Relative to current namespace: namespace\A
        if name.lower().startswith("namespace\\"):
            return self._prefix(name[len("namespace\\") :])

        # 3. First segment may be an alias: Alias\Rest
        first, sep, rest = name.partition("\\")
        target = self._classes.get(first.lower())
        if target is not None:
            return f"{target}{sep}{rest}"

        # 4. Otherwise relative to the current namespace
        return self._prefix(name)

    def function_candidates(self, name: str) -> tuple[str, ...]:
        """Possible fully qualified names for a function call, in lookup order."""
        return self._candidates(name, self._functions.get(name.lower()))

    def constant_candidates(self, name: str) -> tuple[str, ...]:
        """Possible fully qualified names for a constant fetch, in lookup order."""
        return self._candidates(name, self._constants.get(name))

    def _candidates(self, name: str, alias_target: str | None) -> tuple[str, ...]:
        """Apply PHP's function/constant rules: qualified names resolve like
        classes, unqualified names try the namespace first then fall back to
        the global name.
        """
        if not name:
            raise ValueError("name must not be empty")

        if name.startswith("\\"):
            return (name[1:],)

        if "\\" in name:
            return (self.resolve_class(name),)

        if alias_target is not None:
            return (alias_target,)

        if not self.namespace:
            return (name,)
        return (f"{self.namespace}\\{name}", name)

    def _prefix(self, name: str) -> str:
        """Prefix name with the current namespace."""
        if not self.namespace:
            return name
        return f"{self.namespace}\\{name}"

    @property
    def imports(self) -> tuple[UseImport, ...]:
        """All registered imports in declaration order."""
        return tuple(self._imports)

    def aliases(self) -> dict[str, str]:
        """Imported name → alias mapping, in declaration order."""
        return {imp.name: imp.alias for imp in self._imports}

    @property
    def size(self) -> int:
        """Total number of imports."""
        return len(self._imports)
