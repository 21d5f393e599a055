"""Reflection of class-likes with inheritance-aware member lookup."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

from phpreflect.application.reflection.constant import ReflectionClassConstant
from phpreflect.application.reflection.function import ReflectionMethod
from phpreflect.application.reflection.property_ import ReflectionProperty
from phpreflect.application.reflection.type_ import ReflectionNamedType
from phpreflect.application.resolver.scope import ResolutionScope
from phpreflect.domain.exceptions.lookup import MemberNotFoundError
from phpreflect.domain.model.enums import ClassKind, ClassModifier

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from phpreflect.application.discovery.namespace import NamespaceContents
    from phpreflect.application.services.engine import ReflectionEngine
    from phpreflect.domain.model.class_ import ClassDeclaration, TraitAlias
    from phpreflect.domain.model.enums import Modifier
    from phpreflect.domain.model.values import PhpValue

Member: TypeAlias = "ReflectionMethod | ReflectionProperty | ReflectionClassConstant"

_METHOD = "method"
_PROPERTY = "property"
_CONSTANT = "constant"


def _matches(member: Member, filter: Modifier | int | None) -> bool:
    return filter is None or bool(member.get_modifiers() & filter)


class ReflectionClass:
    """Class, interface, trait or enum.

    Members are looked up own first, then through the parent chain, then
    implemented interfaces, then used traits, each in declaration order.
    The first match wins. Private members of the parent and of interfaces
    are not inherited; private trait members are.

    Every walk up the hierarchy runs under the engine's inheritance guard,
    so a cyclic hierarchy raises InheritanceCycleError instead of recursing
    forever. Collected member tables are memoized per object.

    Attributes:
        engine: Engine that produced this object
        scope: Resolution scope of expressions inside the class body
    """

    def __init__(
        self,
        engine: ReflectionEngine,
        declaration: ClassDeclaration,
        contents: NamespaceContents,
    ) -> None:
        self.engine = engine
        self._declaration = declaration
        self._contents = contents
        self.scope = ResolutionScope(
            file_path=contents.block.file_path,
            namespace=declaration.namespace,
            symbols=contents.symbols,
            class_name=declaration.name,
            class_kind=declaration.kind,
            parent_name=declaration.parent_name,
        )
        self._own: dict[str, dict[str, Member]] = {}
        self._collected: dict[str, dict[str, Member]] = {}
        self._interface_names: list[str] | None = None
        self._aliases: dict[str, ReflectionMethod] | None = None
        self._imported: dict[tuple[str, str], Member] = {}
        self._modifiers: ClassModifier | None = None

    def __repr__(self) -> str:
        return f"ReflectionClass({self.name})"

    # -------------------------------------------------------------------------
    # Identity and position
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        """Fully qualified name."""
        return self._declaration.name

    @property
    def short_name(self) -> str:
        return self._declaration.short_name

    @property
    def namespace_name(self) -> str:
        return self._declaration.namespace

    @property
    def declaration(self) -> ClassDeclaration:
        return self._declaration

    @property
    def doc_comment(self) -> str | None:
        return self._declaration.doc_comment

    @property
    def file_name(self) -> Path:
        return self.scope.file_path

    @property
    def start_line(self) -> int:
        return self._declaration.span.start_line

    @property
    def end_line(self) -> int:
        return self._declaration.span.end_line

    def in_namespace(self) -> bool:
        return bool(self._declaration.namespace)

    def is_internal(self) -> bool:
        return False

    def is_user_defined(self) -> bool:
        return True

    # -------------------------------------------------------------------------
    # Kind and modifiers
    # -------------------------------------------------------------------------

    def is_interface(self) -> bool:
        return self._declaration.kind is ClassKind.INTERFACE

    def is_trait(self) -> bool:
        return self._declaration.kind is ClassKind.TRAIT

    def is_enum(self) -> bool:
        return self._declaration.kind is ClassKind.ENUM

    def get_modifiers(self) -> ClassModifier:
        """Class modifier bits, computed once.

        IS_IMPLICIT_ABSTRACT is set when any method visible after
        inheritance is abstract; IS_EXPLICIT_ABSTRACT only by the keyword.

        Raises:
            ClassNotFoundError: If an ancestor cannot be located
            InheritanceCycleError: If the hierarchy is cyclic
        """
        if self._modifiers is None:
            modifiers = ClassModifier(0)
            if self._declaration.is_abstract:
                modifiers |= ClassModifier.IS_EXPLICIT_ABSTRACT
            if self._declaration.is_final:
                modifiers |= ClassModifier.IS_FINAL
            if self._declaration.is_readonly:
                modifiers |= ClassModifier.IS_READONLY
            if any(method.is_abstract() for method in self.get_methods()):
                modifiers |= ClassModifier.IS_IMPLICIT_ABSTRACT
            self._modifiers = modifiers
        return self._modifiers

    def is_abstract(self) -> bool:
        """Declared abstract or left with abstract methods."""
        abstract = ClassModifier.IS_EXPLICIT_ABSTRACT | ClassModifier.IS_IMPLICIT_ABSTRACT
        return bool(self.get_modifiers() & abstract)

    def is_final(self) -> bool:
        return self._declaration.is_final

    def is_readonly(self) -> bool:
        return self._declaration.is_readonly

    def is_instantiable(self) -> bool:
        """Concrete class whose constructor, if any, is public."""
        if self._declaration.kind is not ClassKind.CLASS or self.is_abstract():
            return False
        constructor = self.get_constructor()
        return constructor is None or constructor.is_public()

    def is_cloneable(self) -> bool:
        """Concrete class whose `__clone`, if any, is public."""
        if self._declaration.kind is not ClassKind.CLASS or self.is_abstract():
            return False
        if not self.has_method("__clone"):
            return True
        return self.get_method("__clone").is_public()

    def get_backing_type(self) -> ReflectionNamedType | None:
        """Backing type of a backed enum, None otherwise."""
        backing = self._declaration.enum_backing_type
        return ReflectionNamedType(backing) if backing is not None else None

    # -------------------------------------------------------------------------
    # Hierarchy
    # -------------------------------------------------------------------------

    def get_parent_class_name(self) -> str | None:
        return self._declaration.parent_name

    def get_parent_class(self) -> ReflectionClass | None:
        """Reflected parent class, None if the class extends nothing.

        Raises:
            ClassNotFoundError: If the parent cannot be located
        """
        parent = self._declaration.parent_name
        return self.engine.get_class(parent) if parent is not None else None

    def get_interface_names(self) -> list[str]:
        """All implemented interfaces: inherited from the parent first,
        then each declared interface followed by the interfaces it extends.

        Raises:
            ClassNotFoundError: If an ancestor cannot be located
            InheritanceCycleError: If the hierarchy is cyclic
        """
        if self._interface_names is not None:
            return list(self._interface_names)

        names: dict[str, str] = {}
        with self.engine.inheritance_guard(self.name):
            parent = self.get_parent_class()
            if parent is not None:
                for name in parent.get_interface_names():
                    names.setdefault(name.lower(), name)
            for declared in self._declaration.interface_names:
                interface = self.engine.get_class(declared)
                names.setdefault(interface.name.lower(), interface.name)
                for name in interface.get_interface_names():
                    names.setdefault(name.lower(), name)

        self._interface_names = list(names.values())
        return list(self._interface_names)

    def get_interfaces(self) -> dict[str, ReflectionClass]:
        return {name: self.engine.get_class(name) for name in self.get_interface_names()}

    def get_trait_names(self) -> list[str]:
        """Traits used directly by this class-like."""
        return list(self._declaration.trait_names)

    def get_traits(self) -> dict[str, ReflectionClass]:
        traits = (self.engine.get_class(name) for name in self._declaration.trait_names)
        return {trait.name: trait for trait in traits}

    def get_trait_aliases(self) -> dict[str, str]:
        """Alias name → `Trait::method` for each `as` alias of a trait method."""
        aliases: dict[str, str] = {}
        for alias in self._declaration.trait_aliases:
            if alias.alias is None:
                continue
            method = self._trait_method(alias)
            aliases[alias.alias] = f"{method.class_name}::{method.short_name}"
        return aliases

    def implements_interface(self, interface_name: str) -> bool:
        """Check whether this class-like is or implements an interface.

        Raises:
            ValueError: If `interface_name` is not an interface
            ClassNotFoundError: If the interface cannot be located
        """
        interface = self.engine.get_class(interface_name)
        if not interface.is_interface():
            raise ValueError(f"{interface.name} is not an interface")
        wanted = interface.name.lower()
        if self.name.lower() == wanted:
            return True
        return any(name.lower() == wanted for name in self.get_interface_names())

    def is_subclass_of(self, class_name: str) -> bool:
        """Check whether a class is an ancestor (parent chain or interface).

        A class is not a subclass of itself.
        """
        wanted = class_name.lstrip("\\").lower()
        if any(name.lower() == wanted for name in self._parent_names()):
            return True
        return any(name.lower() == wanted for name in self.get_interface_names())

    def _parent_names(self) -> list[str]:
        parent = self.get_parent_class()
        if parent is None:
            return []
        with self.engine.inheritance_guard(self.name):
            return [parent.name, *parent._parent_names()]

    # -------------------------------------------------------------------------
    # Methods
    # -------------------------------------------------------------------------

    def get_constructor(self) -> ReflectionMethod | None:
        if not self.has_method("__construct"):
            return None
        return self.get_method("__construct")

    def has_method(self, name: str) -> bool:
        """Method lookup across the hierarchy, case-insensitive."""
        return self._find(_METHOD, name.lower()) is not None

    def get_method(self, name: str) -> ReflectionMethod:
        """Find a method across the hierarchy.

        Raises:
            MemberNotFoundError: If no class-like in the hierarchy declares it
            ClassNotFoundError: If an ancestor cannot be located
            InheritanceCycleError: If the hierarchy is cyclic
        """
        method = self._find(_METHOD, name.lower())
        if method is None:
            raise MemberNotFoundError(self.name, _METHOD, name)
        if not isinstance(method, ReflectionMethod):
            raise TypeError(f"expected a method, got {method!r}")
        return method

    def get_methods(self, filter: Modifier | int | None = None) -> list[ReflectionMethod]:
        """Own and inherited methods whose modifiers intersect `filter`."""
        methods = self._collect(_METHOD).values()
        return [m for m in methods if isinstance(m, ReflectionMethod) and _matches(m, filter)]

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    def has_property(self, name: str) -> bool:
        return self._find(_PROPERTY, name) is not None

    def get_property(self, name: str) -> ReflectionProperty:
        """Find a property across the hierarchy (case-sensitive).

        Raises:
            MemberNotFoundError: If no class-like in the hierarchy declares it
        """
        prop = self._find(_PROPERTY, name)
        if prop is None:
            raise MemberNotFoundError(self.name, _PROPERTY, name)
        if not isinstance(prop, ReflectionProperty):
            raise TypeError(f"expected a property, got {prop!r}")
        return prop

    def get_properties(self, filter: Modifier | int | None = None) -> list[ReflectionProperty]:
        properties = self._collect(_PROPERTY).values()
        return [p for p in properties if isinstance(p, ReflectionProperty) and _matches(p, filter)]

    def get_default_properties(self) -> dict[str, PhpValue]:
        """Default values of static and instance properties that have one."""
        return {
            prop.name: prop.get_default_value()
            for prop in self.get_properties()
            if prop.has_default_value()
        }

    def get_static_properties(self) -> dict[str, PhpValue]:
        """Initial values of static properties."""
        return {
            prop.name: prop.get_default_value()
            for prop in self.get_properties()
            if prop.is_static()
        }

    # -------------------------------------------------------------------------
    # Constants
    # -------------------------------------------------------------------------

    def has_constant(self, name: str) -> bool:
        return self._find(_CONSTANT, name) is not None

    def get_reflection_constant(self, name: str) -> ReflectionClassConstant:
        """Find a constant or enum case across the hierarchy (case-sensitive).

        Raises:
            MemberNotFoundError: If no class-like in the hierarchy declares it
        """
        constant = self._find(_CONSTANT, name)
        if constant is None:
            raise MemberNotFoundError(self.name, _CONSTANT, name)
        if not isinstance(constant, ReflectionClassConstant):
            raise TypeError(f"expected a class constant, got {constant!r}")
        return constant

    def get_reflection_constants(
        self, filter: Modifier | int | None = None
    ) -> list[ReflectionClassConstant]:
        constants = self._collect(_CONSTANT).values()
        return [
            c for c in constants if isinstance(c, ReflectionClassConstant) and _matches(c, filter)
        ]

    def get_constant(self, name: str) -> PhpValue:
        """Resolved value of a constant.

        Raises:
            MemberNotFoundError: If the constant is not declared
            ResolutionError: If the declared value cannot be evaluated
        """
        return self.get_reflection_constant(name).get_value()

    def get_constants(self, filter: Modifier | int | None = None) -> dict[str, PhpValue]:
        """Name → resolved value for every visible constant."""
        return {c.name: c.get_value() for c in self.get_reflection_constants(filter)}

    def get_cases(self) -> list[ReflectionClassConstant]:
        """Enum cases in declaration order."""
        return [c for c in self.get_reflection_constants() if c.is_enum_case()]

    # -------------------------------------------------------------------------
    # Member tables
    # -------------------------------------------------------------------------

    def _own_members(self, kind: str) -> dict[str, Member]:
        members = self._own.get(kind)
        if members is None:
            declaration = self._declaration
            match kind:
                case "method":
                    members = {
                        m.name.lower(): ReflectionMethod(self.engine, m, self)
                        for m in declaration.methods
                    }
                case "property":
                    members = {p.name: ReflectionProperty(p, self) for p in declaration.properties}
                case _:
                    members = {
                        c.name: ReflectionClassConstant(c, self) for c in declaration.constants
                    }
            self._own[kind] = members
        return members

    def _ancestors(self) -> Iterator[tuple[ReflectionClass, bool]]:
        """Direct ancestors in lookup order with their "used trait" flag."""
        parent = self.get_parent_class()
        if parent is not None:
            yield parent, False
        for name in self._declaration.interface_names:
            yield self.engine.get_class(name), False
        for name in self._declaration.trait_names:
            yield self.engine.get_class(name), True

    def _inherit(self, kind: str, key: str, member: Member, from_trait: bool) -> Member | None:
        """Member as seen from this class, None if it is not inherited.

        Private members of parents and interfaces stay behind. Trait members
        are copied in, private ones included, and belong to this class.
        """
        if not from_trait:
            return None if member.is_private() else member
        imported = self._imported.get((kind, key))
        if imported is None:
            imported = member.imported_into(self)
            self._imported[(kind, key)] = imported
        return imported

    def _find(self, kind: str, key: str) -> Member | None:
        own = self._own_members(kind).get(key)
        if own is not None:
            return own

        with self.engine.inheritance_guard(self.name):
            for ancestor, from_trait in self._ancestors():
                found = ancestor._find(kind, key)
                if found is not None:
                    inherited = self._inherit(kind, key, found, from_trait)
                    if inherited is not None:
                        return inherited
            if kind == _METHOD:
                return self._alias_methods().get(key)
        return None

    def _collect(self, kind: str) -> dict[str, Member]:
        collected = self._collected.get(kind)
        if collected is not None:
            return collected

        collected = dict(self._own_members(kind))
        with self.engine.inheritance_guard(self.name):
            for ancestor, from_trait in self._ancestors():
                for key, member in ancestor._collect(kind).items():
                    if key in collected:
                        continue
                    inherited = self._inherit(kind, key, member, from_trait)
                    if inherited is not None:
                        collected[key] = inherited
            if kind == _METHOD:
                for key, method in self._alias_methods().items():
                    collected.setdefault(key, method)

        self._collected[kind] = collected
        return collected

    def _alias_methods(self) -> dict[str, ReflectionMethod]:
        """Methods introduced by `as` aliases in trait `use` blocks."""
        if self._aliases is None:
            aliases: dict[str, ReflectionMethod] = {}
            for alias in self._declaration.trait_aliases:
                if alias.alias is None:
                    continue
                method = self._trait_method(alias)
                imported = method.imported_into(self, alias=alias.alias)
                aliases.setdefault(alias.alias.lower(), imported)
            self._aliases = aliases
        return self._aliases

    def _trait_method(self, alias: TraitAlias) -> ReflectionMethod:
        """Method an alias refers to, searched in the named trait or all used traits.

        Raises:
            MemberNotFoundError: If no used trait declares the method
        """
        candidates = (alias.trait_name,) if alias.trait_name else self._declaration.trait_names
        for trait_name in candidates:
            trait = self.engine.get_class(trait_name)
            if trait.has_method(alias.method):
                return trait.get_method(alias.method)
        raise MemberNotFoundError(self.name, "trait method", alias.method)
