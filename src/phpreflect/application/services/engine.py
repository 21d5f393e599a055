"""Main entry point for static reflection.

ReflectionEngine owns every cache of a reflection session: parsed files,
discovered namespace contents, reflected objects and resolved constants.
Engines share nothing, so independent sessions (and tests) build their own.
"""

from __future__ import annotations

import itertools
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from phpreflect.application.discovery.namespace import NamespaceDiscovery
from phpreflect.application.reflection.class_ import ReflectionClass
from phpreflect.application.reflection.function import ReflectionFunction
from phpreflect.application.reflection.namespace import ReflectionFile, ReflectionNamespace
from phpreflect.application.resolver.constant_cache import ConstantResolutionCache
from phpreflect.application.resolver.expression import ExpressionResolver
from phpreflect.domain.exceptions.lookup import (
    ClassNotFoundError,
    FunctionNotFoundError,
    InheritanceCycleError,
    MemberNotFoundError,
)
from phpreflect.domain.exceptions.resolution import UnresolvableConstantExpression
from phpreflect.domain.model.configuration import ReflectionConfig
from phpreflect.domain.model.resolution import ConstantKey
from phpreflect.domain.model.values import EnumCase
from phpreflect.infrastructure.adapters.cached_parser import CachedSourceParser
from phpreflect.infrastructure.adapters.tree_sitter_parser import TreeSitterSourceParser

if TYPE_CHECKING:
    from collections.abc import Iterator

    from phpreflect.application.discovery.namespace import NamespaceContents
    from phpreflect.application.reflection.constant import ReflectionClassConstant
    from phpreflect.application.resolver.scope import ResolutionScope
    from phpreflect.domain.model.class_ import ClassDeclaration
    from phpreflect.domain.model.constant import ConstantDeclaration
    from phpreflect.domain.model.function import FunctionDeclaration
    from phpreflect.domain.model.source_file import NamespaceBlock, SourceFile
    from phpreflect.domain.model.syntax import SyntaxNode
    from phpreflect.domain.model.values import PhpValue
    from phpreflect.domain.ports.locator import LocatorPort
    from phpreflect.domain.ports.source_parser import SourceParserPort

logger = structlog.get_logger()


class ReflectionEngine:
    """Static reflection session.

    Classes are found among the files parsed so far and, failing that,
    through the locator. Reflected objects are created once per declaration,
    so repeated lookups return the same object.

    Example:
        engine = ReflectionEngine(ComposerLocator(Path("vendor/acme/lib")))
        cls = engine.get_class("Acme\\\\Lib\\\\Client")
        for method in cls.get_methods(Modifier.IS_PUBLIC):
            print(method.name, [p.name for p in method.get_parameters()])
    """

    def __init__(
        self,
        locator: LocatorPort | None = None,
        *,
        config: ReflectionConfig | None = None,
        parser: SourceParserPort | None = None,
    ) -> None:
        """Initialize engine.

        Args:
            locator: Maps class names to files; None = only parsed files are searched
            config: Resolver configuration (None = defaults)
            parser: Parser to wrap with the source cache (None = tree-sitter)
        """
        self._config = config or ReflectionConfig()
        self._locator = locator
        inner = parser or TreeSitterSourceParser(encoding=self._config.encoding)
        self._parser = inner if isinstance(inner, CachedSourceParser) else CachedSourceParser(inner)
        self._resolver = ExpressionResolver(self, self._config)
        self._constants = ConstantResolutionCache()
        self._discovery = NamespaceDiscovery(name_resolver=self._resolver.resolve)

        self._registered: set[Path] = set()
        self._class_index: dict[str, tuple[ClassDeclaration, NamespaceContents]] = {}
        self._function_index: dict[str, tuple[FunctionDeclaration, NamespaceContents]] = {}
        self._constant_index: dict[ConstantKey, tuple[ConstantDeclaration, NamespaceContents]] = {}

        self._files: dict[Path, ReflectionFile] = {}
        self._namespaces: dict[tuple[Path, int], ReflectionNamespace] = {}
        self._classes: dict[tuple[str, Path], ReflectionClass] = {}
        self._functions: dict[tuple[str, Path], ReflectionFunction] = {}

        self._guard: list[str] = []
        self._source_ids = itertools.count(1)

    @property
    def config(self) -> ReflectionConfig:
        return self._config

    @property
    def parser(self) -> CachedSourceParser:
        """Source cache shared by every lookup of this engine."""
        return self._parser

    @property
    def constant_cache(self) -> ConstantResolutionCache:
        return self._constants

    # -------------------------------------------------------------------------
    # Entry points
    # -------------------------------------------------------------------------

    def parse_file(self, path: Path) -> SourceFile:
        """Parse a file (once) and register the entities it declares.

        Raises:
            ParseError: If the file cannot be read or is not valid PHP
        """
        source = self._parser.parse_file(Path(path))
        self._register(source)
        return source

    def get_file(self, path: Path) -> ReflectionFile:
        """Reflect a file on disk.

        Raises:
            ParseError: If the file cannot be read or is not valid PHP
        """
        source = self.parse_file(path)
        return self._reflect_file(source)

    def reflect_source(self, text: str, path: Path | None = None) -> ReflectionFile:
        """Reflect in-memory PHP source.

        Args:
            text: PHP source including the opening tag
            path: Path reported by __FILE__/__DIR__ and in errors; a unique
                placeholder in the working directory when omitted

        Raises:
            ParseError: If text is not valid PHP
        """
        if path is None:
            path = Path(f"php-source-{next(self._source_ids)}.php")
        source = self._parser.parse_source(text, Path(path))
        self._register(source)
        return self._reflect_file(source)

    def get_namespace(self, path: Path, name: str) -> ReflectionNamespace:
        """Reflect one namespace block of a file.

        Raises:
            ParseError: If the file cannot be parsed
            NamespaceNotFoundError: If the file does not declare the namespace
        """
        return self.get_file(path).get_namespace(name)

    def get_class(self, name: str) -> ReflectionClass:
        """Reflect a class-like by fully qualified name (case-insensitive).

        Raises:
            ClassNotFoundError: If neither parsed files nor the locator provide it
            ParseError: If the located file cannot be parsed
        """
        entry = self._class_index.get(name.lstrip("\\").lower())
        if entry is None:
            entry = self._locate(name.lstrip("\\"))
        declaration, contents = entry
        return self.reflect_class(declaration, contents)

    def get_function(self, name: str) -> ReflectionFunction:
        """Reflect a function declared in an already parsed file.

        Raises:
            FunctionNotFoundError: If no parsed file declares the function
        """
        entry = self._function_index.get(name.lstrip("\\").lower())
        if entry is None:
            raise FunctionNotFoundError(name)
        declaration, contents = entry
        return self.reflect_function(declaration, contents)

    # -------------------------------------------------------------------------
    # Object registry
    # -------------------------------------------------------------------------

    def reflect_namespace(self, block: NamespaceBlock) -> ReflectionNamespace:
        key = (block.file_path, block.span.start_byte)
        reflected = self._namespaces.get(key)
        if reflected is None:
            reflected = ReflectionNamespace(self, self._discovery.discover(block))
            self._namespaces[key] = reflected
        return reflected

    def reflect_class(
        self, declaration: ClassDeclaration, contents: NamespaceContents
    ) -> ReflectionClass:
        key = (declaration.name.lower(), contents.block.file_path)
        reflected = self._classes.get(key)
        if reflected is None:
            reflected = ReflectionClass(self, declaration, contents)
            self._classes[key] = reflected
        return reflected

    def reflect_function(
        self, declaration: FunctionDeclaration, contents: NamespaceContents
    ) -> ReflectionFunction:
        key = (declaration.qualified_name.lower(), contents.block.file_path)
        reflected = self._functions.get(key)
        if reflected is None:
            scope = contents.scope().in_function(declaration.qualified_name)
            reflected = ReflectionFunction(self, declaration, scope)
            self._functions[key] = reflected
        return reflected

    def _reflect_file(self, source: SourceFile) -> ReflectionFile:
        reflected = self._files.get(source.path)
        if reflected is None:
            reflected = ReflectionFile(self, source)
            self._files[source.path] = reflected
        return reflected

    def _register(self, source: SourceFile) -> None:
        """Index the classes, functions and constants of a parsed file once."""
        if source.path in self._registered:
            return
        self._registered.add(source.path)

        for block in source.namespaces:
            contents = self._discovery.discover(block)
            for cls in contents.classes:
                self._index(self._class_index, cls.name.lower(), (cls, contents), "class")
            for function in contents.functions:
                key = function.qualified_name.lower()
                self._index(self._function_index, key, (function, contents), "function")
            for constant in (*contents.constants, *contents.defines):
                key = ConstantKey.for_namespace(contents.constant_name(constant))
                self._index(self._constant_index, key, (constant, contents), "constant")

        logger.debug(
            "file_registered",
            path=str(source.path),
            namespaces=len(source.namespaces),
            classes=len(self._class_index),
        )

    def _index[K, V](self, index: dict[K, V], key: K, entry: V, kind: str) -> None:
        """Add an entity to an index; the first declaration of a name wins."""
        if key in index:
            logger.warning("duplicate_declaration", kind=kind, name=str(key))
            return
        index[key] = entry

    def _locate(self, name: str) -> tuple[ClassDeclaration, NamespaceContents]:
        if self._locator is None:
            raise ClassNotFoundError(name, "no locator is configured")

        path = self._locator.locate_class(name)
        if path is None:
            raise ClassNotFoundError(name, "the locator has no file for it")

        self.parse_file(path)
        entry = self._class_index.get(name.lower())
        if entry is None:
            raise ClassNotFoundError(name, f"{path} does not declare it")
        logger.debug("class_located", name=name, path=str(path))
        return entry

    # -------------------------------------------------------------------------
    # Inheritance guard
    # -------------------------------------------------------------------------

    @contextmanager
    def inheritance_guard(self, class_name: str) -> Iterator[None]:
        """Mark a class as being walked up its hierarchy.

        Raises:
            InheritanceCycleError: If the class is already being walked
        """
        key = class_name.lower()
        lowered = [name.lower() for name in self._guard]
        if key in lowered:
            start = lowered.index(key)
            chain = (*self._guard[start:], class_name)
            logger.debug("inheritance_cycle", chain=" -> ".join(chain))
            raise InheritanceCycleError(chain)

        self._guard.append(class_name)
        try:
            yield
        finally:
            self._guard.pop()

    # -------------------------------------------------------------------------
    # Expression resolution
    # -------------------------------------------------------------------------

    def resolve(self, node: SyntaxNode, scope: ResolutionScope) -> PhpValue:
        """Evaluate a constant expression in a scope."""
        return self._resolver.resolve(node, scope)

    def constant_name(self, node: SyntaxNode, scope: ResolutionScope) -> str | None:
        return self._resolver.constant_name(node, scope)

    def class_constant_value(
        self, owner: ReflectionClass, constant: ReflectionClassConstant
    ) -> PhpValue:
        """Value of a class constant, resolved at most once per engine."""
        declaration = constant.declaration
        if declaration.is_enum_case:
            return EnumCase(owner.name, declaration.name)

        value = declaration.value
        if value is None:
            raise ValueError(f"constant {declaration.name} has no value expression")
        key = ConstantKey.for_class(owner.name, declaration.name)
        return self._constants.resolve(key, lambda: self.resolve(value, constant.scope))

    def namespace_constant_value(
        self, declaration: ConstantDeclaration, contents: NamespaceContents
    ) -> PhpValue:
        """Value of a `const`/define() constant, resolved at most once per engine."""
        value = declaration.value
        if value is None:
            raise ValueError(f"constant {declaration.name} has no value expression")
        key = ConstantKey.for_namespace(contents.constant_name(declaration))
        return self._constants.resolve(key, lambda: self.resolve(value, contents.scope()))

    # ConstantProvider

    def class_constant(self, class_name: str, name: str) -> PhpValue:
        return self.get_class(class_name).get_reflection_constant(name).get_value()

    def has_namespace_constant(self, qualified_name: str) -> bool:
        return ConstantKey.for_namespace(qualified_name.lstrip("\\")) in self._constant_index

    def namespace_constant(self, qualified_name: str) -> PhpValue:
        qualified_name = qualified_name.lstrip("\\")
        entry = self._constant_index.get(ConstantKey.for_namespace(qualified_name))
        if entry is None:
            namespace, _, short = qualified_name.rpartition("\\")
            raise MemberNotFoundError(namespace, "constant", short)
        declaration, contents = entry
        return self.namespace_constant_value(declaration, contents)

    def enum_backing_value(self, class_name: str, case_name: str) -> PhpValue:
        enum = self.get_class(class_name)
        constant = enum.get_reflection_constant(case_name)
        declaration = constant.declaration
        value = declaration.value
        if not declaration.is_enum_case or enum.get_backing_type() is None or value is None:
            raise UnresolvableConstantExpression(
                value or enum.declaration.node,
                f"{enum.name}::{case_name} is not a case of a backed enum",
            )

        owner = constant.get_declaring_class()
        key = ConstantKey.for_class(owner.name, case_name)
        return self._constants.resolve(key, lambda: self.resolve(value, owner.scope))
