"""Reflection of namespace blocks and whole files."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from phpreflect.domain.exceptions.base import PhpReflectError
from phpreflect.domain.exceptions.lookup import (
    ClassNotFoundError,
    FunctionNotFoundError,
    MemberNotFoundError,
)
from phpreflect.domain.exceptions.parsing import NamespaceNotFoundError

if TYPE_CHECKING:
    from pathlib import Path

    from phpreflect.application.discovery.namespace import NamespaceContents
    from phpreflect.application.reflection.class_ import ReflectionClass
    from phpreflect.application.reflection.function import ReflectionFunction
    from phpreflect.application.services.engine import ReflectionEngine
    from phpreflect.domain.model.class_ import ClassDeclaration
    from phpreflect.domain.model.constant import ConstantDeclaration
    from phpreflect.domain.model.function import FunctionDeclaration
    from phpreflect.domain.model.source_file import SourceFile
    from phpreflect.domain.model.values import PhpValue

logger = structlog.get_logger()


class ReflectionNamespace:
    """Entities declared in one namespace block of a file.

    Class and function names are accepted short or fully qualified and
    compared case-insensitively; constant names are case-sensitive.
    """

    def __init__(self, engine: ReflectionEngine, contents: NamespaceContents) -> None:
        self._engine = engine
        self._contents = contents

    def __repr__(self) -> str:
        return f"ReflectionNamespace({self.name or '<global>'} in {self.file_name})"

    @property
    def name(self) -> str:
        """Namespace name, "" for global code."""
        return self._contents.namespace

    @property
    def contents(self) -> NamespaceContents:
        return self._contents

    @property
    def doc_comment(self) -> str | None:
        return self._contents.block.doc_comment

    @property
    def file_name(self) -> Path:
        return self._contents.block.file_path

    @property
    def start_line(self) -> int:
        return self._contents.block.span.start_line

    @property
    def end_line(self) -> int:
        return self._contents.block.span.end_line

    @property
    def last_byte_offset(self) -> int:
        """Offset one past the last byte of the block."""
        return self._contents.block.last_byte

    # -------------------------------------------------------------------------
    # Classes and functions
    # -------------------------------------------------------------------------

    def get_classes(self) -> dict[str, ReflectionClass]:
        """Fully qualified name → class, in declaration order."""
        reflected = (self._engine.reflect_class(c, self._contents) for c in self._contents.classes)
        return {cls.name: cls for cls in reflected}

    def has_class(self, name: str) -> bool:
        return self._class_declaration(name) is not None

    def get_class(self, name: str) -> ReflectionClass:
        """Class declared in this block.

        Raises:
            ClassNotFoundError: If the block does not declare it
        """
        declaration = self._class_declaration(name)
        if declaration is None:
            raise ClassNotFoundError(name, f"not declared in namespace '{self.name}'")
        return self._engine.reflect_class(declaration, self._contents)

    def get_functions(self) -> dict[str, ReflectionFunction]:
        """Fully qualified name → function, in declaration order."""
        reflected = (
            self._engine.reflect_function(f, self._contents) for f in self._contents.functions
        )
        return {function.name: function for function in reflected}

    def has_function(self, name: str) -> bool:
        return self._function_declaration(name) is not None

    def get_function(self, name: str) -> ReflectionFunction:
        """Function declared in this block.

        Raises:
            FunctionNotFoundError: If the block does not declare it
        """
        declaration = self._function_declaration(name)
        if declaration is None:
            raise FunctionNotFoundError(name)
        return self._engine.reflect_function(declaration, self._contents)

    def get_namespace_aliases(self) -> dict[str, str]:
        """Imported name → local alias for every `use` of the block."""
        return self._contents.symbols.aliases()

    # -------------------------------------------------------------------------
    # Constants
    # -------------------------------------------------------------------------

    def get_constants(self, with_defined: bool = False) -> dict[str, PhpValue]:
        """Name → value of `const` constants, plus define() ones if asked.

        Constants whose value cannot be evaluated are logged and left out;
        get_constant() surfaces their error.
        """
        declarations = list(self._contents.constants)
        if with_defined:
            declarations.extend(self._contents.defines)

        values: dict[str, PhpValue] = {}
        for declaration in declarations:
            try:
                values[declaration.name] = self._value(declaration)
            except PhpReflectError as e:
                logger.warning(
                    "namespace_constant_skipped",
                    namespace=self.name or "<global>",
                    constant=declaration.name,
                    error=str(e),
                )
        return values

    def has_constant(self, name: str) -> bool:
        return self._constant_declaration(name) is not None

    def get_constant(self, name: str) -> PhpValue:
        """Value of a `const` or define() constant of this block.

        Raises:
            MemberNotFoundError: If the block does not declare it
            ResolutionError: If the value cannot be evaluated
        """
        declaration = self._constant_declaration(name)
        if declaration is None:
            raise MemberNotFoundError(self.name, "constant", name)
        return self._value(declaration)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _value(self, declaration: ConstantDeclaration) -> PhpValue:
        return self._engine.namespace_constant_value(declaration, self._contents)

    def _qualified(self, name: str) -> str:
        name = name.lstrip("\\")
        if self.name and "\\" not in name:
            return f"{self.name}\\{name}"
        return name

    def _class_declaration(self, name: str) -> ClassDeclaration | None:
        wanted = self._qualified(name).lower()
        return next((c for c in self._contents.classes if c.name.lower() == wanted), None)

    def _function_declaration(self, name: str) -> FunctionDeclaration | None:
        wanted = self._qualified(name).lower()
        return next(
            (f for f in self._contents.functions if f.qualified_name.lower() == wanted), None
        )

    def _constant_declaration(self, name: str) -> ConstantDeclaration | None:
        for declaration in self._contents.constants:
            if declaration.name == name:
                return declaration
        for declaration in self._contents.defines:
            if declaration.name == name.lstrip("\\"):
                return declaration
        return None


class ReflectionFile:
    """One parsed PHP file and its namespace blocks."""

    def __init__(self, engine: ReflectionEngine, source: SourceFile) -> None:
        self._engine = engine
        self._source = source

    def __repr__(self) -> str:
        return f"ReflectionFile({self.file_name})"

    @property
    def file_name(self) -> Path:
        return self._source.path

    @property
    def source(self) -> SourceFile:
        return self._source

    def is_strict_mode(self) -> bool:
        """File starts with `declare(strict_types=1)`."""
        return self._source.strict_types

    def get_namespaces(self) -> list[ReflectionNamespace]:
        """Namespace blocks in declaration order."""
        return [self._engine.reflect_namespace(block) for block in self._source.namespaces]

    def has_namespace(self, name: str) -> bool:
        wanted = name.lstrip("\\").lower()
        return any(block.name.lower() == wanted for block in self._source.namespaces)

    def get_namespace(self, name: str) -> ReflectionNamespace:
        """First block declaring `name` ("" for global code).

        Raises:
            NamespaceNotFoundError: If the file has no such block
        """
        if not self.has_namespace(name):
            raise NamespaceNotFoundError(self._source.path, name)
        return self._engine.reflect_namespace(self._source.namespace(name))
