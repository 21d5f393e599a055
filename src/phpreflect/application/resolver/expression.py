"""Static evaluator for PHP constant expressions.

Recursive descent over expression syntax nodes, one rule per node kind.
Anything that would need execution fails with
UnresolvableConstantExpression carrying the offending node.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from phpreflect.application.resolver import literals
from phpreflect.application.resolver import php_semantics as php
from phpreflect.application.resolver.builtins import BUILTIN_CONSTANTS, BUILTIN_FUNCTIONS
from phpreflect.domain.exceptions.resolution import UnresolvableConstantExpression
from phpreflect.domain.model.configuration import ReflectionConfig
from phpreflect.domain.model.values import EnumCase

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from phpreflect.application.resolver.scope import ConstantProvider, ResolutionScope
    from phpreflect.domain.model.syntax import SyntaxNode
    from phpreflect.domain.model.values import PhpValue

logger = structlog.get_logger()

# Operations whose Python exceptions mean "PHP would throw here"
_PHP_ERRORS = (TypeError, ValueError, ArithmeticError)

# Descendants that make a string literal interpolate variables
_INTERPOLATION_KINDS = frozenset({"variable_name", "dynamic_variable_name"})

MAGIC_CONSTANTS = frozenset(
    {
        "__LINE__",
        "__FILE__",
        "__DIR__",
        "__NAMESPACE__",
        "__CLASS__",
        "__TRAIT__",
        "__FUNCTION__",
        "__METHOD__",
    }
)

_BINARY_OPERATIONS: dict[str, Callable[[PhpValue, PhpValue], PhpValue]] = {
    "+": php.add,
    "-": php.subtract,
    "*": php.multiply,
    "/": php.divide,
    "%": php.modulo,
    "**": php.power,
    ".": php.concat,
    "<<": php.shift_left,
    ">>": php.shift_right,
    "&": lambda a, b: php.bitwise("&", a, b),
    "|": lambda a, b: php.bitwise("|", a, b),
    "^": lambda a, b: php.bitwise("^", a, b),
    "==": php.loose_equals,
    "!=": lambda a, b: not php.loose_equals(a, b),
    "<>": lambda a, b: not php.loose_equals(a, b),
    "===": php.identical,
    "!==": lambda a, b: not php.identical(a, b),
    "<": php.less_than,
    "<=": php.less_or_equal,
    ">": lambda a, b: php.less_than(b, a),
    ">=": lambda a, b: php.less_or_equal(b, a),
    "<=>": php.compare,
    "xor": lambda a, b: php.to_bool(a) != php.to_bool(b),
}

_CASTS: dict[str, Callable[[PhpValue], PhpValue]] = {
    "int": php.to_int,
    "integer": php.to_int,
    "float": php.to_float,
    "double": php.to_float,
    "real": php.to_float,
    "string": php.to_string,
    "binary": php.to_string,
    "bool": php.to_bool,
    "boolean": php.to_bool,
    "array": php.to_array,
}


class ExpressionResolver:
    """Evaluates constant expressions against a static scope.

    Stateless between resolve() calls: cross-class and namespace constants
    are delegated to the ConstantProvider, which owns the caches.
    """

    def __init__(
        self,
        provider: ConstantProvider,
        config: ReflectionConfig | None = None,
    ) -> None:
        """Initialize resolver.

        Args:
            provider: Lookup of constants declared elsewhere
            config: Builtin constant overrides and function allow-list

        Raises:
            TypeError: If provider is None
        """
        if provider is None:
            raise TypeError("provider must not be None")

        config = config or ReflectionConfig()
        self._provider = provider
        self._constants: Mapping[str, PhpValue] = {
            **BUILTIN_CONSTANTS,
            **(config.builtin_constants or {}),
        }
        allowed = config.allowed_functions
        self._functions = {
            name: func
            for name, func in BUILTIN_FUNCTIONS.items()
            if allowed is None or name in allowed
        }
        self._allow_constant_function = allowed is None or "constant" in allowed

    def resolve(self, node: SyntaxNode, scope: ResolutionScope) -> PhpValue:
        """Evaluate an expression node.

        Args:
            node: Expression node
            scope: Static position of the expression

        Returns:
            PHP value

        Raises:
            UnresolvableConstantExpression: Expression needs execution or PHP would throw
            CircularConstantError: Referenced constants form a cycle
            ClassNotFoundError: Referenced class cannot be located
            MemberNotFoundError: Referenced constant is not declared
        """
        try:
            return self._evaluate(node, scope)
        except RecursionError as e:
            raise UnresolvableConstantExpression(node, "expression nests too deeply") from e

    def constant_name(self, node: SyntaxNode, scope: ResolutionScope) -> str | None:
        """Name of the constant an expression consists of, None if it is not one.

        Class constants are reported as `Class::NAME` with the class resolved,
        global and namespace constants by the name that is defined.
        """
        if node.kind == "parenthesized_expression" and node.named_children:
            return self.constant_name(node.named_children[0], scope)

        if node.kind == "class_constant_access_expression":
            parts = node.named_children
            if len(parts) != 2 or node_text(parts[1]).lower() == "class":
                return None
            return f"{self._class_reference(parts[0], scope)}::{node_text(parts[1])}"

        if node.kind in ("name", "qualified_name"):
            text = node_text(node)
            if text.lower() in ("true", "false", "null") or text.upper() in MAGIC_CONSTANTS:
                return None
            candidates = scope.symbols.constant_candidates(text)
            for candidate in candidates:
                if self._provider.has_namespace_constant(candidate):
                    return candidate
            return candidates[-1]
        return None

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def _evaluate(self, node: SyntaxNode, scope: ResolutionScope) -> PhpValue:
        match node.kind:
            case "integer":
                return self._apply(node, literals.parse_integer, node.text)
            case "float":
                return self._apply(node, literals.parse_float, node.text)
            case "boolean":
                return node.text.strip().lower() == "true"
            case "null":
                return None
            case "string" | "encapsed_string":
                self._reject_interpolation(node)
                return self._apply(node, literals.decode_quoted_string, node.text)
            case "heredoc" | "nowdoc":
                self._reject_interpolation(node)
                return self._apply(node, literals.decode_heredoc, node.text)
            case "parenthesized_expression":
                return self._evaluate(_operand(node), scope)
            case "array_creation_expression":
                return self._array(node, scope)
            case "unary_op_expression":
                return self._unary(node, scope)
            case "binary_expression":
                return self._binary(node, scope)
            case "conditional_expression":
                return self._conditional(node, scope)
            case "cast_expression":
                return self._cast(node, scope)
            case "subscript_expression":
                return self._subscript(node, scope)
            case "class_constant_access_expression":
                return self._class_constant(node, scope)
            case "member_access_expression" | "nullsafe_member_access_expression":
                return self._enum_property(node, scope)
            case "name" | "qualified_name":
                return self._constant(node, scope)
            case "function_call_expression":
                return self._call(node, scope)
        raise UnresolvableConstantExpression(node, f"{node.kind} is not a constant expression")

    def _apply(
        self,
        node: SyntaxNode,
        operation: Callable[..., PhpValue],
        *args: object,
    ) -> PhpValue:
        """Run a PHP operation, turning PHP-level errors into resolution errors."""
        try:
            return operation(*args)
        except _PHP_ERRORS as e:
            raise UnresolvableConstantExpression(node, str(e) or type(e).__name__) from e

    # -------------------------------------------------------------------------
    # Literals
    # -------------------------------------------------------------------------

    def _reject_interpolation(self, node: SyntaxNode) -> None:
        for child in node.walk():
            if child.kind in _INTERPOLATION_KINDS:
                raise UnresolvableConstantExpression(node, "string interpolates variables")

    def _array(self, node: SyntaxNode, scope: ResolutionScope) -> dict[int | str, PhpValue]:
        """Array literal with PHP key assignment.

        The next implicit key follows the largest integer key so far, even a
        negative one; an array without integer keys starts at 0.
        """
        result: dict[int | str, PhpValue] = {}
        next_free: int | None = None

        def store(key: int | str | None, value: PhpValue) -> None:
            nonlocal next_free
            if key is None:
                key = 0 if next_free is None else next_free
                if key > php.INT_MAX:
                    raise UnresolvableConstantExpression(
                        node, "Cannot add element to the array as the next element is occupied"
                    )
            if isinstance(key, int):
                next_free = key + 1 if next_free is None else max(next_free, key + 1)
            result[key] = value

        for element in node.children_of_kind("array_element_initializer"):
            spread = element.first_child_of_kind("variadic_unpacking")
            if spread is not None or element.has_token("..."):
                source = self._evaluate(_operand(spread or element), scope)
                if not isinstance(source, dict):
                    raise UnresolvableConstantExpression(
                        element, "Only arrays and Traversables can be unpacked"
                    )
                for key, value in source.items():
                    store(None if isinstance(key, int) else key, value)
                continue

            if element.has_token("&"):
                raise UnresolvableConstantExpression(element, "reference in array literal")

            parts = element.named_children
            if element.has_token("=>"):
                key_value = self._evaluate(parts[0], scope)
                key = self._apply(parts[0], php.normalize_key, key_value)
                store(key, self._evaluate(parts[-1], scope))
            else:
                store(None, self._evaluate(parts[0], scope))
        return result

    # -------------------------------------------------------------------------
    # Operators
    # -------------------------------------------------------------------------

    def _unary(self, node: SyntaxNode, scope: ResolutionScope) -> PhpValue:
        operator = _operator(node)
        value = self._evaluate(_operand(node), scope)
        match operator:
            case "-":
                return self._apply(node, php.negate, value)
            case "+":
                return self._apply(node, php.identity, value)
            case "!":
                return not php.to_bool(value)
            case "~":
                return self._apply(node, php.bitwise_not, value)
            case "@":
                return value
        raise UnresolvableConstantExpression(node, f"unsupported unary operator {operator}")

    def _binary(self, node: SyntaxNode, scope: ResolutionScope) -> PhpValue:
        operator = _operator(node).lower()
        left_node = node.child_by_field("left") or node.named_children[0]
        right_node = node.child_by_field("right") or node.named_children[-1]

        # Short-circuit operators evaluate the right side only when needed
        match operator:
            case "&&" | "and":
                if not php.to_bool(self._evaluate(left_node, scope)):
                    return False
                return php.to_bool(self._evaluate(right_node, scope))
            case "||" | "or":
                if php.to_bool(self._evaluate(left_node, scope)):
                    return True
                return php.to_bool(self._evaluate(right_node, scope))
            case "??":
                left = self._evaluate(left_node, scope)
                return left if left is not None else self._evaluate(right_node, scope)

        operation = _BINARY_OPERATIONS.get(operator)
        if operation is None:
            raise UnresolvableConstantExpression(node, f"operator {operator} needs execution")
        left = self._evaluate(left_node, scope)
        right = self._evaluate(right_node, scope)
        return self._apply(node, operation, left, right)

    def _conditional(self, node: SyntaxNode, scope: ResolutionScope) -> PhpValue:
        """`a ? b : c` and `a ?: c`; only the taken branch is evaluated."""
        condition_node = node.child_by_field("condition") or node.named_children[0]
        body_node = node.child_by_field("body")
        alternative_node = node.child_by_field("alternative") or node.named_children[-1]
        if body_node is None and len(node.named_children) == 3:
            body_node = node.named_children[1]

        condition = self._evaluate(condition_node, scope)
        if php.to_bool(condition):
            return condition if body_node is None else self._evaluate(body_node, scope)
        return self._evaluate(alternative_node, scope)

    def _cast(self, node: SyntaxNode, scope: ResolutionScope) -> PhpValue:
        type_node = node.child_by_field("type") or node.first_child_of_kind("cast_type")
        if type_node is None:
            raise UnresolvableConstantExpression(node, "cast without a type")
        target = type_node.text.strip("() \t").lower()
        cast = _CASTS.get(target)
        if cast is None:
            raise UnresolvableConstantExpression(node, f"({target}) cast needs execution")
        value_node = node.child_by_field("value") or node.named_children[-1]
        return self._apply(node, cast, self._evaluate(value_node, scope))

    def _subscript(self, node: SyntaxNode, scope: ResolutionScope) -> PhpValue:
        parts = node.named_children
        if len(parts) < 2:
            raise UnresolvableConstantExpression(node, "Cannot use [] for reading")
        container = self._evaluate(parts[0], scope)
        offset = self._evaluate(parts[1], scope)
        return self._apply(node, php.fetch, container, offset)

    # -------------------------------------------------------------------------
    # Constants
    # -------------------------------------------------------------------------

    def _class_reference(self, node: SyntaxNode, scope: ResolutionScope) -> str:
        """Resolve the class part of `X::NAME` to a fully qualified name."""
        if node.kind not in ("relative_scope", "name", "qualified_name"):
            raise UnresolvableConstantExpression(node, "dynamic class reference")

        text = node_text(node)
        match text.lower():
            case "self" | "static":
                if scope.class_name is None:
                    raise UnresolvableConstantExpression(
                        node, f'Cannot use "{text}" when no class scope is active'
                    )
                return scope.class_name
            case "parent":
                if scope.parent_name is None:
                    raise UnresolvableConstantExpression(
                        node, 'Cannot use "parent" when current class scope has no parent'
                    )
                return scope.parent_name
        return scope.symbols.resolve_class(text)

    def _class_constant(self, node: SyntaxNode, scope: ResolutionScope) -> PhpValue:
        parts = node.named_children
        if len(parts) != 2:
            raise UnresolvableConstantExpression(node, "malformed class constant access")

        class_name = self._class_reference(parts[0], scope)
        name = node_text(parts[1])
        if name.lower() == "class":
            return class_name
        logger.debug("class_constant_reference", class_name=class_name, constant=name)
        return self._provider.class_constant(class_name, name)

    def _enum_property(self, node: SyntaxNode, scope: ResolutionScope) -> PhpValue:
        """`Enum::Case->name` and `Enum::Case->value`."""
        object_node = node.child_by_field("object") or node.named_children[0]
        name_node = node.child_by_field("name") or node.named_children[-1]
        target = self._evaluate(object_node, scope)
        if not isinstance(target, EnumCase):
            raise UnresolvableConstantExpression(node, "property fetch on a non-enum value")

        match node_text(name_node):
            case "name":
                return target.case_name
            case "value":
                return self._provider.enum_backing_value(target.class_name, target.case_name)
        raise UnresolvableConstantExpression(
            node, f"Undefined property {target.class_name}::${node_text(name_node)}"
        )

    def _constant(self, node: SyntaxNode, scope: ResolutionScope) -> PhpValue:
        """Bare constant name, magic constant or true/false/null."""
        text = node_text(node)
        lowered = text.lstrip("\\").lower()
        if lowered in ("true", "false"):
            return lowered == "true"
        if lowered == "null":
            return None

        magic = text.upper()
        if magic in MAGIC_CONSTANTS:
            return self._magic(magic, node, scope)

        candidates = scope.symbols.constant_candidates(text)
        for candidate in candidates:
            if self._provider.has_namespace_constant(candidate):
                return self._provider.namespace_constant(candidate)

        global_name = candidates[-1]
        if global_name in self._constants:
            return self._constants[global_name]
        raise UnresolvableConstantExpression(node, f'Undefined constant "{global_name}"')

    def _magic(self, name: str, node: SyntaxNode, scope: ResolutionScope) -> PhpValue:
        """Magic constant value from the static scope."""
        match name:
            case "__LINE__":
                return node.line
            case "__FILE__":
                return str(scope.file_path)
            case "__DIR__":
                return str(scope.file_path.parent)
            case "__NAMESPACE__":
                return scope.namespace
            case "__CLASS__":
                return scope.class_name or ""
            case "__TRAIT__":
                return scope.declaring_class_name if scope.in_trait and scope.class_name else ""
            case "__FUNCTION__":
                return scope.function_name or ""
            case "__METHOD__":
                if scope.function_name is None:
                    return ""
                if scope.declaring_class_name is None:
                    return scope.function_name
                return f"{scope.declaring_class_name}::{scope.function_name}"
        raise UnresolvableConstantExpression(node, f"unknown magic constant {name}")

    # -------------------------------------------------------------------------
    # Calls
    # -------------------------------------------------------------------------

    def _call(self, node: SyntaxNode, scope: ResolutionScope) -> PhpValue:
        """Call to an allow-listed pure builtin function."""
        function_node = node.child_by_field("function") or node.named_children[0]
        if function_node.kind not in ("name", "qualified_name"):
            raise UnresolvableConstantExpression(node, "dynamic function call")

        name = scope.symbols.function_candidates(node_text(function_node))[-1].lower()
        arguments = self._arguments(node, scope)

        if name == "constant" and self._allow_constant_function:
            if len(arguments) != 1:
                raise UnresolvableConstantExpression(node, "constant() expects exactly 1 argument")
            return self._constant_by_name(node, php.to_string(arguments[0]))

        function = self._functions.get(name)
        if function is None:
            raise UnresolvableConstantExpression(node, f"call to {name}() needs execution")
        return self._apply(node, function, *arguments)

    def _arguments(self, node: SyntaxNode, scope: ResolutionScope) -> list[PhpValue]:
        arguments_node = node.child_by_field("arguments") or node.first_child_of_kind("arguments")
        if arguments_node is None:
            return []

        values: list[PhpValue] = []
        for argument in arguments_node.children_of_kind("argument", "variadic_placeholder"):
            if argument.kind == "variadic_placeholder":
                raise UnresolvableConstantExpression(argument, "first-class callable syntax")
            if argument.child_by_field("name") is not None:
                raise UnresolvableConstantExpression(argument, "named arguments are not supported")
            operand = _operand(argument)
            is_spread = operand.kind == "variadic_unpacking" or argument.has_token("...")
            if operand.kind == "variadic_unpacking":
                operand = _operand(operand)
            value = self._evaluate(operand, scope)
            if is_spread:
                if not isinstance(value, dict):
                    raise UnresolvableConstantExpression(
                        argument, "Only arrays and Traversables can be unpacked"
                    )
                values.extend(value.values())
            else:
                values.append(value)
        return values

    def _constant_by_name(self, node: SyntaxNode, name: str) -> PhpValue:
        """constant('NAME') / constant('Class::NAME'); names are fully qualified."""
        name = name.lstrip("\\")
        class_name, sep, constant = name.partition("::")
        if sep:
            return self._provider.class_constant(class_name.lstrip("\\"), constant)
        if self._provider.has_namespace_constant(name):
            return self._provider.namespace_constant(name)
        if name in self._constants:
            return self._constants[name]
        if name.lower() in ("true", "false", "null"):
            return {"true": True, "false": False, "null": None}[name.lower()]
        raise UnresolvableConstantExpression(node, f'Undefined constant "{name}"')


def node_text(node: SyntaxNode) -> str:
    """Source text of a name node with whitespace removed."""
    return "".join(node.text.split())


def _operand(node: SyntaxNode) -> SyntaxNode:
    """Single expression child of a wrapper node."""
    children = node.named_children
    if not children:
        raise UnresolvableConstantExpression(node, "missing operand")
    return children[-1]


def _operator(node: SyntaxNode) -> str:
    """Operator token of a unary or binary expression."""
    operator = node.child_by_field("operator")
    if operator is not None:
        return operator.text.strip()
    for child in node.children:
        if not child.is_named:
            return child.text.strip()
    raise UnresolvableConstantExpression(node, "expression without an operator")
