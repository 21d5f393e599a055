"""Reflection of a composer project located through its autoload rules."""

import pytest

from phpreflect.application.reporters.console import ConsoleConfig, ConsoleReporter
from phpreflect.application.services.engine import ReflectionEngine
from phpreflect.domain.exceptions.lookup import ClassNotFoundError
from phpreflect.domain.model.values import EnumCase
from phpreflect.infrastructure.locators.composer import ComposerLocator
from tests.factories import FIXTURES

SHOP = FIXTURES / "shop"


@pytest.fixture(scope="module")
def engine() -> ReflectionEngine:
    """Engine locating classes of the shop fixture project."""
    return ReflectionEngine(ComposerLocator(SHOP))


class TestLocating:
    """Classes are found through composer.json on first use."""

    def test_psr4_class(self, engine: ReflectionEngine) -> None:
        """PSR-4 class is parsed from its conventional path."""
        product = engine.get_class("Shop\\Model\\Product")

        assert product.file_name == (SHOP / "src/Model/Product.php").resolve()
        assert product.short_name == "Product"
        assert product.namespace_name == "Shop\\Model"

    def test_psr0_class(self, engine: ReflectionEngine) -> None:
        """PSR-0 class with underscores maps to nested directories."""
        money = engine.get_class("Legacy_Money")

        assert money.get_constant("UNIT") == 1024
        assert money.in_namespace() is False

    def test_autoload_dev_class(self, engine: ReflectionEngine) -> None:
        """autoload-dev rules are used by default."""
        test_case = engine.get_class("Shop\\Tests\\ProductTest")
        assert test_case.get_constant("SUBJECT") == "Shop\\Model\\Product"

    def test_unknown_class(self, engine: ReflectionEngine) -> None:
        """Classes without a file raise ClassNotFoundError."""
        with pytest.raises(ClassNotFoundError, match="the locator has no file for it"):
            engine.get_class("Shop\\Missing")

    def test_same_object_on_repeat(self, engine: ReflectionEngine) -> None:
        """Lookups are case-insensitive and return one object."""
        assert engine.get_class("shop\\model\\PRODUCT") is engine.get_class("Shop\\Model\\Product")


class TestHierarchyAcrossFiles:
    """Ancestors declared in other files are located lazily."""

    def test_ancestors(self, engine: ReflectionEngine) -> None:
        """Parent, interface and trait names."""
        product = engine.get_class("Shop\\Model\\Product")

        assert product.is_final() is True
        assert product.get_parent_class_name() == "Shop\\Model\\Entity"
        assert product.get_parent_class().is_abstract() is True
        assert product.get_interface_names() == ["Shop\\Contracts\\HasPrice"]
        assert product.get_trait_names() == ["Shop\\Support\\Timestamps"]
        assert product.implements_interface("Shop\\Contracts\\HasPrice") is True
        assert product.is_subclass_of("Shop\\Model\\Entity") is True

    def test_constants(self, engine: ReflectionEngine) -> None:
        """Constant expressions reach into parents, interfaces and enums."""
        product = engine.get_class("Shop\\Model\\Product")

        assert product.get_constants() == {
            "KEY": "ent-product",
            "LABEL": "EUR active",
            "LIMITS": {"min": 1, "max": 20},
            "MAX": 20,
            "PREFIX": "ent",
            "CURRENCY": "EUR",
        }

    def test_methods(self, engine: ReflectionEngine) -> None:
        """Own methods first, then parent, interface and trait methods."""
        product = engine.get_class("Shop\\Model\\Product")

        names = [m.name for m in product.get_methods()]
        assert names == ["__construct", "price", "key", "touch", "stamp"]
        assert product.get_method("TOUCH").class_name == "Shop\\Model\\Product"

    def test_prototypes(self, engine: ReflectionEngine) -> None:
        """Prototypes come from interfaces and abstract parents."""
        product = engine.get_class("Shop\\Model\\Product")

        assert product.get_method("price").get_prototype().class_name == "Shop\\Contracts\\HasPrice"
        assert product.get_method("key").get_prototype().class_name == "Shop\\Model\\Entity"
        assert product.get_constructor().has_prototype() is False

    def test_properties(self, engine: ReflectionEngine) -> None:
        """Parent privates are hidden, trait properties are visible."""
        product = engine.get_class("Shop\\Model\\Product")

        names = [p.name for p in product.get_properties()]
        assert names == ["registry", "name", "status", "id", "createdAt"]
        assert product.get_property("name").is_promoted() is True
        assert product.get_property("name").is_readonly() is True
        assert product.get_static_properties() == {"registry": {}}

    def test_constructor_defaults(self, engine: ReflectionEngine) -> None:
        """Promoted parameter defaults resolve enum cases."""
        parameters = engine.get_class("Shop\\Model\\Product").get_constructor().get_parameters()

        assert [p.name for p in parameters] == ["id", "name", "status"]
        assert parameters[0].is_optional() is False
        assert parameters[1].get_default_value() == "unnamed"
        assert parameters[2].get_default_value() == EnumCase("Shop\\Model\\Status", "Draft")


class TestEnums:
    """Enum declared in its own file."""

    def test_cases(self, engine: ReflectionEngine) -> None:
        status = engine.get_class("Shop\\Model\\Status")

        assert status.is_enum() is True
        assert str(status.get_backing_type()) == "string"
        assert [c.name for c in status.get_cases()] == ["Draft", "Active"]
        assert status.get_constant("DEFAULT") == EnumCase("Shop\\Model\\Status", "Draft")


class TestFiles:
    """Files and namespace-level entities."""

    def test_strict_file(self, engine: ReflectionEngine) -> None:
        """declare(strict_types=1) and class doc comment."""
        reflected = engine.get_file(SHOP / "src/Model/Product.php")

        assert reflected.is_strict_mode() is True
        product = reflected.get_namespace("Shop\\Model").get_class("Product")
        assert product.doc_comment == "/**\n * Sellable product.\n */"
        assert product is engine.get_class("Shop\\Model\\Product")

    def test_functions(self, engine: ReflectionEngine) -> None:
        """Function defaults use namespace constants and enum cases."""
        namespace = engine.get_file(SHOP / "src/functions.php").get_namespace("Shop")

        assert namespace.get_constants() == {"TAX_RATE": 0.2}
        assert list(namespace.get_functions()) == ["Shop\\gross", "Shop\\describe"]

        rate = namespace.get_function("gross").get_parameters()[1]
        assert rate.get_default_value() == 0.2
        assert rate.is_default_value_constant() is True

        describe = engine.get_function("Shop\\describe")
        status, sep = describe.get_parameters()
        assert status.get_default_value() == EnumCase("Shop\\Model\\Status", "Active")
        assert sep.get_default_value() == "\n"
        assert describe.get_static_variables() == {"calls": 0}


class TestReport:
    """Console report of a located class."""

    def test_report(self, engine: ReflectionEngine) -> None:
        config = ConsoleConfig(color=False, width=200)
        output = ConsoleReporter(config).report(engine.get_class("Shop\\Model\\Product"))

        assert "class Shop\\Model\\Product" in output
        assert "Modifiers: final" in output
        assert "Implements: Shop\\Contracts\\HasPrice" in output
        assert "'EUR active'" in output
