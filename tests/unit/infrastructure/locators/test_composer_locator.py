"""Tests for ComposerLocator.

Tests:
- composer.json validation (FAIL-FIRST)
- PSR-4 lookup, longest prefix first, multiple directories
- PSR-0 lookup with underscores in class names
- autoload-dev handling
- classmap scanning
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest

from phpreflect.domain.exceptions.configuration import LocatorConfigurationError
from phpreflect.infrastructure.locators.composer import ComposerLocator

if TYPE_CHECKING:
    from pathlib import Path


def make_project(root: Path, manifest: object, files: tuple[str, ...] = ()) -> Path:
    """Write composer.json and empty PHP files under root."""
    (root / "composer.json").write_text(json.dumps(manifest))
    for relative in files:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("<?php\n")
    return root


class TestComposerConfiguration:
    """Tests for composer.json validation."""

    def test_missing_manifest(self, tmp_path: Path) -> None:
        with pytest.raises(LocatorConfigurationError, match="file not found") as exc_info:
            ComposerLocator(tmp_path)
        assert exc_info.value.path == tmp_path / "composer.json"

    def test_invalid_json(self, tmp_path: Path) -> None:
        (tmp_path / "composer.json").write_text("{not json")
        with pytest.raises(LocatorConfigurationError, match="invalid JSON"):
            ComposerLocator(tmp_path)

    def test_top_level_not_object(self, tmp_path: Path) -> None:
        make_project(tmp_path, ["autoload"])
        with pytest.raises(LocatorConfigurationError, match="top level must be an object"):
            ComposerLocator(tmp_path)

    def test_section_not_object(self, tmp_path: Path) -> None:
        make_project(tmp_path, {"autoload": "src/"})
        with pytest.raises(LocatorConfigurationError, match="'autoload' must be an object"):
            ComposerLocator(tmp_path)

    def test_rules_not_object(self, tmp_path: Path) -> None:
        make_project(tmp_path, {"autoload": {"psr-4": ["src/"]}})
        with pytest.raises(LocatorConfigurationError, match="autoload rules must be an object"):
            ComposerLocator(tmp_path)

    def test_bad_directories(self, tmp_path: Path) -> None:
        make_project(tmp_path, {"autoload": {"psr-4": {"App\\": 42}}})
        with pytest.raises(LocatorConfigurationError, match="directories for 'App\\\\'"):
            ComposerLocator(tmp_path)

    def test_no_autoload(self, tmp_path: Path) -> None:
        """A manifest without autoload rules locates nothing."""
        make_project(tmp_path, {"name": "acme/empty"})
        assert ComposerLocator(tmp_path).locate_class("App\\User") is None


class TestPsr4:
    """Tests for PSR-4 rules."""

    def test_locate(self, tmp_path: Path) -> None:
        make_project(tmp_path, {"autoload": {"psr-4": {"App\\": "src/"}}}, ("src/Model/User.php",))
        locator = ComposerLocator(tmp_path)

        expected = (tmp_path / "src/Model/User.php").resolve()
        assert locator.locate_class("App\\Model\\User") == expected
        assert locator.locate_class("\\App\\Model\\User") is not None

    def test_missing_file(self, tmp_path: Path) -> None:
        make_project(tmp_path, {"autoload": {"psr-4": {"App\\": "src/"}}})
        assert ComposerLocator(tmp_path).locate_class("App\\Missing") is None

    def test_prefix_mismatch(self, tmp_path: Path) -> None:
        make_project(tmp_path, {"autoload": {"psr-4": {"App\\": "src/"}}}, ("src/User.php",))
        assert ComposerLocator(tmp_path).locate_class("Other\\User") is None

    def test_longest_prefix_first(self, tmp_path: Path) -> None:
        manifest = {"autoload": {"psr-4": {"App\\": "src/", "App\\Http\\": "http/"}}}
        make_project(tmp_path, manifest, ("src/Http/Client.php", "http/Client.php"))

        found = ComposerLocator(tmp_path).locate_class("App\\Http\\Client")

        assert found == (tmp_path / "http/Client.php").resolve()

    def test_falls_back_to_shorter_prefix(self, tmp_path: Path) -> None:
        manifest = {"autoload": {"psr-4": {"App\\": "src/", "App\\Http\\": "http/"}}}
        make_project(tmp_path, manifest, ("src/Http/Request.php",))

        found = ComposerLocator(tmp_path).locate_class("App\\Http\\Request")

        assert found == (tmp_path / "src/Http/Request.php").resolve()

    def test_multiple_directories(self, tmp_path: Path) -> None:
        manifest = {"autoload": {"psr-4": {"App\\": ["src/", "lib/"]}}}
        make_project(tmp_path, manifest, ("lib/Tool.php",))

        found = ComposerLocator(tmp_path).locate_class("App\\Tool")

        assert found == (tmp_path / "lib/Tool.php").resolve()

    def test_empty_prefix_is_fallback(self, tmp_path: Path) -> None:
        make_project(tmp_path, {"autoload": {"psr-4": {"": "src/"}}}, ("src/Vendor/Thing.php",))

        assert ComposerLocator(tmp_path).locate_class("Vendor\\Thing") is not None


class TestPsr0:
    """Tests for PSR-0 rules."""

    def test_namespaced(self, tmp_path: Path) -> None:
        manifest = {"autoload": {"psr-0": {"Acme\\": "lib/"}}}
        make_project(tmp_path, manifest, ("lib/Acme/Util/Str.php",))

        found = ComposerLocator(tmp_path).locate_class("Acme\\Util\\Str")

        assert found == (tmp_path / "lib/Acme/Util/Str.php").resolve()

    def test_underscores_in_short_name(self, tmp_path: Path) -> None:
        manifest = {"autoload": {"psr-0": {"Twig_": "lib/"}}}
        make_project(tmp_path, manifest, ("lib/Twig/Node/Expr.php",))

        found = ComposerLocator(tmp_path).locate_class("Twig_Node_Expr")

        assert found == (tmp_path / "lib/Twig/Node/Expr.php").resolve()

    def test_underscores_in_namespace_kept(self, tmp_path: Path) -> None:
        manifest = {"autoload": {"psr-0": {"My_Lib\\": "lib/"}}}
        make_project(tmp_path, manifest, ("lib/My_Lib/Some/Thing.php",))

        found = ComposerLocator(tmp_path).locate_class("My_Lib\\Some_Thing")

        assert found == (tmp_path / "lib/My_Lib/Some/Thing.php").resolve()


class TestAutoloadDev:
    """Tests for the autoload-dev section."""

    MANIFEST = {
        "autoload": {"psr-4": {"App\\": "src/"}},
        "autoload-dev": {"psr-4": {"App\\Tests\\": "tests/"}},
    }

    def test_included_by_default(self, tmp_path: Path) -> None:
        make_project(tmp_path, self.MANIFEST, ("tests/UserTest.php",))
        assert ComposerLocator(tmp_path).locate_class("App\\Tests\\UserTest") is not None

    def test_excluded(self, tmp_path: Path) -> None:
        make_project(tmp_path, self.MANIFEST, ("tests/UserTest.php",))
        locator = ComposerLocator(tmp_path, include_dev=False)

        assert locator.locate_class("App\\Tests\\UserTest") is None


class TestClassmap:
    """Tests for classmap entries."""

    @staticmethod
    def write(path: Path, code: str) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(code)

    def test_directory_scan(self, tmp_path: Path) -> None:
        make_project(tmp_path, {"autoload": {"classmap": ["lib/"]}})
        self.write(
            tmp_path / "lib/helpers.php",
            "<?php\nnamespace Acme\\Util;\nclass Str {}\ninterface Stringable {}\n",
        )
        self.write(tmp_path / "lib/legacy/Old.inc", "<?php\nclass OldThing {}\n")
        self.write(tmp_path / "lib/notes.txt", "class Ignored {}\n")
        locator = ComposerLocator(tmp_path)

        helpers = (tmp_path / "lib/helpers.php").resolve()
        assert locator.locate_class("Acme\\Util\\Str") == helpers
        assert locator.locate_class("\\acme\\util\\STRINGABLE") == helpers
        assert locator.locate_class("OldThing") == (tmp_path / "lib/legacy/Old.inc").resolve()
        assert locator.locate_class("Ignored") is None

    def test_single_file(self, tmp_path: Path) -> None:
        make_project(tmp_path, {"autoload": {"classmap": ["bootstrap.php"]}})
        code = "<?php\nnamespace {\n    enum Mode { case On; }\n}\n"
        self.write(tmp_path / "bootstrap.php", code)

        found = ComposerLocator(tmp_path).locate_class("Mode")

        assert found == (tmp_path / "bootstrap.php").resolve()

    def test_classmap_wins_over_psr4(self, tmp_path: Path) -> None:
        manifest = {"autoload": {"psr-4": {"App\\": "src/"}, "classmap": ["override/"]}}
        make_project(tmp_path, manifest, ("src/User.php",))
        self.write(tmp_path / "override/User.php", "<?php\nnamespace App;\nclass User {}\n")

        found = ComposerLocator(tmp_path).locate_class("App\\User")

        assert found == (tmp_path / "override/User.php").resolve()

    def test_broken_file_is_skipped(self, tmp_path: Path) -> None:
        make_project(tmp_path, {"autoload": {"classmap": ["lib/"]}})
        self.write(tmp_path / "lib/Broken.php", "<?php\nclass Broken {\n")
        self.write(tmp_path / "lib/Fine.php", "<?php\nclass Fine {}\n")
        locator = ComposerLocator(tmp_path)

        assert locator.locate_class("Broken") is None
        assert locator.locate_class("Fine") == (tmp_path / "lib/Fine.php").resolve()

    def test_missing_path(self, tmp_path: Path) -> None:
        make_project(tmp_path, {"autoload": {"classmap": ["nowhere/"]}})
        assert ComposerLocator(tmp_path).locate_class("Anything") is None

    def test_invalid_classmap(self, tmp_path: Path) -> None:
        make_project(tmp_path, {"autoload": {"classmap": "lib/"}})
        with pytest.raises(LocatorConfigurationError, match="classmap must be a list"):
            ComposerLocator(tmp_path)

    def test_dev_classmap_excluded(self, tmp_path: Path) -> None:
        make_project(tmp_path, {"autoload-dev": {"classmap": ["tests/"]}})
        self.write(tmp_path / "tests/Fixture.php", "<?php\nclass Fixture {}\n")

        assert ComposerLocator(tmp_path).locate_class("Fixture") is not None
        assert ComposerLocator(tmp_path, include_dev=False).locate_class("Fixture") is None
