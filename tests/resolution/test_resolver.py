"""Tests for ModuleResolver path aggregation and filtering."""

import logging
import os
import shutil
from pathlib import Path

import pytest

from module_insight.config import ResolverConfig
from module_insight.exceptions import (
    EnabledModulesUnavailableError,
    InvalidConfigError,
    InvalidPathError,
)
from module_insight.resolution import (
    ModuleResolver,
    StaticComponentRegistry,
    StaticEnabledModules,
    flatten_ownership,
)

DEV_TESTS = "dev/tests/acceptance/tests/functional"


class FailingSource:
    def fetch(self):
        raise EnabledModulesUnavailableError("connection refused", context={"url": "http://shop"})


def make_resolver(code_root, enabled=None, registry=None, **config):
    source = StaticEnabledModules(enabled) if enabled is not None else None
    return ModuleResolver(
        ResolverConfig(code_root=code_root, **config),
        registry=registry,
        enabled_source=source,
    )


class TestFlattenOwnership:
    """Test the all-or-nothing flattening rule."""

    def test_single_owner_paths(self, tmp_path):
        ownership = {tmp_path / "a": ["Acme_A"], tmp_path / "b": ["Acme_B"]}
        assert flatten_ownership(ownership, ["Acme_A"]) == {"Acme_A": [tmp_path / "a"]}

    def test_shared_path_requires_every_owner(self):
        shared = Path("/srv/shop/vendor/acme/shared-tests")
        ownership = {shared: ["Acme_Foo", "Acme_Bar"]}
        assert flatten_ownership(ownership, ["Acme_Foo"]) == {}
        assert flatten_ownership(ownership, ["Acme_Foo", "Acme_Bar"]) == {
            "Acme_shared-tests": [shared]
        }

    def test_no_filter_keeps_everything(self, tmp_path):
        ownership = {tmp_path / "a": ["Acme_A"], tmp_path / "b": ["Acme_A"]}
        assert flatten_ownership(ownership) == {"Acme_A": [tmp_path / "a", tmp_path / "b"]}


class TestModuleResolverDiscovery:
    """Test discovery through conventions, registry and composer packages."""

    def test_convention_modules_without_enabled_source(self, tree, code_root, caplog):
        foo = tree.module("Acme", "Foo")
        bar_dir = code_root / "vendor/acme/module-bar/Test/Mftf"
        bar_dir.mkdir(parents=True)

        with caplog.at_level(logging.WARNING, logger="module_insight"):
            paths = make_resolver(code_root).get_modules_path()

        assert paths == {"Acme_Foo": foo, "Acme_module-bar": bar_dir}
        assert "including every discovered module" in caplog.text

    def test_enabled_filter_and_whitelist(self, tree, code_root):
        tree.module("Acme", "Foo")
        tree.module("Acme", "Bar")
        tree.module("Acme", "Baz")

        resolver = make_resolver(code_root, enabled=["Acme_Foo"], module_whitelist=("Acme_Baz",))
        assert sorted(resolver.get_modules_path()) == ["Acme_Baz", "Acme_Foo"]

    def test_force_all_skips_filter(self, tree, code_root):
        tree.module("Acme", "Foo")
        tree.module("Acme", "Bar")

        resolver = make_resolver(code_root, enabled=["Acme_Foo"])
        assert sorted(resolver.get_modules_path(force_all=True)) == ["Acme_Bar", "Acme_Foo"]
        assert sorted(resolver.get_modules_path()) == ["Acme_Foo"]

    def test_force_generate_config(self, tree, code_root):
        tree.module("Acme", "Foo")
        resolver = ModuleResolver(
            ResolverConfig(code_root=code_root, force_generate=True), enabled_source=FailingSource()
        )
        assert list(resolver.get_modules_path()) == ["Acme_Foo"]

    def test_registry_names_win_over_inference(self, code_root):
        test_dir = code_root / "vendor/magento/module-catalog/Test/Mftf"
        test_dir.mkdir(parents=True)
        registry = StaticComponentRegistry(
            {"module": {"Magento_Catalog": str(code_root / "vendor/magento/module-catalog")}}
        )
        paths = make_resolver(code_root, registry=registry).get_modules_path()
        assert paths == {"Magento_Catalog": test_dir}

    def test_tests_module_path_subdirectories(self, code_root):
        tests_root = code_root / DEV_TESTS / "Acme"
        (tests_root / "CheckoutTests").mkdir(parents=True)
        paths = make_resolver(code_root, tests_module_path=tests_root).get_modules_path()
        assert paths == {"Acme_CheckoutTests": tests_root / "CheckoutTests"}

    def test_composer_names_win_on_shared_path(self, tree, code_root):
        tests_root = code_root / DEV_TESTS / "Acme"
        directory = tree.test_package(f"{DEV_TESTS}/Acme/FooTests", "acme/foo-tests", ["Acme_Foo"])
        paths = make_resolver(code_root, tests_module_path=tests_root).get_modules_path()
        assert paths == {"Acme_Foo": directory}

    def test_shared_test_package_all_or_nothing(self, tree, code_root):
        directory = tree.test_package(
            f"{DEV_TESTS}/Acme/SharedTests", "acme/shared-tests", ["Acme_Foo", "Acme_Bar"]
        )
        assert make_resolver(code_root, enabled=["Acme_Foo"]).get_modules_path() == {}
        both = make_resolver(code_root, enabled=["Acme_Foo", "Acme_Bar"]).get_modules_path()
        assert both == {"Acme_SharedTests": directory}

    def test_multiple_paths_per_module(self, tree, code_root):
        app_dir = tree.module("Acme", "Foo")
        test_pkg = tree.test_package(f"{DEV_TESTS}/Acme/FooTests", "acme/foo-tests", ["Acme_Foo"])
        resolver = make_resolver(code_root)

        assert resolver.get_modules_path(flat=False) == {"Acme_Foo": [app_dir, test_pkg]}
        assert resolver.get_modules_path() == {"Acme_Foo": test_pkg}
        assert resolver.all_module_paths() == [app_dir, test_pkg]

    def test_blocklisted_modules_removed_even_if_whitelisted(self, code_root):
        sample = code_root / "app/code/Magento/SampleTests/Test/Mftf"
        sample.mkdir(parents=True)
        registry = StaticComponentRegistry(
            {"module": {"SampleTests": str(code_root / "app/code/Magento/SampleTests")}}
        )
        resolver = make_resolver(
            code_root, enabled=[], registry=registry, module_whitelist=("SampleTests",)
        )
        assert resolver.get_modules_path() == {}

    def test_custom_paths_always_included(self, tree, code_root, tmp_path):
        tree.module("Acme", "Foo")
        custom = tmp_path / "extra" / "Widget"
        custom.mkdir(parents=True)
        resolver = make_resolver(code_root, enabled=[], custom_module_paths=(custom,))
        assert resolver.get_modules_path() == {"UnknownVendor_Widget": custom}


class TestModuleResolverState:
    """Test memoization and failure handling."""

    def test_results_are_memoized(self, tree, code_root):
        foo = tree.module("Acme", "Foo")
        resolver = make_resolver(code_root)
        first = resolver.get_modules_path()

        shutil.rmtree(code_root / "app")
        assert resolver.get_modules_path() == first == {"Acme_Foo": foo}
        assert make_resolver(code_root).get_modules_path() == {}

    def test_enabled_modules_fetched_once(self, tree, code_root):
        tree.module("Acme", "Foo")

        class CountingSource:
            calls = 0

            def fetch(self):
                CountingSource.calls += 1
                return ["Acme_Foo"]

        resolver = ModuleResolver(ResolverConfig(code_root=code_root), enabled_source=CountingSource())
        resolver.get_enabled_modules()
        resolver.get_modules_path()
        assert CountingSource.calls == 1

    def test_missing_code_root_setting(self):
        with pytest.raises(InvalidConfigError) as exc:
            ModuleResolver(ResolverConfig()).get_modules_path()
        assert exc.value.key == "code_root"

    def test_code_root_must_exist(self, tmp_path):
        with pytest.raises(InvalidPathError):
            make_resolver(tmp_path / "missing").get_modules_path()

    def test_enabled_source_failure_propagates(self, tree, code_root):
        tree.module("Acme", "Foo")
        resolver = ModuleResolver(ResolverConfig(code_root=code_root), enabled_source=FailingSource())
        with pytest.raises(EnabledModulesUnavailableError) as exc:
            resolver.get_modules_path()
        assert exc.value.details["url"] == "http://shop"
        assert list(resolver.get_modules_path(force_all=True)) == ["Acme_Foo"]


class TestModuleDescriptors:
    def test_package_name_from_module_manifest(self, tree, code_root):
        tree.module("Acme", "Foo", package="acme/module-foo")
        tree.module("Acme", "Bar")
        descriptors = make_resolver(code_root).get_module_descriptors()

        assert descriptors["Acme_Foo"].composer_package_name == "acme/module-foo"
        assert descriptors["Acme_Bar"].composer_package_name is None
        assert descriptors["Acme_Foo"].primary_path == code_root / "app/code/Acme/Foo/Test/Mftf"

    def test_sort_files_delegates_to_sorter(self, code_root, tmp_path):
        class ReverseSorter:
            def sort(self, files):
                return list(reversed(files))

        files = [tmp_path / "a.xml", tmp_path / "b.xml"]
        default = make_resolver(code_root)
        custom = ModuleResolver(ResolverConfig(code_root=code_root), sequence_sorter=ReverseSorter())
        assert default.sort_files_by_module_sequence(files) == files
        assert custom.sort_files_by_module_sequence(files) == files[::-1]


class TestModuleResolverSymlinks:
    @pytest.mark.skipif(not hasattr(os, "symlink"), reason="symlinks unsupported")
    def test_symlinked_module_dedupes_against_registry(self, code_root, tmp_path):
        """A symlinked app/code module and its registry entry are one path."""
        real = tmp_path / "checkout" / "Foo"
        (real / "Test" / "Mftf").mkdir(parents=True)
        (code_root / "app/code/Acme").mkdir(parents=True)
        (code_root / "app/code/Acme/Foo").symlink_to(real, target_is_directory=True)
        registry = StaticComponentRegistry({"module": {"Acme_Foo": str(real)}})

        paths = make_resolver(code_root, registry=registry).get_modules_path(flat=False)
        assert paths == {"Acme_Foo": [real.resolve() / "Test" / "Mftf"]}


class TestCustomModulePaths:
    def test_override_of_resolved_module_is_logged(self, tree, code_root, tmp_path, caplog):
        foo = tree.module("Acme", "Foo")
        custom = tmp_path / "extra" / "vendor" / "acme" / "Foo"
        custom.mkdir(parents=True)
        resolver = make_resolver(code_root, custom_module_paths=(custom,))

        with caplog.at_level(logging.INFO, logger="module_insight"):
            grouped = resolver.get_modules_path(flat=False)

        assert grouped == {"Acme_Foo": [foo, custom]}
        assert resolver.get_modules_path() == {"Acme_Foo": custom}
        assert f"custom module {custom} overrides resolved path of Acme_Foo" in caplog.text
