"""Tests for the public API."""

from module_insight import ResolverConfig, create_resolver, run_dependency_check
from module_insight.resolution import RegistrationFileRegistry, StaticEnabledModules


class TestCreateResolver:
    def test_defaults_to_registration_files(self, code_root):
        resolver = create_resolver(code_root=code_root)
        assert isinstance(resolver.registry, RegistrationFileRegistry)
        assert resolver.config.code_root == code_root

    def test_registration_names_used(self, tree, code_root):
        test_dir = tree.module("Acme", "FooModule")
        (code_root / "app/code/Acme/FooModule/registration.php").write_text(
            "<?php\nuse Magento\\Framework\\Component\\ComponentRegistrar;\n"
            "ComponentRegistrar::register(ComponentRegistrar::MODULE, 'Acme_Foo', __DIR__);\n"
        )
        resolver = create_resolver(code_root=code_root)
        assert resolver.get_modules_path() == {"Acme_Foo": test_dir}

    def test_explicit_config_and_enabled_source(self, tree, code_root):
        tree.module("Acme", "Foo")
        tree.module("Acme", "Bar")
        resolver = create_resolver(
            ResolverConfig(code_root=code_root),
            enabled_source=StaticEnabledModules(["Acme_Bar"]),
        )
        assert list(resolver.get_modules_path()) == ["Acme_Bar"]

    def test_check_through_public_api(self, dependency_tree, code_root):
        result = run_dependency_check(create_resolver(code_root=code_root), write_report=False)
        assert len(result.violations) == 1
