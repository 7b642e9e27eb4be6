"""Shared fixtures: fake application code trees for resolver and checker tests."""

import json
from pathlib import Path

import pytest

from module_insight.config import ENV_KEYS


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's MAGENTO_BP and friends out of the tests."""
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


class CodeTree:
    """Builds a fake application checkout under a code root."""

    def __init__(self, root: Path):
        self.root = root

    def manifest(self, directory: Path, name, requires=None, package_type=None, suggest=None) -> Path:
        """Write a composer.json into ``directory``."""
        directory.mkdir(parents=True, exist_ok=True)
        data = {"require": requires or {}}
        if name:
            data["name"] = name
        if package_type:
            data["type"] = package_type
        if suggest:
            data["suggest"] = suggest
        path = directory / "composer.json"
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    def module(self, vendor: str, module: str, package=None, requires=None) -> Path:
        """Create app/code/<vendor>/<module>/Test/Mftf and return that path."""
        module_dir = self.root / "app" / "code" / vendor / module
        test_dir = module_dir / "Test" / "Mftf"
        test_dir.mkdir(parents=True, exist_ok=True)
        if package:
            self.manifest(module_dir, package, requires)
        return test_dir

    def test_package(self, relative: str, name: str, modules) -> Path:
        """Create a standalone functional-test package declaring ``modules``."""
        directory = self.root / relative
        suggest = {
            f"pkg/{m.lower()}": f"type: magento2-module, name: {m}, version: *" for m in modules
        }
        self.manifest(directory, name, package_type="magento2-functional-test-module", suggest=suggest)
        return directory

    def xml(self, path: Path, content: str) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path


@pytest.fixture
def code_root(tmp_path):
    root = tmp_path / "magento"
    root.mkdir()
    return root.resolve()


@pytest.fixture
def tree(code_root):
    return CodeTree(code_root)


BAR_DATA_XML = """<?xml version="1.0" encoding="UTF-8"?>
<entities>
    <entity name="BarData" type="bar">
        <data key="sku">bar-sku</data>
    </entity>
</entities>
"""

USES_BAR_XML = """<?xml version="1.0" encoding="UTF-8"?>
<tests>
    <test name="{name}">
        <fillField selector="#sku" userInput="{{{{BarData.sku}}}}" stepKey="fillSku"/>
        <see userInput="{{{{_ENV.MAGENTO_BASE_URL}}}}" stepKey="seeBase"/>
    </test>
</tests>
"""


@pytest.fixture
def dependency_tree(tree):
    """Three modules: Foo requires Bar, Baz requires nothing; both use Bar's data.

    Returns the test files of Foo and Baz.
    """
    foo = tree.module("Acme", "Foo", package="acme/module-foo", requires={"acme/module-bar": "*"})
    bar = tree.module("Acme", "Bar", package="acme/module-bar", requires={"php": "~8.1"})
    baz = tree.module("Acme", "Baz", package="acme/module-baz")

    tree.xml(bar / "Data" / "BarData.xml", BAR_DATA_XML)
    foo_test = tree.xml(foo / "Test" / "FooTest.xml", USES_BAR_XML.format(name="FooTest"))
    baz_test = tree.xml(baz / "Test" / "BazTest.xml", USES_BAR_XML.format(name="BazTest"))
    return {"foo": foo_test, "baz": baz_test}
