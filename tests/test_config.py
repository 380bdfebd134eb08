"""
Container configuration.
"""

import pytest

from uioc import IoC, IoCConfig, ConfigError, DependencyParser, IoCDiagnostics

from sample_components import Repo


class TestIoCConfig:

    def test_defaults(self):
        config = IoCConfig.from_mapping({})
        assert config.loader is None
        assert config.parser is None
        assert config.components == {}
        assert config.diagnostics is None

    def test_unknown_field(self):
        with pytest.raises(ConfigError, match="Unknown IoC config field"):
            IoCConfig.from_mapping({"loaders": lambda names: []})

    def test_type_validation(self):
        with pytest.raises(ConfigError, match="loader"):
            IoCConfig.from_mapping({"loader": "require"})
        with pytest.raises(ConfigError, match="components"):
            IoCConfig.from_mapping({"components": ["repo"]})
        with pytest.raises(ConfigError, match="parser"):
            IoCConfig.from_mapping({"parser": DependencyParser(None)})

    def test_coerce_applies_overrides(self):
        base = IoCConfig(components={"a": {"creator": Repo}})
        loader = lambda names: []  # noqa: E731
        config = IoCConfig.coerce(base, {"loader": loader})
        assert config.loader is loader
        assert "a" in config.components

    def test_coerce_rejects_other_types(self):
        with pytest.raises(ConfigError):
            IoCConfig.coerce(42)


class TestIoCConstruction:

    def test_from_config_object(self):
        diagnostics = IoCDiagnostics()
        ioc = IoC(IoCConfig(components={"a": {"creator": Repo}}, diagnostics=diagnostics))
        assert ioc.has_component("a")
        assert ioc.diagnostics is diagnostics
        assert type(ioc.parser) is DependencyParser

    def test_from_mapping(self):
        ioc = IoC({"components": {"a": {"creator": Repo}}})
        assert ioc.has_component("a")

    def test_keyword_fields(self):
        loader = lambda names: []  # noqa: E731
        ioc = IoC(loader=loader)
        assert ioc.module_loader is loader

    def test_bad_component_config(self):
        with pytest.raises(ConfigError):
            IoC(components={"a": {"creator": Repo, "scope": "eternal"}})
