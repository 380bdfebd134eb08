"""
Dependency parsing and module aggregation.
"""

import logging

from uioc import IoC
from uioc.parser import DependencyParser, has_import, has_reference

from sample_components import AutoClient, Repo


class TestPredicates:

    def test_reference(self):
        assert has_reference({"$ref": "a"}) is True
        assert has_reference({"ref": "a"}) is False
        assert has_reference("$ref") is False

    def test_import(self):
        assert has_import({"$import": "a", "args": []}) is True
        assert has_import({"$ref": "a"}) is False
        assert has_import(None) is False


class TestDepsExtraction:

    def setup_method(self):
        self.parser = DependencyParser(IoC())

    def test_deps_from_args_keeps_order_and_skips_literals(self):
        args = [{"$ref": "b"}, "literal", 3, {"$ref": "a"}, {"$ref": "b"}]
        assert self.parser.get_deps_from_args(args) == ["b", "a", "b"]

    def test_deps_from_properties(self):
        props = {"x": {"$ref": "repo"}, "name": "literal", "y": {"$ref": "cache"}}
        assert self.parser.get_deps_from_properties(props) == ["repo", "cache"]

    def test_registration_computes_deps(self):
        ioc = IoC(components={
            "svc": {
                "creator": Repo,
                "args": [{"$ref": "a"}, 1],
                "properties": {"p": {"$ref": "b"}, "q": 2},
            },
        })
        component = ioc.get_component_config("svc")
        assert component.arg_deps == ["a"]
        assert component.prop_deps == ["b"]
        assert component.setter_deps is None


class TestSetterDiscovery:

    def test_only_registered_and_undeclared(self):
        ioc = IoC(components={
            "repo": {"creator": Repo},
            "cache": {"creator": dict},
            "auto": {"creator": AutoClient, "auto": True},
        })
        instance = AutoClient()
        deps = ioc.parser.get_deps_from_setters(instance, {})
        assert sorted(deps) == ["cache", "repo"]

    def test_declared_properties_are_excluded(self):
        ioc = IoC(components={"repo": {"creator": Repo}, "cache": {"creator": dict}})
        deps = ioc.parser.get_deps_from_setters(AutoClient(), {"repo": "declared"})
        assert deps == ["cache"]


class TestDependentModules:

    def test_shared_module_listed_once(self):
        ioc = IoC(components={
            "repo": {"creator": "app.repos:Repo"},
            "factory": {"creator": "app.repos:make_repo", "is_factory": True},
            "svc": {"creator": "app.services:Service", "args": [{"$ref": "repo"}, {"$ref": "factory"}]},
        })
        parser = ioc.parser
        svc = ioc.get_component_config("svc")
        module_map = parser.get_dependent_modules(svc, {}, svc.arg_deps)

        assert list(module_map) == ["app.services", "app.repos"]
        assert [c.id for c in module_map["app.repos"]] == ["repo", "factory"]
        assert [c.id for c in module_map["app.services"]] == ["svc"]

    def test_merging_passes_does_not_duplicate(self):
        ioc = IoC(components={
            "repo": {"creator": "app.repos:Repo"},
            "a": {"creator": "app.services:Service", "args": [{"$ref": "repo"}]},
            "b": {"creator": "app.services:Service", "args": [{"$ref": "repo"}]},
        })
        parser = ioc.parser
        module_map = {}
        for component_id in ("a", "b"):
            component = ioc.get_component_config(component_id)
            module_map = parser.get_dependent_modules(component, module_map, component.arg_deps)

        assert [c.id for c in module_map["app.repos"]] == ["repo"]
        assert [c.id for c in module_map["app.services"]] == ["a", "b"]

    def test_bound_components_are_skipped(self):
        ioc = IoC(components={"repo": {"creator": Repo}, "svc": {"creator": Repo, "args": [{"$ref": "repo"}]}})
        svc = ioc.get_component_config("svc")
        assert ioc.parser.get_dependent_modules(svc, {}, svc.arg_deps) == {}

    def test_unknown_dependency_is_warned(self, caplog):
        ioc = IoC(components={"svc": {"creator": Repo, "args": [{"$ref": "ghost"}]}})
        svc = ioc.get_component_config("svc")
        with caplog.at_level(logging.WARNING, logger="uioc.parser"):
            assert ioc.parser.get_dependent_modules(svc, {}, svc.arg_deps) == {}
        assert "ghost" in caplog.text


class CountingParser(DependencyParser):
    calls = 0

    def get_deps_from_args(self, args):
        CountingParser.calls += 1
        return super().get_deps_from_args(args)


def test_custom_parser_class():
    CountingParser.calls = 0
    ioc = IoC(parser=CountingParser, components={"a": {"creator": Repo}, "b": {"creator": Repo}})
    assert isinstance(ioc.parser, CountingParser)
    assert CountingParser.calls == 2
