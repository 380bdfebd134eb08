"""
Module loaders and the loading bridge.
"""

import collections

import pytest

from uioc import IoC, IoCError, ImportModuleLoader, LoaderNotConfiguredError
from uioc.component import create_component
from uioc.loaders import load_component_modules
from uioc.testing import DictModuleLoader

from sample_components import Repo, make_module


class TestLoadComponentModules:

    @pytest.mark.asyncio
    async def test_empty_map_skips_loader(self):
        loader = DictModuleLoader()
        await load_component_modules(loader, {})
        assert loader.calls == []

    @pytest.mark.asyncio
    async def test_empty_map_needs_no_loader(self):
        await load_component_modules(None, {})

    @pytest.mark.asyncio
    async def test_missing_loader_lists_modules(self):
        component = create_component("repo", {"creator": "app.repos:Repo"})
        with pytest.raises(LoaderNotConfiguredError) as exc_info:
            await load_component_modules(None, {"app.repos": [component]})
        assert exc_info.value.modules == ["app.repos"]

    @pytest.mark.asyncio
    async def test_binds_every_pending_component(self):
        repo = create_component("repo", {"creator": "app.repos:Repo"})
        other = create_component("other", {"creator": "app.repos:Repo", "scope": "static"})
        loader = DictModuleLoader({"app.repos": make_module("app.repos", Repo=Repo)})
        await load_component_modules(loader, {"app.repos": [repo, other]})
        assert repo.bound and other.bound
        assert other.target is Repo

    @pytest.mark.asyncio
    async def test_short_loader_result(self):
        component = create_component("repo", {"creator": "app.repos:Repo"})
        with pytest.raises(IoCError, match="returned 0 value"):
            await load_component_modules(lambda names: [], {"app.repos": [component]})


class TestImportModuleLoader:

    @pytest.mark.asyncio
    async def test_imports_modules(self):
        loader = ImportModuleLoader()
        loaded = await loader(["collections", "json"])
        assert loaded[0] is collections
        assert loaded[1].__name__ == "json"

    @pytest.mark.asyncio
    async def test_resolves_component_from_real_module(self):
        ioc = IoC(loader=ImportModuleLoader(), components={
            "ordered": {"creator": "collections:OrderedDict", "scope": "singleton"},
            "counter": {"module": "collections", "creator": "Counter", "args": ["abca"]},
        })
        ordered, counter = await ioc.get_component(["ordered", "counter"])
        assert isinstance(ordered, collections.OrderedDict)
        assert counter["a"] == 2

    @pytest.mark.asyncio
    async def test_import_error_propagates(self):
        ioc = IoC(loader=ImportModuleLoader(), components={"x": {"creator": "no_such_module_uioc:X"}})
        with pytest.raises(ImportError):
            await ioc.get_component("x")
