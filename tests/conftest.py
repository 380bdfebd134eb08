"""
Shared fixtures for the uioc test suite.
"""

import pytest

from uioc import IoC
from uioc.testing import DictModuleLoader

from sample_components import (
    AutoClient,
    Client,
    Disposable,
    Repo,
    Service,
    make_module,
    make_repo_factory,
)


@pytest.fixture(autouse=True)
def reset_counters():
    Repo.instances = 0
    Disposable.log.clear()
    yield


@pytest.fixture
def modules():
    """Loadable in-memory modules, keyed by module name."""
    return {
        "app.repos": make_module("app.repos", Repo=Repo, make_repo=make_repo_factory),
        "app.services": make_module("app.services", Service=Service, Client=Client),
        "app.auto": make_module("app.auto", AutoClient=AutoClient),
    }


@pytest.fixture
def loader(modules):
    return DictModuleLoader(modules)


@pytest.fixture
def ioc(loader):
    container = IoC(loader=loader)
    yield container
    if container.components is not None:
        container.dispose()
