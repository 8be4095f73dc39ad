import importlib
import pytest

@pytest.mark.parametrize("module", [
    "smartgroups",
    "smartgroups.algorithms",
    "smartgroups.assignments",
    "smartgroups.base",
    "smartgroups.distances",
    "smartgroups.initialization",
    "smartgroups.refinement",
    "smartgroups.utils",
    "smartgroups.config",
])
def test_submodules_exist(module):
    mod = importlib.import_module(module)
    assert mod is not None


def test_public_names_resolve():
    import smartgroups
    for name in smartgroups.__all__:
        assert hasattr(smartgroups, name), name
