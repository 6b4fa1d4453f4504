import types

import pytest


@pytest.fixture
def r(request):
    """Per-test result record; tests may leave a note in r.message."""
    return types.SimpleNamespace(name=request.node.name, message="")
