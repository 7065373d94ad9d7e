import pytest

from fbtestusers import TestUser
from fbtestusers.graph_api import GraphAPI
from fbtestusers.mock_graph import Graph, build_api_class


@pytest.fixture
def graph():
    """In-memory Graph with a single application"""
    return Graph("1234567890", "app-secret")


@pytest.fixture
def credentials(graph):
    return graph.credentials


@pytest.fixture
def app_api(graph):
    """GraphAPI bound to the mock application's token"""
    return build_api_class(graph)(graph.app_access_token)


@pytest.fixture
def stub_api_class():
    """Build a GraphAPI class that answers with canned bodies and records calls.

    Calls are recorded as (method, path, access_token, args, data). A body
    that is an exception instance is raised instead of returned.
    """
    def build(*bodies):
        bodies = list(bodies)
        calls = []

        class _StubGraphAPI(GraphAPI):
            def request_raw(self, method, path, args=None, data=None, versioned=True):
                calls.append((method, path, self.access_token, args, data))
                body = bodies.pop(0)
                if isinstance(body, Exception):
                    raise body
                return body

        _StubGraphAPI.calls = calls
        return _StubGraphAPI

    return build


@pytest.fixture
def user_a():
    return TestUser("1001", "token-a", None, None, None)


@pytest.fixture
def user_b():
    return TestUser("1002", "token-b", None, None, None)


@pytest.fixture
def tokenless_user():
    return TestUser("1003", None, None, None, None)
