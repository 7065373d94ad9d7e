"""
Tests for the Graph API HTTP client
"""
import urllib.parse
from unittest.mock import MagicMock, patch

import pytest

import fbtestusers
from fbtestusers.graph_api import GraphAPI, GraphAPIError, decode_object, encode_args


def _response(status=200, reason="OK", body=b'{}'):
    response = MagicMock()
    response.status = status
    response.reason = reason
    response.read.return_value = body
    return response


@pytest.fixture
def connection():
    with patch('http.client.HTTPSConnection') as connection_cls:
        conn = connection_cls.return_value
        conn.getresponse.return_value = _response()
        conn.connection_cls = connection_cls
        yield conn


def _sent(conn):
    method, path, body, headers = conn.request.call_args[0]
    split = urllib.parse.urlsplit(path)
    query = dict(urllib.parse.parse_qsl(split.query))
    form = dict(urllib.parse.parse_qsl(body)) if body else None
    return method, split.path, query, form, headers


class TestRequest:
    def test_get_puts_token_in_query(self, connection):
        connection.getresponse.return_value = _response(body=b'{"id": "42"}')

        assert GraphAPI("tok").request("GET", "/42") == {"id": "42"}

        method, path, query, form, headers = _sent(connection)
        assert method == "GET"
        assert path == "/42"
        assert query == {"access_token": "tok"}
        assert form is None
        assert headers['User-Agent'] == fbtestusers.USER_AGENT
        connection.connection_cls.assert_called_once_with(fbtestusers.GRAPH_API_HOST, timeout=None)
        connection.close.assert_called_once_with()

    def test_post_puts_token_in_body(self, connection):
        GraphAPI("tok").put("1234", "accounts/test-users", installed=True, permissions=["email", "user_friends"])

        method, path, query, form, headers = _sent(connection)
        assert method == "POST"
        assert path == "/1234/accounts/test-users"
        assert query == {}
        assert form == {"installed": "true", "permissions": "email,user_friends", "access_token": "tok"}
        assert headers['Content-type'] == "application/x-www-form-urlencoded"

    def test_no_token(self, connection):
        GraphAPI().request("GET", "/42")

        _, _, query, _, _ = _sent(connection)
        assert "access_token" not in query

    def test_version_prefix(self, connection):
        GraphAPI("tok", version="v2.8").request("DELETE", "/42")

        method, path, _, _, _ = _sent(connection)
        assert (method, path) == ("DELETE", "/v2.8/42")

    def test_fetch_next_uses_link_as_is(self, connection):
        api = GraphAPI("tok", version="v2.8")
        api.fetch_next("https://graph.facebook.com/v2.8/1234/accounts/test-users?limit=2&after=abc")

        _, path, query, _, _ = _sent(connection)
        assert path == "/v2.8/1234/accounts/test-users"
        assert query == {"limit": "2", "after": "abc", "access_token": "tok"}

    def test_settings(self, connection):
        GraphAPI(host="graph.example.com", timeout=5).request("GET", "/42")

        connection.connection_cls.assert_called_once_with("graph.example.com", timeout=5)

    def test_for_token(self):
        api = GraphAPI("app", host="graph.example.com", version="v2.8", timeout=5)
        user_api = api.for_token("user")

        assert user_api.access_token == "user"
        assert (user_api.host, user_api.version, user_api.timeout) == ("graph.example.com", "v2.8", 5)
        assert api.access_token == "app"


class TestErrors:
    def test_error_status_with_graph_error(self, connection):
        connection.getresponse.return_value = _response(
            400, "Bad Request",
            b'{"error": {"type": "OAuthException", "message": "Invalid token", "code": 190}}')

        with pytest.raises(GraphAPIError) as excinfo:
            GraphAPI("tok").request("GET", "/42")

        assert excinfo.value.type == "OAuthException"
        assert excinfo.value.code == 190
        assert str(excinfo.value) == "Invalid token"

    def test_error_status_without_body(self, connection):
        connection.getresponse.return_value = _response(502, "Bad Gateway", b'<html>oops</html>')

        with pytest.raises(fbtestusers.CommunicationError):
            GraphAPI("tok").request("GET", "/42")

    def test_error_status_is_raised_for_bool_requests_too(self, connection):
        connection.getresponse.return_value = _response(500, "Internal Server Error", b'')

        with pytest.raises(fbtestusers.CommunicationError):
            GraphAPI("tok").request_bool("DELETE", "/42")

    def test_connection_failure(self, connection):
        connection.request.side_effect = OSError("connection refused")

        with pytest.raises(fbtestusers.CommunicationError):
            GraphAPI("tok").request("GET", "/42")
        connection.close.assert_called_once_with()

    def test_invalid_json(self, connection):
        connection.getresponse.return_value = _response(body=b'true?')

        with pytest.raises(fbtestusers.DecodeError):
            GraphAPI("tok").request("GET", "/42")

    def test_error_object_with_ok_status(self):
        with pytest.raises(GraphAPIError):
            decode_object(b'{"error": {"type": "GraphMethodException", "message": "Unsupported"}}')


def test_request_bool(connection):
    connection.getresponse.return_value = _response(body=b'{"success": true}')
    assert GraphAPI("tok").request_bool("DELETE", "/42") is True

    connection.getresponse.return_value = _response(body=b'{"success": false}')
    assert GraphAPI("tok").request_bool("DELETE", "/42") is False


def test_encode_args():
    assert encode_args({"installed": False, "permissions": ("email",), "name": "Bob", "locale": None}) == {
        "installed": "false",
        "permissions": "email",
        "name": "Bob",
    }


def test_fetch_connections(connection):
    connection.getresponse.return_value = _response(body=b'{"data": []}')

    assert GraphAPI("tok").fetch_connections("1234", "accounts/test-users", limit=10) == {"data": []}

    method, path, query, _, _ = _sent(connection)
    assert (method, path) == ("GET", "/1234/accounts/test-users")
    assert query == {"limit": "10", "access_token": "tok"}


def test_deeply_nested_object_is_a_decode_error():
    with pytest.raises(fbtestusers.DecodeError):
        decode_object(b'[' * 200000)
