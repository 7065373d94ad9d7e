#!/usr/bin/env python
#
# Copyright 2010 Facebook
#
# Licensed under the Apache License, Version 2.0 (the "License"); you may
# not use this file except in compliance with the License. You may obtain
# a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS, WITHOUT
# WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied. See the
# License for the specific language governing permissions and limitations
# under the License.

"""Core graph API

Instances of GraphAPI provide a view into the facebook graph with the provided access token.
"""

import http.client
import json
import logging
import urllib.parse

import fbtestusers
from fbtestusers import result

class GraphAPIError(fbtestusers.Error):
    def __init__(self, type, message, code=None):
        Exception.__init__(self, message)
        self.type = type
        self.code = code


log = logging.getLogger(__name__)


class GraphAPI(object):
    """A client for the Facebook Graph API.

    See https://developers.facebook.com/docs/graph-api for complete documentation
    for the API.

    Each instance is bound to one access token. Test user management is done
    with the application's token:

       app_api = GraphAPI(app_access_token)
       response = app_api.fetch_connections(app_id, "accounts/test-users")

    while calls made on behalf of a test user need an instance bound to that
    user's own token:

       user_api = app_api.for_token(test_user.access_token)
       user_api.request_bool("POST", "/%s/friends/%s" % (test_user.id, other_user.id))

    Nothing here retries. Every call is a single blocking request, and
    failures surface as CommunicationError or GraphAPIError.
    """
    def __init__(self, access_token=None, host=None, version=None, timeout=None):
        """Create an instance of GraphAPI bound to the specified access token

        If an access token isn't provided, the graph api will only be able to access public information.

        Args:
          host: (optional) Graph API host, defaults to fbtestusers.GRAPH_API_HOST
          version: (optional) API version prefixed to every path, Ex: 'v2.8'
          timeout: (optional) socket timeout in seconds
        """
        self.access_token = access_token
        self.host = host or fbtestusers.GRAPH_API_HOST
        self.version = version
        self.timeout = timeout

    def for_token(self, access_token):
        """Same settings, different access token"""
        return self.__class__(access_token, host=self.host, version=self.version, timeout=self.timeout)

    def fetch_connections(self, id, connection_name, limit=None):
        """Fetch a connection for the specifeid object.

        Args:
          id: Identifier for the object to fetch a connection from
          connection_name: Name of the connection: Ex: 'friends'
          limit: (optional) maximum connected objects to retrieve per page

        Returns:
          Dictionary result set. Typically with a key 'data' that contains a list of connected objects,
          and 'paging' with a link to the next page.
        """
        path = "/".join(("", str(id), connection_name))

        # Unset the args if we didn't need it
        args = {'limit': limit} if limit else None

        return self.request("GET", path, args=args)

    def fetch_next(self, url):
        """Follow a 'paging.next' link returned by a previous connection fetch.

        The link already carries the API version, so it is requested as-is.
        """
        split = urllib.parse.urlsplit(url)
        args = dict(urllib.parse.parse_qsl(split.query))
        return decode_object(self.request_raw("GET", split.path, args=args, versioned=False))

    def put(self, parent_id, connection_name, **data):
        """Writes the given object to the graph, connected to the given parent.

        For example,

            graph.put(app_id, "accounts/test-users", installed=True)

        creates a new test user for the application. List values are sent comma
        separated and booleans as 'true'/'false'.
        """
        path = "/".join(("", str(parent_id), connection_name))

        return self.request("POST", path, data=data)

    def request(self, method, path, args=None, data=None):
        """Fetches the given path in the Graph API under the context of the curent access token.

        The response body is decoded as a JSON object.
        """
        return decode_object(self.request_raw(method, path, args=args, data=data))

    def request_bool(self, method, path, args=None, data=None):
        """Like request(), but only reports whether the platform said {"success": true}"""
        return result.decode_bool(self.request_raw(method, path, args=args, data=data))

    def request_raw(self, method, path, args=None, data=None, versioned=True):
        """Issue the request and return the raw response body"""
        if versioned and self.version:
            path = "/" + self.version + path

        return graph_api_request_raw(method, path, args=args, data=data, access_token=self.access_token,
                                     host=self.host, timeout=self.timeout)


def encode_args(args):
    """Convert python values into what the Graph API expects on the wire"""
    out = dict()
    for key, value in args.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        elif isinstance(value, (list, tuple)):
            value = ",".join(str(v) for v in value)
        out[key] = value
    return out


def _redact(args):
    return dict((k, "<redacted>" if k == "access_token" else v) for k, v in args.items())


def decode_object(body):
    """Decode a response body as a JSON value, raising for Graph API errors"""
    try:
        response_data = json.loads(body)
    except (ValueError, RecursionError) as e:
        raise fbtestusers.DecodeError("Response is not JSON: %s" % e)

    log.debug("Response Data: %r", response_data)

    if isinstance(response_data, dict) and response_data.get("error"):
        raise _error_from(response_data["error"])

    return response_data


def _error_from(error):
    if not isinstance(error, dict):
        return GraphAPIError(None, str(error))
    return GraphAPIError(error.get("type"), error.get("message"), code=error.get("code"))


def graph_api_request_raw(method, path, args=None, data=None, access_token=None,
                          host=None, timeout=None):
    out_headers = {
        'User-Agent': fbtestusers.USER_AGENT,
        'Accept': 'application/json',
    }

    args = encode_args(args or dict())
    if data is not None:
        data = encode_args(data)


    if access_token is not None:
        if data is not None:
            data["access_token"] = access_token
        else:
            args["access_token"] = access_token

    out_data = None
    if data:
        out_data = urllib.parse.urlencode(data)
        out_headers.setdefault('Content-type', "application/x-www-form-urlencoded")

    out_path = path
    if args:
        out_path = "?".join((path, urllib.parse.urlencode(args)))

    log.debug("%s %s?%s", method, path, urllib.parse.urlencode(_redact(args)))

    conn = http.client.HTTPSConnection(host or fbtestusers.GRAPH_API_HOST, timeout=timeout)
    try:
        conn.request(method, out_path, out_data, out_headers)
        response = conn.getresponse()
        body = response.read()
    except (OSError, http.client.HTTPException) as e:
        raise fbtestusers.CommunicationError(e)
    finally:
        conn.close()

    log.debug("Response: %r", (response.status, response.reason))

    if not 200 <= response.status < 300:
        try:
            error = json.loads(body)["error"]
        except (ValueError, KeyError, TypeError, RecursionError):
            raise fbtestusers.CommunicationError((response.status, response.reason))
        raise _error_from(error)

    return body
