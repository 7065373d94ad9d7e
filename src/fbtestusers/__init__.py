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
"""
Python client library for Facebook test users.

Test users are disposable accounts owned by an application. They are meant
for integration tests that need real, pre-authorized Graph API users without
touching real people's data.

A typical test suite setup might look like this:

    credentials = fbtestusers.Credentials.from_environ()
    app_api = fbtestusers.GraphAPI(fbtestusers.get_app_access_token(credentials))

    alice = fbtestusers.create_test_user(app_api, credentials)
    bob = fbtestusers.create_test_user(app_api, credentials)
    fbtestusers.make_friend_connection(app_api, alice, bob)

    ...

    fbtestusers.remove_all_test_users(app_api, credentials)

"""

class Error(Exception):
    """Generic client library error"""
    pass

class CommunicationError(Error):
    pass

class DecodeError(Error):
    """Response body didn't have the expected shape"""
    pass

class AuthenticationError(Error):
    pass

class LibraryError(Error):
    """Raised by the library itself, never by the platform"""
    pass

class MissingTokenError(LibraryError):
    def __init__(self, argument, user):
        LibraryError.__init__(self,
            "The test user passed on the %s argument (%s) doesn't have a token. "
            "Both users must have a token." % (argument, user.id))
        self.argument = argument
        self.user = user

class FriendRequestError(LibraryError):
    def __init__(self, phase, message):
        LibraryError.__init__(self, message)
        self.phase = phase


GRAPH_API_HOST = "graph.facebook.com"
USER_AGENT = "Facebook Test Users Python Client 1.0"

from fbtestusers.graph_api import GraphAPI, GraphAPIError
from fbtestusers.result import decode_bool
from fbtestusers.pager import Pager
from fbtestusers.auth import AccessToken, Credentials, FAR_FUTURE
from fbtestusers.auth import get_app_access_token, to_access_token
from fbtestusers.test_user import TestUser, CreateTestUser
from fbtestusers.test_user import InstalledOption, Installed, NotInstalled, PlatformDefault
from fbtestusers.test_user import create_test_user, get_test_users
from fbtestusers.test_user import remove_test_user, disassociate_test_user, remove_all_test_users
from fbtestusers.test_user import make_friend_connection, user_graph_api

__all__ = [
    "Error", "CommunicationError", "DecodeError", "AuthenticationError",
    "LibraryError", "MissingTokenError", "FriendRequestError", "GraphAPIError",
    "GraphAPI", "Pager", "decode_bool",
    "AccessToken", "Credentials", "FAR_FUTURE", "get_app_access_token", "to_access_token",
    "TestUser", "CreateTestUser", "InstalledOption", "Installed", "NotInstalled", "PlatformDefault",
    "create_test_user", "get_test_users", "remove_test_user", "disassociate_test_user",
    "remove_all_test_users", "make_friend_connection", "user_graph_api",
]
