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

"""Application credentials and access tokens"""

import collections
import datetime
import logging
import os

import fbtestusers
from fbtestusers.graph_api import GraphAPI

log = logging.getLogger(__name__)

# Placeholder expiry for tokens whose real lifetime we don't know.
FAR_FUTURE = datetime.datetime(2132, 9, 1, tzinfo=datetime.timezone.utc)


class Credentials(collections.namedtuple('Credentials', 'app_id app_secret')):
    """Identifies the application that owns the test users"""

    @classmethod
    def from_environ(cls, environ=None):
        """Read FACEBOOK_APP_ID and FACEBOOK_APP_SECRET"""
        if environ is None:
            environ = os.environ

        try:
            return cls(environ['FACEBOOK_APP_ID'], environ['FACEBOOK_APP_SECRET'])
        except KeyError as e:
            raise fbtestusers.Error("Missing credentials, %s is not set" % e.args[0])

    def __repr__(self):
        return "<Credentials: app %s>" % self.app_id


AccessToken = collections.namedtuple('AccessToken', 'user_id token expires')


def to_access_token(test_user):
    """Build an AccessToken from a TestUser, or None if the user has no token.

    WARNING: the expiry is made up. Test user responses don't say when their
    token expires, so every token built here claims to expire at FAR_FUTURE.
    Anything that needs the real expiry has to ask the platform for it (for
    example through /debug_token).
    """
    if test_user.access_token is None:
        return None

    return AccessToken(test_user.id, test_user.access_token, FAR_FUTURE)


def get_app_access_token(credentials, graph_api=None):
    """Authenticates as an application and retrieves the OAuth access token"""
    graph_api = graph_api or GraphAPI()

    args = {
        "grant_type": "client_credentials",
        "client_id": credentials.app_id,
        "client_secret": credentials.app_secret,
    }
    response = graph_api.request("GET", "/oauth/access_token", args=args)

    try:
        access_token = response["access_token"]
    except (KeyError, TypeError):
        raise fbtestusers.AuthenticationError("Unknown response")

    log.debug("Got application access token for %s", credentials.app_id)
    return access_token
