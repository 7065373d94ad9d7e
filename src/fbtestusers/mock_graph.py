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

"""Mock facebook API

An in-memory stand-in for the parts of the Graph API that deal with test users:

  - GET  /oauth/access_token                    application token
  - POST /<app_id>/accounts/test-users          create a test user
  - GET  /<app_id>/accounts/test-users          list test users, paged
  - DELETE /<app_id>/accounts/test-users?uid=   disassociate a test user
  - DELETE /<user_id>                           remove a test user
  - GET  /<user_id>/friends                     list friends
  - POST /<user_id>/friends/<other_id>          send or accept a friend request

Usage:

    graph = Graph("1234", "secret")
    api = build_api_class(graph)(graph.app_access_token)
    user = fbtestusers.create_test_user(api, graph.credentials)

Every request is recorded in graph.calls as (method, path, access_token).
"""

import hashlib
import itertools
import json
import logging
import random

import fbtestusers
from fbtestusers.auth import Credentials
from fbtestusers.graph_api import GraphAPI, GraphAPIError

log = logging.getLogger(__name__)


def ResourceNotFoundError(path):
    return GraphAPIError("GraphMethodException", "Unsupported request: %s" % path, code=100)

def OAuthError(message):
    return GraphAPIError("OAuthException", message, code=190)


surnames_list = ['Smith', 'Johnson', 'Williams', 'Brown', 'Jones', 'Miller', 'Davis', 'Garcia', 'Rodriguez',
                 'Wilson', 'Martinez', 'Anderson', 'Taylor', 'Thomas', 'Hernandez', 'Moore', 'Martin', 'Jackson']

names_list = dict()
names_list['male'] = ['James', 'John', 'Robert', 'Michael', 'William', 'David', 'Richard', 'Charles', 'Joseph']
names_list['female'] = ['Mary', 'Patricia', 'Linda', 'Barbara', 'Elizabeth', 'Jennifer', 'Maria', 'Susan']


def create_name():
    gender = random.choice(['male', 'female'])
    return " ".join((random.choice(names_list[gender]), random.choice(surnames_list)))

def create_email(name, user_id):
    return "%s_%s@tfbnw.net" % ("_".join(name.lower().split()), user_id)


def _is_true(value):
    return value is True or value == "true"


class Graph(object):
    page_size = 25

    def __init__(self, app_id, app_secret="secret"):
        self.credentials = Credentials(app_id, app_secret)
        self.app_access_token = "%s|%s" % (app_id, app_secret)

        # id -> profile, every account that still exists
        self.users = dict()
        # accounts associated with the application, in creation order
        self.app_users = []
        self.installed_users = set()
        self.friends = dict()
        self.pending_requests = set()

        self.calls = []

        self._ids = itertools.count(100000000000001)
        self._user_tokens = dict()
        self._token_users = dict()

    @property
    def app_id(self):
        return self.credentials.app_id

    def request(self, method, path, params, access_token):
        log.debug("%s %s", method, path)
        self.calls.append((method, path, access_token))

        parts = path.strip("/").split("/")

        if parts == ["oauth", "access_token"] and method == "GET":
            return self.oauth_access_token(params)

        if parts == [self.app_id, "accounts", "test-users"]:
            self.require_app_token(access_token)
            if method == "POST":
                return self.create_user(params)
            if method == "GET":
                return self.list_users(params)
            if method == "DELETE":
                return self.disassociate_user(params.get('uid'))

        if parts[0] in self.users:
            if len(parts) == 1 and method == "DELETE":
                self.require_app_token(access_token)
                return self.remove_user(parts[0])
            if parts[1:] == ["friends"] and method == "GET":
                return {'data': [{'id': friend_id, 'name': self.users[friend_id]['name']}
                                 for friend_id in sorted(self.friends[parts[0]])]}
            if len(parts) == 3 and parts[1] == "friends" and method == "POST":
                self.require_user_token(parts[0], access_token)
                return self.friend_request(parts[0], parts[2])

        raise ResourceNotFoundError(path)

    def require_app_token(self, access_token):
        if access_token != self.app_access_token:
            raise OAuthError("An application access token is required")

    def require_user_token(self, user_id, access_token):
        if access_token is None or self._token_users.get(access_token) != user_id:
            raise OAuthError("A user access token for %s is required" % user_id)

    def oauth_access_token(self, params):
        if (params.get('client_id'), params.get('client_secret')) != tuple(self.credentials):
            raise OAuthError("Error validating client secret")
        return {'access_token': self.app_access_token, 'token_type': 'bearer'}

    def build_access_token(self, user_id):
        if user_id in self._user_tokens:
            return self._user_tokens[user_id]

        self._user_tokens[user_id] = token = hashlib.md5(str(user_id).encode('utf-8')).hexdigest()
        self._token_users[token] = user_id
        return token

    def create_user(self, params):
        user_id = str(next(self._ids))
        name = params.get('name') or create_name()
        user = dict(id=user_id, name=name, locale=params.get('locale', 'en_US'),
                    email=create_email(name, user_id), password="%x" % random.getrandbits(48),
                    login_url="https://developers.facebook.com/checkpoint/test-user-login/%s/" % user_id)

        self.users[user_id] = user
        self.app_users.append(user_id)
        self.friends[user_id] = set()

        # Facebook installs the application unless told otherwise
        if _is_true(params.get('installed', True)):
            self.installed_users.add(user_id)

        response = dict((k, user[k]) for k in ('id', 'email', 'password', 'login_url'))
        if user_id in self.installed_users:
            response['access_token'] = self.build_access_token(user_id)
        return response

    def list_users(self, params):
        limit = int(params.get('limit') or self.page_size)
        offset = int(params.get('offset') or 0)

        user_ids = list(self.app_users)
        page = []
        for user_id in user_ids[offset:offset + limit]:
            entry = dict(id=user_id, login_url=self.users[user_id]['login_url'])
            if user_id in self.installed_users:
                entry['access_token'] = self.build_access_token(user_id)
            page.append(entry)

        response = {'data': page, 'summary': {'total_count': len(user_ids)}}
        if offset + limit < len(user_ids):
            response['paging'] = {
                'next': "https://%s/%s/accounts/test-users?limit=%d&offset=%d" % (
                    fbtestusers.GRAPH_API_HOST, self.app_id, limit, offset + limit),
            }
        return response

    def disassociate_user(self, user_id):
        if user_id not in self.app_users:
            return {'success': False}

        self.app_users.remove(user_id)
        self.installed_users.discard(user_id)
        return {'success': True}

    def remove_user(self, user_id):
        del self.users[user_id]
        if user_id in self.app_users:
            self.app_users.remove(user_id)
        self.installed_users.discard(user_id)
        for friend_id in self.friends.pop(user_id):
            self.friends[friend_id].discard(user_id)
        self.pending_requests = set(r for r in self.pending_requests if user_id not in r)

        token = self._user_tokens.pop(user_id, None)
        self._token_users.pop(token, None)
        return {'success': True}

    def friend_request(self, user_id, other_id):
        if other_id not in self.users:
            raise ResourceNotFoundError(other_id)

        if other_id in self.friends[user_id] or (user_id, other_id) in self.pending_requests:
            return {'success': False}

        if (other_id, user_id) in self.pending_requests:
            self.pending_requests.remove((other_id, user_id))
            self.friends[user_id].add(other_id)
            self.friends[other_id].add(user_id)
        else:
            self.pending_requests.add((user_id, other_id))
        return {'success': True}


class MockGraphAPI(GraphAPI):
    """GraphAPI answering from a mock Graph instead of the network"""
    _graph = None

    def request_raw(self, method, path, args=None, data=None, versioned=True):
        params = dict(args or {})
        params.update(data or {})
        response = self._graph.request(method, path, params, self.access_token)
        return json.dumps(response).encode('utf-8')


def build_api_class(graph_instance):
    """Construct a subclass of GraphAPI tied to a particular Graph instance
    """
    class _AttachedGraphAPI(MockGraphAPI):
        _graph = graph_instance

    return _AttachedGraphAPI
