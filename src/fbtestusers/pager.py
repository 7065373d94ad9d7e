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

"""Lazy iteration over paged connections"""

import logging

log = logging.getLogger(__name__)


class Pager(object):
    """Iterates over every object of a connection, one page at a time.

    Connection responses look like:

        {"data": [...], "paging": {"next": "https://graph.facebook.com/..."}}

    The next page is only fetched once iteration gets past the current one.
    A Pager can be consumed once; there is no going back.
    """
    def __init__(self, graph_api, response, factory=None):
        self.graph_api = graph_api
        self.factory = factory
        self.pages_fetched = 1
        self.total_count = (response.get('summary') or {}).get('total_count')

        self._count = 0
        self._load(response)

    def _load(self, response):
        self._items = list(response.get('data') or [])
        self._next = (response.get('paging') or {}).get('next')

    def __iter__(self):
        return self

    def __next__(self):
        if self.total_count is not None and self._count >= self.total_count:
            raise StopIteration

        if not self._items:
            if not self._next:
                raise StopIteration

            log.debug("Fetching page %d", self.pages_fetched + 1)
            self._load(self.graph_api.fetch_next(self._next))
            self.pages_fetched += 1

            if not self._items:
                self._next = None
                raise StopIteration

        self._count += 1
        item = self._items.pop(0)
        if self.factory is not None:
            return self.factory(item)
        return item
