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

"""Boolean results

Delete and friend request endpoints don't answer with an object, they answer
with {"success": true} or {"success": false}. Anything we can't read as one of
those counts as a failed operation rather than an error.
"""

import json
import logging

log = logging.getLogger(__name__)


def decode_bool(body):
    """True only for a JSON object whose 'success' member is boolean true"""
    try:
        value = json.loads(body)
    except (TypeError, ValueError, RecursionError):
        log.debug("Unreadable boolean result: %r", body)
        return False

    if not isinstance(value, dict):
        log.debug("Boolean result is not an object: %r", value)
        return False

    # 1 == True, so compare identity
    return value.get("success") is True
