# Copyright (c) 2010-2012 OpenStack Foundation
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or
# implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""
The two shapes of the version 2 'StringToSign'.

Header authentication::

    <verb>\\n
    <content-md5>\\n
    <content-type>\\n
    <http-date>\\n
    [<x-amz headers>\\n]
    <canonical resource>

Query authentication (presigned URLs)::

    <verb or GET>\\n
    \\n
    <content-type>\\n
    <expires>\\n
    [<x-amz headers>\\n]
    [x-amz-security-token:<token>\\n]
    <canonical resource>
"""

import dataclasses
from datetime import datetime, timezone
from email.utils import format_datetime, formatdate
from typing import Any, Optional

from s3sign.auth.canonical import canonicalize_headers, \
    canonicalize_resource


SECURITY_TOKEN_HEADER = 'x-amz-security-token'


@dataclasses.dataclass(frozen=True)
class SigningRequest:
    """
    Everything that goes into one signature.

    Optional fields use ``None`` for "not supplied". Where the two variants
    care about the difference, an empty string is a supplied value: an
    empty ``security_token`` still adds its line to a query signature.
    """
    verb: Optional[str]
    resource: str
    headers: Any = dataclasses.field(default_factory=dict)
    date: Any = None
    content_type: Optional[str] = None
    content_md5: Optional[str] = None
    access_key: Optional[str] = None
    secret_key: Optional[str] = None
    security_token: Optional[str] = None


def _or_empty(value):
    return '' if value is None else value


def http_date(value):
    """
    Render the Date used by header authentication.

    Strings are assumed to already be HTTP-dates and are returned untouched.
    A ``datetime`` (naive ones are taken as UTC) or a POSIX timestamp is
    rendered as e.g. 'Tue, 27 Mar 2007 19:36:42 GMT'.
    """
    if value is None:
        return ''
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return format_datetime(value.astimezone(timezone.utc), usegmt=True)
    if isinstance(value, (float, int)) and not isinstance(value, bool):
        return formatdate(value, usegmt=True)
    return value


def string_to_sign(req):
    """
    Create 'StringToSign' for header authentication.

    The md5 and content-type lines are always present, empty when the
    request has none.

    :param req: a ``SigningRequest``
    :raises InvalidResource: if the resource cannot be parsed
    """
    amz_headers = canonicalize_headers(req.headers)
    if amz_headers:
        amz_headers += '\n'
    return '\n'.join([
        _or_empty(req.verb),
        _or_empty(req.content_md5),
        _or_empty(req.content_type),
        http_date(req.date),
        amz_headers + canonicalize_resource(req.resource)])


def query_string_to_sign(req):
    """
    Create 'StringToSign' for query authentication (presigned URLs).

    The second line is always blank; content-md5 is never signed here. The
    date is passed through as given, normally the expiry in epoch seconds.

    :param req: a ``SigningRequest``
    :raises InvalidResource: if the resource cannot be parsed
    """
    buf = '%s\n\n%s\n%s\n' % (
        req.verb or 'GET',
        _or_empty(req.content_type),
        '' if req.date is None else str(req.date))
    amz_headers = canonicalize_headers(req.headers)
    if amz_headers:
        buf += amz_headers + '\n'
    if req.security_token is not None:
        buf += '%s:%s\n' % (SECURITY_TOKEN_HEADER, req.security_token)
    return buf + canonicalize_resource(req.resource)
