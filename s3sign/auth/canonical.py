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

from collections import OrderedDict
import re
from urllib.parse import parse_qsl

from s3sign.auth.subresource import is_sub_resource
from s3sign.common.exceptions import InvalidResource


AMZ_HEADER_PREFIX = 'x-amz'

# a URI-encoded resource never carries raw whitespace or control characters
_INVALID_RESOURCE_CHARS = re.compile(r'[\x00-\x20\x7f]')


def _header_items(headers):
    if headers is None:
        return []
    if hasattr(headers, 'items'):
        return list(headers.items())
    return list(headers)


def _header_value(value):
    if isinstance(value, (list, tuple)):
        return ','.join(str(v) for v in value)
    return str(value)


def canonicalize_headers(headers):
    """
    Build the canonical block of ``x-amz`` headers.

    Every header name is lowercased and only names starting with ``x-amz``
    are kept. Values are used exactly as given. The ``name:value`` lines are
    sorted as whole strings and joined with newlines. Two headers that only
    differ in case both survive as separate lines.

    :param headers: a mapping of header name to value, or an iterable of
                    ``(name, value)`` pairs
    :returns: the canonical header block, or '' if no header qualifies
    """
    buf = []
    for field, value in _header_items(headers):
        field = field.lower()
        if not field.startswith(AMZ_HEADER_PREFIX):
            continue
        buf.append('%s:%s' % (field, _header_value(value)))
    return '\n'.join(sorted(buf))


def split_resource(resource):
    """
    Split a URI-encoded resource into its path and decoded query parameters.

    Resources that a lenient URL parser would quietly repair are rejected
    here instead: a path without a leading '/' (e.g. 'bucket/key'), raw
    whitespace that is not percent-encoded, and query escapes that do not
    decode as UTF-8 (e.g. '%ff'). Signing a repaired resource would give a
    signature the server does not expect.

    :param resource: path plus optional query string, e.g. '/bucket?acl'
    :returns: a tuple of (path, OrderedDict of query key -> value); a key
              given more than once maps to its values joined with ','
    :raises InvalidResource: if the resource cannot be parsed
    """
    if not isinstance(resource, str):
        raise InvalidResource(resource, 'resource must be a string')
    if not resource:
        raise InvalidResource(resource, 'resource is empty')
    if _INVALID_RESOURCE_CHARS.search(resource):
        raise InvalidResource(
            resource, 'resource contains whitespace or control characters')
    path, _junk, query = resource.partition('#')[0].partition('?')
    if not path.startswith('/'):
        raise InvalidResource(resource, 'path must begin with "/"')
    try:
        pairs = parse_qsl(query, keep_blank_values=True, errors='strict')
    except UnicodeDecodeError as err:
        raise InvalidResource(resource, err)

    values = OrderedDict()
    for key, value in pairs:
        values.setdefault(key, []).append(value)
    params = OrderedDict(
        (key, vals[0] if len(vals) == 1 else ','.join(vals))
        for key, vals in values.items())
    return path, params


def canonicalize_resource(resource):
    """
    Build the canonical resource: the path, followed by the sorted
    sub-resources when the query string names any.

    Query parameters that are not sub-resources are dropped. A sub-resource
    with an empty value is rendered as its bare name, otherwise as
    ``key=value``.

    :param resource: a URI-encoded resource (path + query string)
    :returns: the canonical resource string
    :raises InvalidResource: if the resource cannot be parsed
    """
    path, params = split_resource(resource)
    buf = []
    for key, value in params.items():
        if is_sub_resource(key):
            buf.append('%s=%s' % (key, value) if value else key)
    if buf:
        return '%s?%s' % (path, '&'.join(sorted(buf)))
    return path
