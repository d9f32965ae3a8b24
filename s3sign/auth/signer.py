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

import base64
from collections import OrderedDict
import dataclasses
from hashlib import sha1
import hmac
import time

from s3sign.auth.string_to_sign import SECURITY_TOKEN_HEADER, \
    string_to_sign, query_string_to_sign
from s3sign.common.utils import get_logger, non_negative_int


DEFAULT_EXPIRES = 900


def utf8encode(s):
    if s is None:
        return b''
    if isinstance(s, bytes):
        return s
    return s.encode('utf8')


def hmac_sha1(secret_key, message):
    """
    Base64 encoded HMAC-SHA1 of ``message`` keyed with ``secret_key``.

    No check is made on the key; a missing or empty key gives a well-defined
    (if useless) signature.
    """
    digest = hmac.new(utf8encode(secret_key), utf8encode(message),
                      sha1).digest()
    return base64.b64encode(digest).decode('ascii')


def sign(req):
    """Signature for header authentication of ``req``."""
    return hmac_sha1(req.secret_key, string_to_sign(req))


def sign_query(req):
    """
    Signature for query authentication of ``req``. The caller is responsible
    for URL-encoding it into the presigned URL.
    """
    return hmac_sha1(req.secret_key, query_string_to_sign(req))


def _authorization_value(access_key, signature):
    return 'AWS %s:%s' % ('' if access_key is None else access_key,
                          signature)


def authorization(req):
    """
    Return an "Authorization" header value for ``req`` in the form of
    "AWS <access key>:<signature>".
    """
    return _authorization_value(req.access_key, sign(req))


def _presigned_params(req, signature):
    params = OrderedDict()
    params['AWSAccessKeyId'] = '' if req.access_key is None \
        else req.access_key
    params['Expires'] = '' if req.date is None else str(req.date)
    params['Signature'] = signature
    if req.security_token is not None:
        params[SECURITY_TOKEN_HEADER] = req.security_token
    return params


def presigned_params(req):
    """
    The query parameters of a presigned URL for ``req``, whose ``date`` is
    the expiry time. Values are raw; URL-encoding them is up to the caller.

    :returns: an OrderedDict of AWSAccessKeyId, Expires, Signature and,
              if the request carries one, x-amz-security-token
    """
    return _presigned_params(req, sign_query(req))


def check_signature(req, signature, query=False):
    """
    Recompute the signature of ``req`` and compare it in constant time with
    the one provided.

    :param req: a ``SigningRequest``
    :param signature: the base64 signature to check
    :param query: check a presigned (query) signature instead of a header
                  signature
    :returns: True if the signatures match
    """
    expected = sign_query(req) if query else sign(req)
    return hmac.compare_digest(utf8encode(expected), utf8encode(signature))


class RequestSigner(object):
    """
    Signs requests on behalf of a client, logging every string-to-sign at
    debug level so that a rejected signature can be compared with the
    StringToSign the server reports back.

    :param conf: configuration dict; ``expires`` sets the default lifetime,
                 in seconds, of presigned URLs
    :param logger: an optional logger, otherwise one is built from ``conf``
    """

    def __init__(self, conf=None, logger=None):
        self.conf = conf or {}
        self.logger = logger or get_logger(self.conf, log_route='s3sign')
        self.expires = non_negative_int(
            self.conf.get('expires', DEFAULT_EXPIRES))

    def _sign(self, req, to_sign):
        self.logger.debug('StringToSign for %s: %s', req.access_key,
                          to_sign)
        return hmac_sha1(req.secret_key, to_sign)

    def authorization(self, req):
        return _authorization_value(
            req.access_key, self._sign(req, string_to_sign(req)))

    def sign_query(self, req):
        return self._sign(req, query_string_to_sign(req))

    def presign(self, req, expires=None, now=None):
        """
        Presign ``req`` so that it is valid for ``expires`` seconds from
        ``now``. The request's own date is replaced by the expiry time.

        :returns: the presigned query parameters, see ``presigned_params``
        """
        if expires is None:
            expires = self.expires
        if now is None:
            now = time.time()
        expires_at = int(now) + non_negative_int(expires)
        req = dataclasses.replace(req, date=expires_at)
        return _presigned_params(req, self.sign_query(req))
