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
Compute S3 (signature version 2) authorization values.

Examples:

    s3sign header GET /johnsmith/photos/puppy.jpg \\
        --date 'Tue, 27 Mar 2007 19:36:42 +0000'
    s3sign presign GET /johnsmith/photos/puppy.jpg --expires 3600

Credentials are read from --access-key/--secret-key, then from the [s3sign]
section of --config, then from the S3SIGN_ACCESS_KEY and S3SIGN_SECRET_KEY
environment variables. Presigned values are printed raw and still need to
be URL-encoded into the query string.
"""

import argparse
import dataclasses
import os
import sys
import time

from s3sign.auth.signer import RequestSigner
from s3sign.auth.string_to_sign import SigningRequest, http_date, \
    string_to_sign, query_string_to_sign
from s3sign.common.exceptions import InvalidResource, MissingCredentials
from s3sign.common.utils import get_logger, get_prefixed_logger, readconf


CONF_SECTION = 's3sign'
ACCESS_KEY_ENV = 'S3SIGN_ACCESS_KEY'
SECRET_KEY_ENV = 'S3SIGN_SECRET_KEY'


def parse_header(value):
    """
    Parse a 'Name: value' command line argument into a (name, value) pair.
    """
    name, sep, value = value.partition(':')
    if not sep or not name.strip():
        raise ValueError('Invalid header %r, expected "Name: value"'
                         % (name + sep + value))
    return name.strip(), value.strip()


def get_credentials(args, conf, environ=None):
    if environ is None:
        environ = os.environ
    access_key = args.access_key or conf.get('access_key') or \
        environ.get(ACCESS_KEY_ENV)
    secret_key = args.secret_key or conf.get('secret_key') or \
        environ.get(SECRET_KEY_ENV)
    if not access_key or not secret_key:
        raise MissingCredentials(
            'An access key and a secret key are required; use '
            '--access-key/--secret-key, a config file or the %s/%s '
            'environment variables' % (ACCESS_KEY_ENV, SECRET_KEY_ENV))
    return access_key, secret_key


def _common_parser():
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument('--config',
                        help='config file with an [%s] section' % CONF_SECTION)
    common.add_argument('--access-key', help='access key id')
    common.add_argument('--secret-key', help='secret access key')
    common.add_argument('-H', '--header', dest='headers', action='append',
                        default=[], metavar='"NAME: VALUE"',
                        help='request header; may be repeated')
    common.add_argument('--content-type', help='Content-Type of the request')
    common.add_argument('-v', '--verbose', action='store_true',
                        help='also print the string to sign')
    common.add_argument('verb', help='HTTP method, e.g. GET or PUT')
    common.add_argument('resource',
                        help='URI-encoded path and query string, e.g. '
                             '/bucket/key?acl')
    return common


def build_parser():
    common = _common_parser()
    parser = argparse.ArgumentParser(
        prog='s3sign', description=__doc__,
        formatter_class=argparse.RawTextHelpFormatter)
    subparsers = parser.add_subparsers(dest='command')

    header = subparsers.add_parser(
        'header', parents=[common],
        help='print an Authorization header value')
    header.add_argument('--date',
                        help='HTTP-date of the request (default: now)')
    header.add_argument('--content-md5', help='Content-MD5 of the request')

    presign = subparsers.add_parser(
        'presign', parents=[common],
        help='print the query parameters of a presigned URL')
    presign.add_argument('--expires', type=int,
                         help='lifetime in seconds (default: the "expires" '
                              'config option, or 900)')
    presign.add_argument('--security-token',
                         help='temporary credential session token')
    return parser


def _load_conf(args):
    if not args.config:
        return {'log_name': CONF_SECTION}
    return readconf(args.config, CONF_SECTION)


def _do_header(args, signer, req):
    if args.verbose:
        print('StringToSign:')
        print(string_to_sign(req))
        print()
    print('Authorization:', signer.authorization(req))


def _do_presign(args, signer, req):
    params = signer.presign(req, expires=args.expires)
    if args.verbose:
        print('StringToSign:')
        print(query_string_to_sign(
            dataclasses.replace(req, date=params['Expires'])))
        print()
    for key, value in params.items():
        print('%s: %s' % (key, value))


def main(args=None):
    parser = build_parser()
    args = parser.parse_args(args)
    if not args.command:
        parser.print_help()
        return 1

    try:
        conf = _load_conf(args)
    except (IOError, ValueError) as err:
        print('Unable to load config: %s' % err, file=sys.stderr)
        return 1
    if args.verbose:
        conf = dict(conf, log_level='DEBUG')
    logger = get_prefixed_logger(
        get_logger(conf, log_route=CONF_SECTION, log_to_console=args.verbose),
        '%s: ' % args.command)

    try:
        access_key, secret_key = get_credentials(args, conf)
        headers = [parse_header(h) for h in args.headers]
        signer = RequestSigner(conf, logger=logger)
    except (MissingCredentials, ValueError) as err:
        print(err, file=sys.stderr)
        return 1

    req = SigningRequest(
        args.verb, args.resource, headers=headers,
        content_type=args.content_type, access_key=access_key,
        secret_key=secret_key)
    try:
        if args.command == 'header':
            _do_header(args, signer, dataclasses.replace(
                req, date=args.date or http_date(time.time()),
                content_md5=args.content_md5))
        else:
            token = args.security_token
            if token is None:
                token = conf.get('security_token')
            _do_presign(args, signer, dataclasses.replace(
                req, security_token=token))
    except (InvalidResource, ValueError) as err:
        logger.error('Refusing to sign: %s', err)
        print(err, file=sys.stderr)
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
