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


class S3SignException(Exception):
    pass


class InvalidResource(S3SignException, ValueError):
    """
    The resource could not be parsed into a path and query string.

    Signing cannot proceed without a canonical resource, so this is never
    recovered from locally.
    """

    def __init__(self, resource, cause):
        super(InvalidResource, self).__init__(resource, cause)
        self.resource = resource
        self.cause = cause

    def __str__(self):
        return 'Invalid resource %r: %s' % (self.resource, self.cause)


class MissingCredentials(S3SignException):
    pass
