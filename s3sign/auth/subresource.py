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
Sub-resources are query parameters that address some aspect of a bucket or
object (its ACL, its versioning state, ...) rather than its content. Only
these parameters are part of the canonical resource; every other query
parameter is left out of the signature.

See
http://docs.amazonwebservices.com/AmazonS3/latest/dev/RESTAuthentication.html
"""

# List of sub-resources that must be maintained as part of the HMAC
# signature string.
ALLOWED_SUB_RESOURCES = frozenset([
    'acl', 'delete', 'lifecycle', 'location', 'logging', 'notification',
    'partNumber', 'policy', 'requestPayment', 'torrent', 'uploadId',
    'uploads', 'versionId', 'versioning', 'versions', 'website',
])


def is_sub_resource(name):
    """
    Returns True if name is a signed sub-resource. The match is exact
    and case-sensitive, so ACL is not a sub-resource.
    """
    return name in ALLOWED_SUB_RESOURCES
