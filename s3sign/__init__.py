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

__version__ = None


class Version(object):
    def __init__(self, canonical_version, final):
        self.canonical_version = canonical_version
        self.final = final

    @property
    def pretty_version(self):
        if self.final:
            return self.canonical_version
        else:
            return '%s-dev' % (self.canonical_version,)


_version = Version('1.2.0', False)

# Prefer the metadata of an installed distribution; fall back to the
# version recorded above when running from a checkout.
try:
    import importlib.metadata
    __version__ = __canonical_version__ = importlib.metadata.distribution(
        's3sign').version
except importlib.metadata.PackageNotFoundError:
    pass

if __version__ is None:
    __version__ = _version.pretty_version
    __canonical_version__ = _version.canonical_version
