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

"""Miscellaneous utility functions for use with s3sign."""

from s3sign.common.utils.config import (  # noqa
    TRUE_VALUES, config_true_value, non_negative_int, readconf)
from s3sign.common.utils.logs import (  # noqa
    S3SignLogAdapter, S3SignLogFormatter, get_logger, get_prefixed_logger)
