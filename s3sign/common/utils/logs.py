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

import errno
import logging
from logging.handlers import SysLogHandler
import os
import socket
import stat
import sys

from s3sign.common.utils.config import config_true_value


class S3SignLogAdapter(logging.LoggerAdapter, object):
    """
    A LogAdapter that adds the server attribute to the extras dict
    of every record and prepends an optional prefix to each message.
    """

    def __init__(self, logger, server, prefix=''):
        logging.LoggerAdapter.__init__(self, logger, {})
        self.prefix = prefix
        self.server = server

    def process(self, msg, kwargs):
        """
        Add extra info to message
        """
        kwargs['extra'] = {'server': self.server}
        msg = '%s%s' % (self.prefix, msg)
        return msg, kwargs


class S3SignLogFormatter(logging.Formatter):
    """
    Custom logging.Formatter that keeps every record on a single line, which
    matters for strings-to-sign since they are newline separated. Optionally
    it can shorten overly long log lines.
    """

    def __init__(self, fmt=None, datefmt=None, max_line_length=0):
        logging.Formatter.__init__(self, fmt=fmt, datefmt=datefmt)
        self.max_line_length = max_line_length

    def format(self, record):
        if not hasattr(record, 'server'):
            # records from loggers we did not set up
            record.server = record.name

        record.message = record.getMessage()
        if self._fmt.find('%(asctime)') >= 0:
            record.asctime = self.formatTime(record, self.datefmt)
        msg = (self._fmt % record.__dict__).replace('\n', '#012')
        if record.exc_info:
            if not record.exc_text:
                record.exc_text = self.formatException(
                    record.exc_info).replace('\n', '#012')
        if record.exc_text:
            if not msg.endswith('#012'):
                msg = msg + '#012'
            msg = msg + record.exc_text

        if self.max_line_length > 0 and len(msg) > self.max_line_length:
            if self.max_line_length < 7:
                msg = msg[:self.max_line_length]
            else:
                approxhalf = (self.max_line_length - 5) // 2
                msg = msg[:approxhalf] + " ... " + msg[-approxhalf:]
        return msg


def _syslog_handler(conf):
    facility = getattr(SysLogHandler, conf.get('log_facility', 'LOG_LOCAL0'),
                       SysLogHandler.LOG_LOCAL0)
    udp_host = conf.get('log_udp_host')
    if udp_host:
        udp_port = int(conf.get('log_udp_port',
                                logging.handlers.SYSLOG_UDP_PORT))
        return SysLogHandler(address=(udp_host, udp_port), facility=facility)
    log_address = conf.get('log_address', '/dev/log')
    try:
        mode = os.stat(log_address).st_mode
    except (OSError, socket.error) as e:
        if e.errno not in [errno.ENOTSOCK, errno.ENOENT]:
            raise
        return None
    if stat.S_ISSOCK(mode):
        return SysLogHandler(address=log_address, facility=facility)
    return None


def get_logger(conf, name=None, log_to_console=False, log_route=None,
               fmt="%(server)s: %(message)s"):
    """
    Get the current system logger using config settings.

    **Log config and defaults**::

        log_facility = LOG_LOCAL0
        log_level = INFO
        log_name = s3sign
        log_max_line_length = 0
        log_udp_host = (disabled)
        log_udp_port = logging.handlers.SYSLOG_UDP_PORT
        log_address = /dev/log
        log_to_console = false

    A syslog handler is only attached when log_udp_host is set or
    log_address is a UNIX socket.

    :param conf: Configuration dict to read settings from
    :param name: This value is used to populate the server field in
                 the log format, as the default value for log_route;
                 defaults to the log_name value in conf, if it exists,
                 or to 's3sign'.
    :param log_to_console: Add handler which writes to console on stderr
    :param log_route: Route for the logging, not emitted to the log, just used
                      to separate logging configurations; defaults to the value
                      of name or whatever name defaults to.
    :param fmt: Override log format
    :return: an instance of S3SignLogAdapter
    """
    if not conf:
        conf = {}
    if name is None:
        name = conf.get('log_name', 's3sign')
    if not log_route:
        log_route = name
    logger = logging.getLogger(log_route)
    logger.propagate = False
    formatter = S3SignLogFormatter(
        fmt=fmt, max_line_length=int(conf.get('log_max_line_length', 0)))

    # repeated calls replace, rather than stack, our handlers
    if not hasattr(get_logger, 'handler4logger'):
        get_logger.handler4logger = {}
    for handler in get_logger.handler4logger.pop(logger, []):
        logger.removeHandler(handler)

    handlers = []
    syslog_handler = _syslog_handler(conf)
    if syslog_handler is not None:
        handlers.append(syslog_handler)
    if log_to_console or config_true_value(conf.get('log_to_console')):
        handlers.append(logging.StreamHandler(sys.__stderr__))
    if not handlers:
        handlers.append(logging.NullHandler())
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    get_logger.handler4logger[logger] = handlers

    logger.setLevel(
        getattr(logging, conf.get('log_level', 'INFO').upper(), logging.INFO))

    return S3SignLogAdapter(logger, name)


def get_prefixed_logger(logger, prefix):
    """
    Return a clone of the given logger with a new prefix string
    that replaces the prefix string of the given logger.

    :param logger: an instance of S3SignLogAdapter.
    :param prefix: a string prefix.
    :returns: a new instance of S3SignLogAdapter.
    """
    return S3SignLogAdapter(logger.logger, logger.server, prefix=prefix)
