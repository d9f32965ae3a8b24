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

"""Tests for s3sign.common.utils"""

import io
import logging
import os
import shutil
import sys
import tempfile
import unittest

from s3sign.common import utils
from s3sign.common.utils import logs


class TestConfig(unittest.TestCase):

    def test_config_true_value(self):
        for val in ('true', 'True', '1', 'yes', 'on', 't', 'y', True):
            self.assertTrue(utils.config_true_value(val), val)
        for val in ('false', '0', 'no', 'off', '', None, False, 1):
            self.assertFalse(utils.config_true_value(val), val)

    def test_non_negative_int(self):
        self.assertEqual(utils.non_negative_int('0'), 0)
        self.assertEqual(utils.non_negative_int(900), 900)
        for val in ('-1', -1, 'abc', None, '1.5'):
            with self.assertRaises(ValueError) as caught:
                utils.non_negative_int(val)
            self.assertIn('non-negative integer', str(caught.exception))

    def test_readconf_file_object(self):
        conf = utils.readconf(io.StringIO(
            '[s3sign]\naccess_key = AKID\nSecret_Key = 50%off\n'
            '[other]\nfoo = bar\n'), 's3sign')
        self.assertEqual(conf['access_key'], 'AKID')
        # keys keep their case and a bare % is not interpolated
        self.assertEqual(conf['Secret_Key'], '50%off')
        self.assertEqual(conf['log_name'], 's3sign')
        self.assertNotIn('foo', conf)

    def test_readconf_log_name(self):
        conf = utils.readconf(io.StringIO(
            '[s3sign]\nlog_name = mine\n'), 's3sign')
        self.assertEqual(conf['log_name'], 'mine')

    def test_readconf_missing_section(self):
        self.assertRaises(ValueError, utils.readconf,
                          io.StringIO('[other]\n'), 's3sign')

    def test_readconf_missing_file(self):
        self.assertRaises(IOError, utils.readconf, '/nonexistent/s3.conf',
                          's3sign')

    def test_readconf_path(self):
        conf_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, conf_dir)
        path = os.path.join(conf_dir, 's3sign.conf')
        with open(path, 'w') as f:
            f.write('[s3sign]\nexpires = 60\n')
        conf = utils.readconf(path, 's3sign')
        self.assertEqual(conf['expires'], '60')
        self.assertEqual(conf['__file__'], path)


class TestLogFormatter(unittest.TestCase):

    def _record(self, msg, **extra):
        record = logging.LogRecord('s3sign', logging.INFO, __file__, 1, msg,
                                   (), None)
        record.__dict__.update(extra)
        return record

    def test_newlines_escaped(self):
        formatter = utils.S3SignLogFormatter('%(server)s: %(message)s')
        self.assertEqual(
            formatter.format(self._record('GET\n\n\nDate\n/b/k',
                                          server='signer')),
            'signer: GET#012#012#012Date#012/b/k')

    def test_server_defaults_to_logger_name(self):
        formatter = utils.S3SignLogFormatter('%(server)s: %(message)s')
        self.assertEqual(formatter.format(self._record('hi')), 's3sign: hi')

    def test_exception_appended(self):
        formatter = utils.S3SignLogFormatter('%(message)s')
        try:
            raise ValueError('boom')
        except ValueError:
            record = self._record('failed', exc_info=sys.exc_info())
        msg = formatter.format(record)
        self.assertTrue(msg.startswith('failed#012Traceback'), msg)
        self.assertNotIn('\n', msg)
        self.assertIn('ValueError: boom', msg)

    def test_max_line_length(self):
        formatter = utils.S3SignLogFormatter('%(message)s',
                                             max_line_length=11)
        self.assertEqual(formatter.format(self._record('a' * 20)),
                         'aaa ... aaa')
        formatter = utils.S3SignLogFormatter('%(message)s',
                                             max_line_length=5)
        self.assertEqual(formatter.format(self._record('b' * 20)), 'bbbbb')
        formatter = utils.S3SignLogFormatter('%(message)s',
                                             max_line_length=0)
        self.assertEqual(formatter.format(self._record('c' * 20)), 'c' * 20)


class TestGetLogger(unittest.TestCase):

    def setUp(self):
        self.conf = {'log_address': '/nonexistent/dev/log'}

    def _route(self):
        return 'test-%s' % self.id()

    def test_get_logger(self):
        logger = utils.get_logger(self.conf, log_route=self._route())
        self.assertIsInstance(logger, utils.S3SignLogAdapter)
        self.assertEqual(logger.server, 's3sign')
        self.assertEqual(logger.logger.level, logging.INFO)
        self.assertFalse(logger.logger.propagate)
        self.assertEqual([type(h) for h in logger.logger.handlers],
                         [logging.NullHandler])

    def test_name_and_level_from_conf(self):
        conf = dict(self.conf, log_name='signer', log_level='debug')
        logger = utils.get_logger(conf, log_route=self._route())
        self.assertEqual(logger.server, 'signer')
        self.assertEqual(logger.logger.level, logging.DEBUG)
        logger = utils.get_logger(dict(conf, log_level='bogus'),
                                  log_route=self._route())
        self.assertEqual(logger.logger.level, logging.INFO)

    def test_console(self):
        logger = utils.get_logger(self.conf, log_route=self._route(),
                                  log_to_console=True)
        handlers = logger.logger.handlers
        self.assertEqual(len(handlers), 1)
        self.assertIsInstance(handlers[0], logging.StreamHandler)
        self.assertIs(handlers[0].stream, sys.__stderr__)
        self.assertIsInstance(handlers[0].formatter,
                              utils.S3SignLogFormatter)

        logger = utils.get_logger(dict(self.conf, log_to_console='yes'),
                                  log_route=self._route())
        self.assertIsInstance(logger.logger.handlers[0],
                              logging.StreamHandler)

    def test_handlers_not_stacked(self):
        for i in range(3):
            logger = utils.get_logger(self.conf, log_route=self._route(),
                                      log_to_console=True)
        self.assertEqual(len(logger.logger.handlers), 1)

    def test_udp_syslog(self):
        conf = dict(self.conf, log_udp_host='127.0.0.1',
                    log_udp_port='5140', log_facility='LOG_LOCAL3')
        logger = utils.get_logger(conf, log_route=self._route())
        self.addCleanup(logger.logger.handlers[0].close)
        handler = logger.logger.handlers[0]
        self.assertIsInstance(handler, logging.handlers.SysLogHandler)
        self.assertEqual(handler.address, ('127.0.0.1', 5140))
        self.assertEqual(handler.facility,
                         logging.handlers.SysLogHandler.LOG_LOCAL3)

    def test_log_address_not_a_socket(self):
        conf_dir = tempfile.mkdtemp()
        self.addCleanup(shutil.rmtree, conf_dir)
        logger = utils.get_logger({'log_address': conf_dir},
                                  log_route=self._route())
        self.assertEqual([type(h) for h in logger.logger.handlers],
                         [logging.NullHandler])

    def test_prefix(self):
        logger = utils.get_logger(self.conf, name='server',
                                  log_route=self._route())
        prefixed = utils.get_prefixed_logger(logger, 'header: ')
        self.assertEqual(prefixed.server, 'server')
        self.assertIs(prefixed.logger, logger.logger)
        msg, kwargs = prefixed.process('hello', {})
        self.assertEqual(msg, 'header: hello')
        self.assertEqual(kwargs['extra'], {'server': 'server'})
        self.assertIs(logs.get_prefixed_logger, utils.get_prefixed_logger)


if __name__ == '__main__':
    unittest.main()
