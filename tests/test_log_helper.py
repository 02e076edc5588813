import logging
import unittest

from batch_constructs.commons.log_helper import (get_logger, get_user_logger,
                                                 ConsoleLogFormatter,
                                                 LOG_NAME, USER_LOG_NAME)


class TestLogHelper(unittest.TestCase):

    def test_module_logger(self):
        logger = get_logger('batch_constructs.core.arn')
        self.assertEqual(logger.name, 'batch_constructs.core.arn')
        self.assertEqual(get_logger(LOG_NAME).name, LOG_NAME)

    def test_foreign_name_goes_under_package_logger(self):
        logger = get_logger('scripts')
        self.assertEqual(logger.name, f'{LOG_NAME}.scripts')

    def test_user_logger(self):
        logger = get_user_logger()
        self.assertEqual(logger.name, f'{USER_LOG_NAME}.cli')
        handlers = logging.getLogger(USER_LOG_NAME).handlers
        self.assertIsInstance(handlers[0].formatter, ConsoleLogFormatter)

    def test_console_format(self):
        record = logging.LogRecord('cli', logging.WARNING, __file__, 1,
                                   'no job definitions', None, None)
        line = ConsoleLogFormatter().format(record)
        self.assertIn('[WARNING] no job definitions', line)
        self.assertTrue(line.endswith('\x1b[0m'))
