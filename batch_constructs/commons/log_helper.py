"""
    Copyright 2021 EPAM Systems, Inc.

    Licensed under the Apache License, Version 2.0 (the "License");
    you may not use this file except in compliance with the License.
    You may obtain a copy of the License at

    http://www.apache.org/licenses/LICENSE-2.0

    Unless required by applicable law or agreed to in writing, software
    distributed under the License is distributed on an "AS IS" BASIS,
    WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
    See the License for the specific language governing permissions and
    limitations under the License.
"""
import logging
import logging.config
import os
import sys
from datetime import date
from pathlib import Path

LOG_NAME = 'batch_constructs'
USER_LOG_NAME = f'user-{LOG_NAME}'
CONSOLE_HANDLER = 'console_handler'
FILE_HANDLER = 'file_handler'

LOGS_FOLDER_NAME = '.batch_constructs_logs'
LOG_FILE_NAME = '%Y-%m-%d-batch-constructs.log'
LOG_LEVEL = (logging.DEBUG
             if os.environ.get('BC_DEBUG', '').lower() == 'true'
             else logging.INFO)
FILE_LOG_FORMAT = ('%(asctime)s [%(levelname)s] %(name)s '
                   '%(filename)s:%(lineno)d: %(message)s')
CONSOLE_LOG_FORMAT = '[%(levelname)s] %(message)s'

# ANSI colour per level, warnings and errors stand out in the terminal
LEVEL_COLOURS = {
    logging.DEBUG: '\x1b[0;37m',
    logging.INFO: '\x1b[0;38m',
    logging.WARNING: '\x1b[0;33m',
    logging.ERROR: '\x1b[0;31m',
    logging.CRITICAL: '\x1b[0;31m'
}
RESET_COLOUR = '\x1b[0m'


class ConsoleLogFormatter(logging.Formatter):

    def __init__(self):
        super().__init__(CONSOLE_LOG_FORMAT)

    def format(self, record: logging.LogRecord) -> str:
        colour = LEVEL_COLOURS.get(record.levelno, '')
        return f'{colour}{super().format(record)}{RESET_COLOUR}'


def _log_file_path() -> str:
    logs_dir = os.path.join(os.environ.get('BC_LOGS') or Path.home(),
                            LOGS_FOLDER_NAME)
    try:
        os.makedirs(logs_dir, exist_ok=True)
    except OSError as e:
        print(f'Cannot create the logs directory {logs_dir}: {e}',
              file=sys.stderr)
    return os.path.join(logs_dir, date.today().strftime(LOG_FILE_NAME))


def _logging_config(log_file_path: str) -> dict:
    package_handlers = [FILE_HANDLER]
    if LOG_LEVEL == logging.DEBUG:
        package_handlers.append(CONSOLE_HANDLER)
    return {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'file_formatter': {'format': FILE_LOG_FORMAT},
            'console_formatter': {'()': ConsoleLogFormatter}
        },
        'handlers': {
            FILE_HANDLER: {
                'class': 'logging.FileHandler',
                'formatter': 'file_formatter',
                'filename': log_file_path,
                'delay': True
            },
            CONSOLE_HANDLER: {
                'class': 'logging.StreamHandler',
                'formatter': 'console_formatter',
                'stream': 'ext://sys.stdout'
            }
        },
        'loggers': {
            # messages for the person running the CLI
            USER_LOG_NAME: {
                'level': LOG_LEVEL,
                'handlers': [CONSOLE_HANDLER, FILE_HANDLER]
            },
            # diagnostics of the library itself
            LOG_NAME: {
                'level': LOG_LEVEL,
                'handlers': package_handlers
            }
        }
    }


logging.config.dictConfig(_logging_config(_log_file_path()))
logging.captureWarnings(True)


def get_logger(module_name: str) -> logging.Logger:
    """Returns a logger under the package logger for a module name such
    as 'batch_constructs.core.arn'."""
    if module_name == LOG_NAME or module_name.startswith(LOG_NAME + '.'):
        return logging.getLogger(module_name)
    return logging.getLogger(LOG_NAME).getChild(module_name)


def get_user_logger() -> logging.Logger:
    return logging.getLogger(USER_LOG_NAME).getChild('cli')
