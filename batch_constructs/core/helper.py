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
import hashlib
import logging
import re
from functools import wraps

import click

from batch_constructs.commons.log_helper import (get_logger, LOG_NAME,
                                                USER_LOG_NAME)
from batch_constructs.core.constants import PHYSICAL_NAME_HASH_LENGTH

_LOG = get_logger(__name__)


def to_logic_name(resource_type, *parts):
    formatted = []
    for name_part in parts:
        name_components = re.split('[^a-zA-Z0-9]', name_part)
        for component in name_components:
            component_len = len(component)
            if component_len > 1:
                formatted.append(component[0].upper() + component[1:])
            elif component_len == 1:
                formatted.append(component[0].upper())
    return resource_type + ''.join(formatted)


def is_arn(line):
    return isinstance(line, str) and line.startswith('arn:')


def generate_physical_name(stack_name, path_components, max_length):
    """ Builds a deterministic name for a resource whose name was not
    given by the user.

    :type stack_name: str
    :type path_components: list
    :param path_components: ids of the constructs from the stack down to
        the resource
    :type max_length: int
    :return: name consisting of letters, digits, hyphens and underscores
    """
    path = '/'.join(path_components)
    digest = hashlib.sha256(path.encode('utf-8')).hexdigest()
    suffix = digest[:PHYSICAL_NAME_HASH_LENGTH].lower()

    readable = '-'.join([stack_name] + list(path_components))
    readable = re.sub('[^a-zA-Z0-9_-]', '', readable)
    readable = readable[:max_length - len(suffix) - 1]
    return f'{readable}-{suffix}'


def set_debug_log_level(ctx, param, value):
    if value:
        loggers = [logging.getLogger(name) for name in
                   logging.root.manager.loggerDict if
                   name.startswith(LOG_NAME) or
                   name.startswith(USER_LOG_NAME)]

        console_handler = logging.getLogger(USER_LOG_NAME).handlers[0]

        for logger in loggers:
            if not logger.isEnabledFor(logging.DEBUG):
                logger.setLevel(logging.DEBUG)
                if logger.name == LOG_NAME:
                    logger.addHandler(console_handler)
        _LOG.debug('The logs level was set to DEBUG')


def verbose_option(func):
    @click.option('--verbose', '-v', is_flag=True,
                  callback=set_debug_log_level, expose_value=False,
                  is_eager=True, help="Enable logging verbose mode.")
    @wraps(func)
    def wrapper(*args, **kwargs):
        return func(*args, **kwargs)

    return wrapper
