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
import os

from configobj import ConfigObj
from validate import Validator, VdtTypeError

from batch_constructs.commons.log_helper import get_logger
from batch_constructs.core.constants import (CONFIG_FILE_NAME,
                                             ALL_PARTITIONS,
                                             DEFAULT_PARTITION,
                                             DEFAULT_STACK_NAME)
from batch_constructs.exceptions import ConfigurationError

_LOG = get_logger(__name__)

ALL_REGIONS = ['us-east-1', 'us-east-2', 'us-west-1', 'us-west-2', 'sa-east-1',
               'ca-central-1', 'eu-west-1', 'eu-central-1', 'eu-west-2',
               'eu-west-3', 'ap-northeast-1', 'ap-northeast-2', 'ap-east-1',
               'ap-southeast-1', 'ap-southeast-2', 'ap-south-1', 'eu-north-1',
               'eu-south-1', 'ap-northeast-3', 'ap-southeast-3', 'af-south-1',
               'cn-north-1', 'cn-northwest-1', 'us-gov-west-1',
               'us-gov-east-1']

ACCOUNT_ID_CFG = 'account_id'
REGION_CFG = 'region'
PARTITION_CFG = 'partition'
STACK_NAME_CFG = 'stack_name'

CONFIG_SPEC = {
    ACCOUNT_ID_CFG: 'account_func',
    REGION_CFG: 'region_func',
    PARTITION_CFG: f"partition_func(default='{DEFAULT_PARTITION}')",
    STACK_NAME_CFG: f"string(min=1, max=128, default='{DEFAULT_STACK_NAME}')"
}

ERROR_MESSAGE_MAPPING = {
    ACCOUNT_ID_CFG: 'must be 12-digit number',
    REGION_CFG: 'is invalid. Valid options: ' + str(ALL_REGIONS),
    PARTITION_CFG: 'is invalid. Valid options: ' + str(ALL_PARTITIONS),
    STACK_NAME_CFG: 'length must be between 1 and 128 characters'
}


def _region(value):
    if not isinstance(value, str):
        raise VdtTypeError(value)
    value = value.lower()
    if value not in ALL_REGIONS:
        raise VdtTypeError(value)
    return value


def _account(value):
    if not isinstance(value, str) or len(value) != 12 \
            or not value.isdigit():
        raise VdtTypeError(value)
    return value


def _partition(value):
    if value not in ALL_PARTITIONS:
        raise VdtTypeError(value)
    return value


class ConfigHolder:
    def __init__(self, dir_path):
        con_path = os.path.join(dir_path, CONFIG_FILE_NAME)
        if not os.path.isfile(con_path):
            raise ConfigurationError(
                f'{CONFIG_FILE_NAME} does not exist inside {dir_path} folder')
        self._config_dict = ConfigObj(con_path, configspec=CONFIG_SPEC)
        self._validate()
        _LOG.debug(f'Configuration loaded from {con_path}')

    def _validate(self):
        validator = Validator({
            'region_func': _region,
            'account_func': _account,
            'partition_func': _partition
        })
        param_valid_dict = self._config_dict.validate(validator=validator)
        if param_valid_dict is True:
            return
        if param_valid_dict is False:
            param_valid_dict = dict.fromkeys(CONFIG_SPEC, False)

        messages = ''
        for key, value in param_valid_dict.items():
            if not value:
                messages += '\n{0} {1}'.format(key,
                                               ERROR_MESSAGE_MAPPING[key])
        if messages:
            raise ConfigurationError('Configuration is invalid. ' + messages)

    @property
    def account_id(self):
        return self._config_dict[ACCOUNT_ID_CFG]

    @property
    def region(self):
        return self._config_dict[REGION_CFG]

    @property
    def partition(self):
        return self._config_dict[PARTITION_CFG]

    @property
    def stack_name(self):
        return self._config_dict[STACK_NAME_CFG]
