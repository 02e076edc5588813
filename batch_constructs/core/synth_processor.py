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
import yaml

from batch_constructs.commons import deep_get
from batch_constructs.commons.log_helper import get_logger, get_user_logger
from batch_constructs.core.batch import (EcsJobDefinition,
                                         EcsEc2ContainerDefinition,
                                         EcsFargateContainerDefinition,
                                         RetryStrategy, Reason)
from batch_constructs.core.constants import (JOB_DEFINITIONS_META_KEY,
                                             EC2_CONTAINER_TYPE,
                                             FARGATE_CONTAINER_TYPE)
from batch_constructs.exceptions import ResourceMetadataError, ParameterError

_LOG = get_logger(__name__)
USER_LOG = get_user_logger()

ARN_KEY = 'arn'
CONTAINER_KEY = 'container'
CONTAINER_TYPE_KEY = 'type'
RETRY_STRATEGIES_KEY = 'retry_strategies'
REASON_KEY = 'reason'

CONTAINER_TYPES = {
    EC2_CONTAINER_TYPE: EcsEc2ContainerDefinition,
    FARGATE_CONTAINER_TYPE: EcsFargateContainerDefinition
}

PREDEFINED_REASONS = {
    'non_zero_exit_code': Reason.NON_ZERO_EXIT_CODE,
    'spot_instance_reclaimed': Reason.SPOT_INSTANCE_RECLAIMED,
    'cannot_pull_container': Reason.CANNOT_PULL_CONTAINER
}

JOB_DEFINITION_KEYS = {'job_definition_name', 'parameters', 'retry_attempts',
                       'scheduling_priority', 'timeout', 'propagate_tags',
                       'tags', CONTAINER_KEY, RETRY_STRATEGIES_KEY}


def load_meta(meta_path):
    with open(meta_path) as meta_file:
        meta = yaml.safe_load(meta_file)
    if not isinstance(meta, dict) or \
            not isinstance(meta.get(JOB_DEFINITIONS_META_KEY), dict):
        raise ResourceMetadataError(
            f"'{meta_path}' must contain the '{JOB_DEFINITIONS_META_KEY}' "
            f"mapping")
    return meta


def build_container(name, container_meta):
    if not isinstance(container_meta, dict):
        raise ParameterError(
            f"Container of the '{name}' job definition must be a mapping")
    container_meta = dict(container_meta)
    container_type = str(container_meta.pop(CONTAINER_TYPE_KEY, '')).lower()
    container_class = CONTAINER_TYPES.get(container_type)
    if container_class is None:
        raise ParameterError(
            f"Container type of the '{name}' job definition must be one of "
            f"{list(CONTAINER_TYPES)}, got '{container_type}'")
    try:
        return container_class(**container_meta)
    except TypeError as e:
        raise ParameterError(
            f"Invalid container of the '{name}' job definition: {e}") from e


def build_retry_strategy(name, strategy_meta):
    action = str(deep_get(strategy_meta, ['action'], '')).upper()
    reason_name = deep_get(strategy_meta, [REASON_KEY])
    if reason_name:
        reason = PREDEFINED_REASONS.get(str(reason_name).lower())
        if reason is None:
            raise ParameterError(
                f"Unknown retry reason '{reason_name}' in the '{name}' job "
                f"definition. Valid options: {list(PREDEFINED_REASONS)}")
    else:
        reason = Reason.custom(
            on_exit_code=deep_get(strategy_meta, ['on_exit_code']),
            on_reason=deep_get(strategy_meta, ['on_reason']),
            on_status_reason=deep_get(strategy_meta, ['on_status_reason']))
    return RetryStrategy.of(action, reason)


def build_job_definition(stack, name, meta):
    if not isinstance(meta, dict):
        raise ResourceMetadataError(
            f"Meta of the '{name}' job definition must be a mapping")
    if ARN_KEY in meta:
        unknown_keys = set(meta) - {ARN_KEY}
        if unknown_keys:
            raise ParameterError(
                f"Job definition '{name}' refers to an existing ARN and "
                f"accepts no other parameters, got {sorted(unknown_keys)}")
        return EcsJobDefinition.from_job_definition_arn(stack, name,
                                                        meta[ARN_KEY])

    unknown_keys = set(meta) - JOB_DEFINITION_KEYS
    if unknown_keys:
        raise ParameterError(
            f"Unknown parameters of the '{name}' job definition: "
            f"{sorted(unknown_keys)}")
    kwargs = dict(meta)
    container_meta = kwargs.pop(CONTAINER_KEY, None)
    if container_meta is not None:
        kwargs[CONTAINER_KEY] = build_container(name, container_meta)
    kwargs[RETRY_STRATEGIES_KEY] = [
        build_retry_strategy(name, strategy_meta)
        for strategy_meta in kwargs.get(RETRY_STRATEGIES_KEY) or []]
    return EcsJobDefinition(stack, name, **kwargs)


def synthesize(stack, meta):
    """ Adds the job definitions described by meta to the stack.

    :type stack: batch_constructs.core.construct.Stack
    :type meta: dict
    :return: list of created and imported job definitions
    """
    job_definitions = []
    for name, job_meta in meta[JOB_DEFINITIONS_META_KEY].items():
        job_definition = build_job_definition(stack, name, job_meta)
        if ARN_KEY in job_meta:
            USER_LOG.info(f"Job definition '{name}' refers to the existing "
                          f"'{job_definition.job_definition_name}'")
        job_definitions.append(job_definition)
    _LOG.debug(f'{len(job_definitions)} job definition(s) processed')
    return job_definitions
