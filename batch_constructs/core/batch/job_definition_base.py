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
import re

from batch_constructs.commons.log_helper import get_logger
from batch_constructs.core.constants import (MIN_RETRY_ATTEMPTS,
                                             MAX_RETRY_ATTEMPTS,
                                             MAX_RETRY_STRATEGIES,
                                             MIN_SCHEDULING_PRIORITY,
                                             MAX_SCHEDULING_PRIORITY,
                                             MIN_TIMEOUT_SECONDS,
                                             MAX_JOB_DEFINITION_NAME_LENGTH)
from batch_constructs.core.construct import Resource
from batch_constructs.exceptions import ParameterError, InvalidTypeError

_LOG = get_logger(__name__)

JOB_DEFINITION_NAME_PATTERN = re.compile(
    r'^[A-Za-z0-9_-]{1,' + str(MAX_JOB_DEFINITION_NAME_LENGTH) + r'}\Z')


class Action:
    """What Batch does with a job whose attempt matched a retry strategy."""
    EXIT = 'EXIT'
    RETRY = 'RETRY'

    ALL = (EXIT, RETRY)


class Reason:
    """The conditions a retry strategy matches a failed attempt on."""

    def __init__(self, on_exit_code=None, on_reason=None,
                 on_status_reason=None):
        self.on_exit_code = on_exit_code
        self.on_reason = on_reason
        self.on_status_reason = on_status_reason

    @classmethod
    def custom(cls, on_exit_code=None, on_reason=None, on_status_reason=None):
        """ Each value is a glob pattern of up to 512 characters, an
        asterisk may appear only at the end.
        """
        if not (on_exit_code or on_reason or on_status_reason):
            raise ParameterError(
                'A custom retry reason must specify at least one of '
                'on_exit_code, on_reason or on_status_reason')
        return cls(on_exit_code=on_exit_code,
                   on_reason=on_reason,
                   on_status_reason=on_status_reason)

    def render(self):
        rendered = {}
        if self.on_exit_code:
            rendered['OnExitCode'] = self.on_exit_code
        if self.on_reason:
            rendered['OnReason'] = self.on_reason
        if self.on_status_reason:
            rendered['OnStatusReason'] = self.on_status_reason
        return rendered


Reason.NON_ZERO_EXIT_CODE = Reason(on_exit_code='*')
Reason.SPOT_INSTANCE_RECLAIMED = Reason(on_status_reason='Host EC2*')
Reason.CANNOT_PULL_CONTAINER = Reason(on_reason='CannotPullContainerError:*')


class RetryStrategy:

    def __init__(self, action, on):
        if action not in Action.ALL:
            raise ParameterError(
                f"Retry action must be one of {Action.ALL}, got '{action}'")
        if not isinstance(on, Reason):
            raise InvalidTypeError(
                f"Retry reason must be a Reason, got '{type(on).__name__}'")
        self.action = action
        self.on = on

    @classmethod
    def of(cls, action, on):
        return cls(action=action, on=on)

    def render(self):
        rendered = {'Action': self.action}
        rendered.update(self.on.render())
        return rendered


def _validate_range(name, value, minimum, maximum=None):
    if value is None:
        return
    if not isinstance(value, int) or isinstance(value, bool):
        raise ParameterError(f"'{name}' must be an integer, got '{value}'")
    if value < minimum or (maximum is not None and value > maximum):
        bounds = (f'between {minimum} and {maximum}'
                  if maximum is not None else f'at least {minimum}')
        raise ParameterError(f"'{name}' must be {bounds}, got '{value}'")


def _validate_job_definition_name(name):
    if name is None:
        return
    if not isinstance(name, str) or not JOB_DEFINITION_NAME_PATTERN.match(
            name):
        raise ParameterError(
            f"Job definition name '{name}' must be 1 to "
            f"{MAX_JOB_DEFINITION_NAME_LENGTH} letters, numbers, hyphens "
            f"or underscores")


def _validate_retry_strategy(strategy, strategies_count):
    if not isinstance(strategy, RetryStrategy):
        raise InvalidTypeError(
            f"Expected a RetryStrategy, got '{type(strategy).__name__}'")
    if strategies_count >= MAX_RETRY_STRATEGIES:
        raise ParameterError(
            f'A job definition supports at most {MAX_RETRY_STRATEGIES} '
            f'retry strategies')


class JobDefinitionBase(Resource):
    """ Properties every kind of Batch job definition shares.

    :param job_definition_name: name of the job definition, generated when
        omitted
    :param parameters: default values for the parameter substitution
        placeholders of the job
    :param retry_attempts: how many times a failed job is retried
    :param retry_strategies: list of RetryStrategy, evaluated in order
    :param scheduling_priority: priority used by fair share job queues
    :param timeout: seconds after which unfinished attempts are terminated
    """
    max_name_length = MAX_JOB_DEFINITION_NAME_LENGTH

    def __init__(self, scope, id, job_definition_name=None, parameters=None,
                 retry_attempts=None, retry_strategies=None,
                 scheduling_priority=None, timeout=None):
        _validate_range('retry_attempts', retry_attempts,
                        MIN_RETRY_ATTEMPTS, MAX_RETRY_ATTEMPTS)
        _validate_range('scheduling_priority', scheduling_priority,
                        MIN_SCHEDULING_PRIORITY, MAX_SCHEDULING_PRIORITY)
        _validate_range('timeout', timeout, MIN_TIMEOUT_SECONDS)
        _validate_job_definition_name(job_definition_name)
        retry_strategies = list(retry_strategies or [])
        for index, strategy in enumerate(retry_strategies):
            _validate_retry_strategy(strategy, index)

        super().__init__(scope, id, physical_name=job_definition_name)
        self.parameters = dict(parameters) if parameters else None
        self.retry_attempts = retry_attempts
        self.retry_strategies = retry_strategies
        self.scheduling_priority = scheduling_priority
        self.timeout = timeout

    def add_retry_strategy(self, strategy):
        _validate_retry_strategy(strategy, len(self.retry_strategies))
        self.retry_strategies.append(strategy)
        _LOG.debug(f"Retry strategy '{strategy.action}' added to "
                   f"'{self.path}'")


def base_job_definition_properties(job_definition):
    """ Renders properties of AWS::Batch::JobDefinition owned by
    JobDefinitionBase.

    :type job_definition: JobDefinitionBase
    :rtype: dict
    """
    properties = {}
    if job_definition.parameters:
        properties['Parameters'] = job_definition.parameters

    retry_strategy = {}
    if job_definition.retry_attempts is not None:
        retry_strategy['Attempts'] = job_definition.retry_attempts
    if job_definition.retry_strategies:
        retry_strategy['EvaluateOnExit'] = [
            strategy.render() for strategy in job_definition.retry_strategies]
    if retry_strategy:
        properties['RetryStrategy'] = retry_strategy

    if job_definition.scheduling_priority is not None:
        properties['SchedulingPriority'] = job_definition.scheduling_priority
    if job_definition.timeout is not None:
        properties['Timeout'] = {
            'AttemptDurationSeconds': job_definition.timeout
        }
    return properties
