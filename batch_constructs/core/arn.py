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
from batch_constructs.commons.log_helper import get_logger
from batch_constructs.core.constants import ARN_PREFIX, ARN_SEPARATOR
from batch_constructs.exceptions import InvalidValueError

_LOG = get_logger(__name__)

MIN_ARN_PARTS = 6


class ArnFormat:
    """Ways the resource part of an ARN is laid out."""
    # arn:aws:service:region:account:resource
    NO_RESOURCE_NAME = 'no_resource_name'
    # arn:aws:service:region:account:resource:resourceName
    COLON_RESOURCE_NAME = 'colon_resource_name'
    # arn:aws:service:region:account:resource/resourceName
    SLASH_RESOURCE_NAME = 'slash_resource_name'
    # arn:aws:service:region:account:resource/resource/resourceName
    SLASH_RESOURCE_SLASH_RESOURCE_NAME = 'slash_resource_slash_resource_name'

    ALL = (NO_RESOURCE_NAME, COLON_RESOURCE_NAME, SLASH_RESOURCE_NAME,
           SLASH_RESOURCE_SLASH_RESOURCE_NAME)


class ArnComponents:

    def __init__(self, resource, partition=None, service=None, region=None,
                 account=None, resource_name=None,
                 arn_format=ArnFormat.SLASH_RESOURCE_NAME):
        self.partition = partition
        self.service = service
        self.region = region
        self.account = account
        self.resource = resource
        self.resource_name = resource_name
        self.arn_format = arn_format

    def __eq__(self, other):
        if not isinstance(other, ArnComponents):
            return NotImplemented
        return vars(self) == vars(other)

    def __repr__(self):
        return f'ArnComponents({vars(self)})'


def _separator_for(arn_format):
    if arn_format == ArnFormat.COLON_RESOURCE_NAME:
        return ':'
    return '/'


def _split_resource(resource_part, arn_format):
    if arn_format == ArnFormat.NO_RESOURCE_NAME:
        return resource_part, None

    separator = _separator_for(arn_format)
    if arn_format == ArnFormat.SLASH_RESOURCE_SLASH_RESOURCE_NAME:
        index = resource_part.rfind(separator)
    else:
        index = resource_part.find(separator)
    if index <= 0:
        raise InvalidValueError(
            f"Resource part '{resource_part}' does not contain the "
            f"'{separator}' separator required by the {arn_format} format")
    return resource_part[:index], resource_part[index + 1:]


def split_arn(arn, arn_format):
    """ Splits an ARN into its components.

    A string that does not start with 'arn:' is treated as the bare
    resource part of an ARN, e.g. 'job-definition/my-job'.

    :type arn: str
    :type arn_format: str
    :param arn_format: one of ArnFormat values
    :rtype: ArnComponents
    """
    if arn_format not in ArnFormat.ALL:
        raise InvalidValueError(f"Unknown ARN format '{arn_format}'")
    if not isinstance(arn, str) or not arn:
        raise InvalidValueError(f"ARN must be a non-empty string, "
                                f"got '{arn}'")

    if not arn.startswith(ARN_PREFIX + ARN_SEPARATOR):
        _LOG.debug(f"'{arn}' is not a full ARN, treating it as "
                   f"a resource part")
        resource, resource_name = _split_resource(arn, arn_format)
        return ArnComponents(resource=resource,
                             resource_name=resource_name,
                             arn_format=arn_format)

    parts = arn.split(ARN_SEPARATOR, MIN_ARN_PARTS - 1)
    if len(parts) < MIN_ARN_PARTS:
        raise InvalidValueError(
            f"ARN '{arn}' must be in the form "
            f"'arn:partition:service:region:account:resource'")
    _, partition, service, region, account, resource_part = parts
    if not partition or not service or not resource_part:
        raise InvalidValueError(
            f"ARN '{arn}' has an empty partition, service or resource")

    resource, resource_name = _split_resource(resource_part, arn_format)
    return ArnComponents(partition=partition,
                         service=service,
                         region=region,
                         account=account,
                         resource=resource,
                         resource_name=resource_name,
                         arn_format=arn_format)


def format_arn(components):
    """ Builds an ARN string. Partition, service and resource must be set.

    :type components: ArnComponents
    :rtype: str
    """
    for attr in ('partition', 'service', 'resource'):
        if not getattr(components, attr):
            raise InvalidValueError(
                f"Cannot format an ARN without the '{attr}' component")

    resource_part = components.resource
    if components.arn_format != ArnFormat.NO_RESOURCE_NAME:
        if not components.resource_name:
            raise InvalidValueError(
                f"Cannot format an ARN of the {components.arn_format} "
                f"format without a resource name")
        separator = _separator_for(components.arn_format)
        resource_part = (f'{resource_part}{separator}'
                         f'{components.resource_name}')

    return ARN_SEPARATOR.join([ARN_PREFIX,
                               components.partition,
                               components.service,
                               components.region or '',
                               components.account or '',
                               resource_part])
