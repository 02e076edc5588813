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
from troposphere import Template

from batch_constructs.commons.log_helper import get_logger
from batch_constructs.core.arn import (ArnComponents, ArnFormat, split_arn,
                                       format_arn)
from batch_constructs.core.constants import (DEFAULT_PARTITION,
                                             DEFAULT_STACK_NAME,
                                             DEFAULT_JSON_INDENT)
from batch_constructs.core.helper import generate_physical_name
from batch_constructs.exceptions import (InvalidTypeError, InvalidValueError,
                                         ResourceProcessingError)

_LOG = get_logger(__name__)

PATH_SEPARATOR = '/'


class Construct:
    """A node of the construct tree. Every construct except a stack lives
    inside a scope and is identified by an id unique within that scope."""

    def __init__(self, scope, id):
        if not id or not isinstance(id, str):
            raise InvalidValueError('Construct id must be a non-empty string')
        if PATH_SEPARATOR in id:
            raise InvalidValueError(
                f"Construct id '{id}' must not contain '{PATH_SEPARATOR}'")
        self.scope = scope
        self.id = id
        self.children = {}
        if scope is not None:
            scope._add_child(self)

    def _add_child(self, child):
        if child.id in self.children:
            raise InvalidValueError(
                f"There is already a construct with id '{child.id}' "
                f"in '{self.path}'")
        self.children[child.id] = child

    def _remove_child(self, child):
        if self.children.get(child.id) is child:
            del self.children[child.id]

    def detach(self):
        """Removes the construct from its scope so its id can be reused."""
        if self.scope is not None:
            self.scope._remove_child(self)

    @property
    def path_components(self):
        components = []
        node = self
        while node is not None:
            components.append(node.id)
            node = node.scope
        return list(reversed(components))

    @property
    def path(self):
        return PATH_SEPARATOR.join(self.path_components)

    def find_child(self, id):
        return self.children.get(id)


class Stack(Construct):
    """The root of a construct tree. A stack owns the CloudFormation
    template that resources register themselves in and knows the
    environment used to build their ARNs."""

    def __init__(self, stack_name=DEFAULT_STACK_NAME, account=None,
                 region=None, partition=DEFAULT_PARTITION, description=None):
        super().__init__(scope=None, id=stack_name)
        self.stack_name = stack_name
        self.account = account
        self.region = region
        self.partition = partition
        self.template = Template()
        if description:
            self.template.set_description(description)

    @classmethod
    def from_config(cls, config):
        """
        :type config: batch_constructs.core.conf.config_holder.ConfigHolder
        """
        return cls(stack_name=config.stack_name,
                   account=config.account_id,
                   region=config.region,
                   partition=config.partition)

    @staticmethod
    def of(construct):
        """Returns the stack the construct belongs to."""
        if not isinstance(construct, Construct):
            raise InvalidTypeError(
                f"Expected a construct, got '{type(construct).__name__}'")
        node = construct
        while node is not None:
            if isinstance(node, Stack):
                return node
            node = node.scope
        raise ResourceProcessingError(
            f"Construct '{construct.id}' is not defined within a stack")

    def add_resource(self, resource):
        _LOG.debug(f"Registering '{resource.title}' in the "
                   f"'{self.stack_name}' stack")
        return self.template.add_resource(resource)

    def split_arn(self, arn, arn_format):
        return split_arn(arn, arn_format)

    def format_arn(self, service, resource, resource_name=None,
                   region=None, account=None,
                   arn_format=ArnFormat.SLASH_RESOURCE_NAME):
        components = ArnComponents(
            partition=self.partition,
            service=service,
            region=self.region if region is None else region,
            account=self.account if account is None else account,
            resource=resource,
            resource_name=resource_name,
            arn_format=arn_format)
        return format_arn(components)

    def to_dict(self):
        return self.template.to_dict()

    def to_yaml(self):
        return self.template.to_yaml()

    def to_json(self):
        return self.template.to_json(indent=DEFAULT_JSON_INDENT)


class Resource(Construct):
    """A construct that represents a single cloud resource.

    :param physical_name: the name of the resource in the cloud; when
        omitted a deterministic name is generated from the stack name and
        the construct path
    """
    max_name_length = 255

    def __init__(self, scope, id, physical_name=None):
        if not isinstance(scope, Construct):
            raise InvalidTypeError(
                f"Scope of '{id}' must be a construct, "
                f"got '{type(scope).__name__}'")
        super().__init__(scope, id)
        try:
            self.stack = Stack.of(self)
        except ResourceProcessingError:
            self.detach()
            raise
        self.physical_name_generated = physical_name is None
        if physical_name is None:
            physical_name = generate_physical_name(
                stack_name=self.stack.stack_name,
                path_components=self.path_components[1:],
                max_length=self.max_name_length)
        self.physical_name = physical_name

    def get_resource_arn_attribute(self, service, resource,
                                   arn_format=ArnFormat.SLASH_RESOURCE_NAME):
        if not self.stack.account or not self.stack.region:
            raise ResourceProcessingError(
                f"Cannot build the ARN of '{self.path}': the stack "
                f"'{self.stack.stack_name}' has no account or region")
        return self.stack.format_arn(service=service,
                                     resource=resource,
                                     resource_name=self.physical_name,
                                     arn_format=arn_format)

    def get_resource_name_attribute(self):
        return self.physical_name
