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
from troposphere import batch

from batch_constructs.commons.log_helper import get_logger
from batch_constructs.core.arn import ArnFormat
from batch_constructs.core.batch.container_definition import (
    Compatibility, EcsContainerDefinition)
from batch_constructs.core.batch.job_definition_base import (
    JobDefinitionBase, base_job_definition_properties)
from batch_constructs.core.constants import (BATCH_SERVICE,
                                             JOB_DEFINITION_RESOURCE,
                                             BATCH_JOBDEF_LOGIC_PREFIX,
                                             CONTAINER_JOB_TYPE)
from batch_constructs.core.construct import Stack
from batch_constructs.core.helper import to_logic_name
from batch_constructs.exceptions import ParameterError, InvalidTypeError

_LOG = get_logger(__name__)


def render_platform_capabilities(compatibility):
    if compatibility == Compatibility.EC2:
        return [Compatibility.EC2]
    return [Compatibility.FARGATE]


class ImportedEcsJobDefinition(JobDefinitionBase):
    """A job definition defined outside of the stack. Nothing is added to
    the template for it. The container it runs cannot be recovered from
    the ARN, so `container` is always None."""

    enabled = True
    container = None

    def __init__(self, scope, id, job_definition_arn, job_definition_name):
        super().__init__(scope, id)
        self.physical_name = job_definition_name
        self.physical_name_generated = False
        self._job_definition_arn = job_definition_arn
        self._job_definition_name = job_definition_name

    @property
    def job_definition_arn(self):
        return self._job_definition_arn

    @property
    def job_definition_name(self):
        return self._job_definition_name


class EcsJobDefinition(JobDefinitionBase):
    """ A job definition that uses ECS orchestration, synthesized into an
    AWS::Batch::JobDefinition resource of the 'container' type.

    :param container: EcsEc2ContainerDefinition or
        EcsFargateContainerDefinition the job runs
    :param propagate_tags: propagate tags from the job definition to the
        ECS task Batch spawns
    :param tags: mapping of tag keys to values
    """

    def __init__(self, scope, id, container=None, propagate_tags=None,
                 tags=None, **kwargs):
        if container is None:
            raise ParameterError(
                f"Container must be specified for the '{id}' job definition")
        if not isinstance(container, EcsContainerDefinition):
            raise InvalidTypeError(
                f"Container of the '{id}' job definition must be an "
                f"EcsContainerDefinition, got '{type(container).__name__}'")
        self.resource = None
        super().__init__(scope, id, **kwargs)
        try:
            self._render_resource(container, propagate_tags, tags)
        except Exception:
            self.detach()
            raise
        _LOG.info(f"Batch job definition '{self._job_definition_name}' "
                  f"added to the '{self.stack.stack_name}' stack")

    def _render_resource(self, container, propagate_tags, tags):
        self._container = container
        self._propagate_tags = bool(propagate_tags)
        self.tags = dict(tags) if tags else None

        self._job_definition_arn = self.get_resource_arn_attribute(
            service=BATCH_SERVICE,
            resource=JOB_DEFINITION_RESOURCE)
        self._job_definition_name = self.get_resource_name_attribute()

        logic_name = to_logic_name(BATCH_JOBDEF_LOGIC_PREFIX,
                                   *self.path_components[1:])
        self.resource = self.stack.add_resource(
            batch.JobDefinition.from_dict(logic_name,
                                          self.render_properties()))

    @staticmethod
    def from_job_definition_arn(scope, id, job_definition_arn):
        """ Imports a job definition by its ARN without creating a new
        resource.

        :rtype: ImportedEcsJobDefinition
        """
        stack = Stack.of(scope)
        job_definition_name = stack.split_arn(
            job_definition_arn, ArnFormat.SLASH_RESOURCE_NAME).resource_name
        _LOG.debug(f"Importing job definition '{job_definition_name}' "
                   f"from '{job_definition_arn}'")
        return ImportedEcsJobDefinition(
            scope, id,
            job_definition_arn=job_definition_arn,
            job_definition_name=job_definition_name)

    @property
    def container(self):
        return self._container

    @property
    def propagate_tags(self):
        return self._propagate_tags

    @property
    def job_definition_arn(self):
        return self._job_definition_arn

    @property
    def job_definition_name(self):
        return self._job_definition_name

    @property
    def logical_id(self):
        return self.resource.title

    def add_retry_strategy(self, strategy):
        super().add_retry_strategy(strategy)
        if self.resource is not None:
            self.resource.RetryStrategy = batch.RetryStrategy.from_dict(
                title=None,
                d=base_job_definition_properties(self)['RetryStrategy'])

    def render_platform_capabilities(self):
        return render_platform_capabilities(self._container.compatibility)

    def render_properties(self):
        properties = base_job_definition_properties(self)
        properties.update({
            'Type': CONTAINER_JOB_TYPE,
            'JobDefinitionName': self.physical_name,
            'ContainerProperties':
                self._container.render_container_definition(self.stack),
            'PlatformCapabilities': self.render_platform_capabilities(),
            'PropagateTags': self._propagate_tags
        })
        if self.tags:
            properties['Tags'] = self.tags
        return properties
