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
from batch_constructs.core.constants import (IAM_SERVICE, IAM_ROLE_RESOURCE,
                                             MIN_EPHEMERAL_STORAGE_GIB,
                                             MAX_EPHEMERAL_STORAGE_GIB)
from batch_constructs.core.helper import is_arn
from batch_constructs.exceptions import ParameterError

_LOG = get_logger(__name__)

MEMORY_REQUIREMENT = 'MEMORY'
VCPU_REQUIREMENT = 'VCPU'
GPU_REQUIREMENT = 'GPU'

PUBLIC_IP_ENABLED = 'ENABLED'
PUBLIC_IP_DISABLED = 'DISABLED'


class Compatibility:
    """Execution environments a container can be placed on."""
    EC2 = 'EC2'
    FARGATE = 'FARGATE'


def _format_number(value):
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value)


def _is_integer(value):
    return isinstance(value, int) and not isinstance(value, bool)


class EcsContainerDefinition:
    """ Describes the container a Batch job runs. Subclasses set the
    execution environment they target in the `compatibility` attribute.

    :param image: image URI, e.g. 'public.ecr.aws/amazonlinux/amazonlinux'
    :param cpu: number of vCPUs reserved for the container
    :param memory: memory hard limit in MiB
    :param command: list of command arguments passed to the container
    :param environment: mapping of environment variable names to values
    :param secrets: mapping of environment variable names to the ARNs of
        Secrets Manager secrets or SSM parameters
    :param job_role: name or ARN of the role the container assumes
    :param execution_role: name or ARN of the role the ECS agent assumes
    :param readonly_root_filesystem: mount the root filesystem read-only
    :param user: user name to run the container as
    """
    compatibility = None

    def __init__(self, image, cpu, memory, command=None, environment=None,
                 secrets=None, job_role=None, execution_role=None,
                 readonly_root_filesystem=None, user=None):
        if not image:
            raise ParameterError('Container image must be specified')
        if not isinstance(cpu, (int, float)) or isinstance(cpu, bool) \
                or cpu <= 0:
            raise ParameterError(
                f"Container cpu must be a positive number, got '{cpu}'")
        if not isinstance(memory, int) or isinstance(memory, bool) \
                or memory <= 0:
            raise ParameterError(
                f"Container memory must be a positive number of MiB, "
                f"got '{memory}'")
        self.image = image
        self.cpu = cpu
        self.memory = memory
        self.command = list(command) if command else []
        self.environment = dict(environment) if environment else {}
        self.secrets = dict(secrets) if secrets else {}
        self.job_role = job_role
        self.execution_role = execution_role
        self.readonly_root_filesystem = readonly_root_filesystem
        self.user = user

    def render_container_definition(self, stack):
        """ Renders the ContainerProperties of AWS::Batch::JobDefinition.

        :type stack: batch_constructs.core.construct.Stack
        :param stack: used to build ARNs of the roles given by name
        :rtype: dict
        """
        properties = {
            'Image': self.image,
            'ResourceRequirements': self._render_resource_requirements()
        }
        if self.command:
            properties['Command'] = self.command
        if self.environment:
            properties['Environment'] = [
                {'Name': name, 'Value': str(value)}
                for name, value in self.environment.items()]
        if self.secrets:
            properties['Secrets'] = [
                {'Name': name, 'ValueFrom': value_from}
                for name, value_from in self.secrets.items()]
        if self.job_role:
            properties['JobRoleArn'] = resolve_role_arn(stack, self.job_role)
        if self.execution_role:
            properties['ExecutionRoleArn'] = resolve_role_arn(
                stack, self.execution_role)
        if self.readonly_root_filesystem is not None:
            properties['ReadonlyRootFilesystem'] = \
                self.readonly_root_filesystem
        if self.user:
            properties['User'] = self.user
        return properties

    def _render_resource_requirements(self):
        return [
            {'Type': MEMORY_REQUIREMENT, 'Value': str(self.memory)},
            {'Type': VCPU_REQUIREMENT, 'Value': _format_number(self.cpu)}
        ]


class EcsEc2ContainerDefinition(EcsContainerDefinition):
    """A container that runs on EC2 instances managed by the caller's
    compute environment.

    :param privileged: give the container elevated privileges on the host
    :param gpu: number of physical GPUs reserved for the container
    """
    compatibility = Compatibility.EC2

    def __init__(self, image, cpu, memory, privileged=None, gpu=None,
                 **kwargs):
        super().__init__(image=image, cpu=cpu, memory=memory, **kwargs)
        if gpu is not None and (not _is_integer(gpu) or gpu < 0):
            raise ParameterError(
                f"Container gpu must be a non-negative integer, got '{gpu}'")
        self.privileged = privileged
        self.gpu = gpu

    def render_container_definition(self, stack):
        properties = super().render_container_definition(stack)
        if self.privileged is not None:
            properties['Privileged'] = self.privileged
        return properties

    def _render_resource_requirements(self):
        requirements = super()._render_resource_requirements()
        if self.gpu:
            requirements.append({'Type': GPU_REQUIREMENT,
                                 'Value': str(self.gpu)})
        return requirements


class EcsFargateContainerDefinition(EcsContainerDefinition):
    """A container that runs on Fargate.

    :param assign_public_ip: give the task a public IP address
    :param fargate_platform_version: e.g. 'LATEST' or '1.4.0'
    :param ephemeral_storage_size: task ephemeral storage in GiB
    """
    compatibility = Compatibility.FARGATE

    def __init__(self, image, cpu, memory, assign_public_ip=None,
                 fargate_platform_version=None, ephemeral_storage_size=None,
                 **kwargs):
        super().__init__(image=image, cpu=cpu, memory=memory, **kwargs)
        if ephemeral_storage_size is not None and (
                not _is_integer(ephemeral_storage_size) or not
                MIN_EPHEMERAL_STORAGE_GIB <= ephemeral_storage_size
                <= MAX_EPHEMERAL_STORAGE_GIB):
            raise ParameterError(
                f'Ephemeral storage size must be an integer between '
                f'{MIN_EPHEMERAL_STORAGE_GIB} and '
                f'{MAX_EPHEMERAL_STORAGE_GIB} GiB, '
                f"got '{ephemeral_storage_size}'")
        self.assign_public_ip = assign_public_ip
        self.fargate_platform_version = fargate_platform_version
        self.ephemeral_storage_size = ephemeral_storage_size

    def render_container_definition(self, stack):
        properties = super().render_container_definition(stack)
        if self.assign_public_ip is not None:
            properties['NetworkConfiguration'] = {
                'AssignPublicIp': (PUBLIC_IP_ENABLED
                                   if self.assign_public_ip
                                   else PUBLIC_IP_DISABLED)
            }
        if self.fargate_platform_version:
            properties['FargatePlatformConfiguration'] = {
                'PlatformVersion': self.fargate_platform_version
            }
        if self.ephemeral_storage_size is not None:
            properties['EphemeralStorage'] = {
                'SizeInGiB': self.ephemeral_storage_size
            }
        return properties


def resolve_role_arn(stack, role):
    if is_arn(role):
        return role
    role_arn = stack.format_arn(service=IAM_SERVICE,
                                resource=IAM_ROLE_RESOURCE,
                                resource_name=role,
                                region='')
    _LOG.debug(f"Role '{role}' resolved to '{role_arn}'")
    return role_arn
