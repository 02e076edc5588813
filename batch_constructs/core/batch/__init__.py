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
from batch_constructs.core.batch.container_definition import (
    Compatibility, EcsContainerDefinition, EcsEc2ContainerDefinition,
    EcsFargateContainerDefinition)
from batch_constructs.core.batch.ecs_job_definition import (
    EcsJobDefinition, ImportedEcsJobDefinition, render_platform_capabilities)
from batch_constructs.core.batch.job_definition_base import (
    Action, JobDefinitionBase, Reason, RetryStrategy)
