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
# == RESOURCE TYPES ===========================================================
BATCH_JOBDEF_LOGIC_PREFIX = 'BatchJobDefinition'
CONTAINER_JOB_TYPE = 'container'

# == ARN ======================================================================
ARN_PREFIX = 'arn'
ARN_SEPARATOR = ':'
DEFAULT_PARTITION = 'aws'
ALL_PARTITIONS = ['aws', 'aws-cn', 'aws-us-gov']

BATCH_SERVICE = 'batch'
JOB_DEFINITION_RESOURCE = 'job-definition'
IAM_SERVICE = 'iam'
IAM_ROLE_RESOURCE = 'role'

# == NAMING ===================================================================
MAX_JOB_DEFINITION_NAME_LENGTH = 128
PHYSICAL_NAME_HASH_LENGTH = 8
DEFAULT_STACK_NAME = 'batch-constructs'

# == JOB DEFINITION LIMITS ====================================================
MIN_RETRY_ATTEMPTS = 1
MAX_RETRY_ATTEMPTS = 10
MAX_RETRY_STRATEGIES = 5
MIN_SCHEDULING_PRIORITY = 0
MAX_SCHEDULING_PRIORITY = 9999
MIN_TIMEOUT_SECONDS = 60

MIN_EPHEMERAL_STORAGE_GIB = 21
MAX_EPHEMERAL_STORAGE_GIB = 200

# == SYNTH ====================================================================
CONFIG_FILE_NAME = 'batch.conf'
JOB_DEFINITIONS_META_KEY = 'job_definitions'
EC2_CONTAINER_TYPE = 'ec2'
FARGATE_CONTAINER_TYPE = 'fargate'
YAML_OUTPUT_FORMAT = 'yaml'
JSON_OUTPUT_FORMAT = 'json'
DEFAULT_JSON_INDENT = 2

OK_RETURN_CODE = 0
FAILED_RETURN_CODE = 1
