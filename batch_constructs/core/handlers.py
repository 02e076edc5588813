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

import click

from batch_constructs import __version__
from batch_constructs.commons.log_helper import get_logger, get_user_logger
from batch_constructs.core.conf.config_holder import ConfigHolder
from batch_constructs.core.constants import (OK_RETURN_CODE,
                                             YAML_OUTPUT_FORMAT,
                                             JSON_OUTPUT_FORMAT)
from batch_constructs.core.construct import Stack
from batch_constructs.core.decorators import return_code_manager
from batch_constructs.core.helper import verbose_option
from batch_constructs.core.synth_processor import load_meta, synthesize

_LOG = get_logger(__name__)
USER_LOG = get_user_logger()


@click.group(name='batch-constructs')
@click.version_option(version=__version__)
def batch_constructs():
    """Synthesizes AWS Batch job definitions into CloudFormation"""


@batch_constructs.command(name='synth')
@return_code_manager
@click.option('--config-dir', envvar='BC_CONF', required=True,
              type=click.Path(exists=True, file_okay=False),
              help='Directory with the batch.conf file. '
                   'Default value: the BC_CONF environment variable')
@click.option('--meta', '-m', required=True,
              type=click.Path(exists=True, dir_okay=False),
              help='YAML file describing the job definitions')
@click.option('--output-format', '-f', default=YAML_OUTPUT_FORMAT,
              type=click.Choice([YAML_OUTPUT_FORMAT, JSON_OUTPUT_FORMAT],
                                case_sensitive=False),
              help='Format of the produced template. Default value: yaml')
@click.option('--output-file', '-o',
              type=click.Path(dir_okay=False),
              help='File the template is written to. '
                   'The template is printed when omitted')
@verbose_option
def synth(config_dir, meta, output_format, output_file):
    """
    Builds the CloudFormation template of the job definitions described
    in the meta file
    """
    config = ConfigHolder(config_dir)
    stack = Stack.from_config(config)
    job_definitions = synthesize(stack, load_meta(meta))

    if output_format.lower() == JSON_OUTPUT_FORMAT:
        template_body = stack.to_json()
    else:
        template_body = stack.to_yaml()

    if not output_file:
        click.echo(template_body)
        return OK_RETURN_CODE

    output_path = os.path.abspath(output_file)
    with open(output_path, 'w') as output:
        output.write(template_body)
    USER_LOG.info(f'{len(job_definitions)} job definition(s) of the '
                  f"'{stack.stack_name}' stack are written to {output_path}")
    return OK_RETURN_CODE
