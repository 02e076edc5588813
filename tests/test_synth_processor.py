import os
import shutil
import tempfile
import unittest

import yaml

from batch_constructs.core.batch import (EcsJobDefinition,
                                         ImportedEcsJobDefinition)
from batch_constructs.core.construct import Stack
from batch_constructs.core.synth_processor import (load_meta, synthesize,
                                                   build_container,
                                                   build_retry_strategy)
from batch_constructs.exceptions import (ParameterError,
                                         ResourceMetadataError)

IMAGE = 'public.ecr.aws/amazonlinux/amazonlinux:latest'


class TestSynthProcessor(unittest.TestCase):

    def setUp(self) -> None:
        self.stack = Stack('analytics', account='123456789012',
                           region='eu-central-1')
        self.meta = {
            'job_definitions': {
                'ProcessImages': {
                    'job_definition_name': 'process-images',
                    'container': {
                        'type': 'fargate',
                        'image': IMAGE,
                        'cpu': 1,
                        'memory': 2048,
                        'assign_public_ip': True
                    },
                    'propagate_tags': True,
                    'retry_attempts': 3,
                    'retry_strategies': [
                        {'action': 'retry',
                         'reason': 'spot_instance_reclaimed'},
                        {'action': 'exit', 'on_exit_code': '1*'}
                    ]
                },
                'Train': {
                    'container': {
                        'type': 'EC2',
                        'image': IMAGE,
                        'cpu': 8,
                        'memory': 61440,
                        'gpu': 1
                    }
                },
                'Nightly': {
                    'arn': 'arn:aws:batch:eu-central-1:123456789012:'
                           'job-definition/nightly:4'
                }
            }
        }

    def test_synthesize(self):
        job_definitions = synthesize(self.stack, self.meta)
        process_images, train, nightly = job_definitions
        self.assertIsInstance(process_images, EcsJobDefinition)
        self.assertIsInstance(train, EcsJobDefinition)
        self.assertIsInstance(nightly, ImportedEcsJobDefinition)
        self.assertEqual(nightly.job_definition_name, 'nightly:4')

        resources = self.stack.to_dict()['Resources']
        self.assertEqual(set(resources), {'BatchJobDefinitionProcessImages',
                                          'BatchJobDefinitionTrain'})
        properties = resources['BatchJobDefinitionProcessImages']['Properties']
        self.assertEqual(properties['PlatformCapabilities'], ['FARGATE'])
        self.assertIs(properties['PropagateTags'], True)
        self.assertEqual(
            properties['RetryStrategy']['EvaluateOnExit'],
            [{'Action': 'RETRY', 'OnStatusReason': 'Host EC2*'},
             {'Action': 'EXIT', 'OnExitCode': '1*'}])
        self.assertEqual(
            resources['BatchJobDefinitionTrain']['Properties'][
                'PlatformCapabilities'], ['EC2'])

    def test_unknown_container_type(self):
        with self.assertRaises(ParameterError):
            build_container('Job', {'type': 'lambda', 'image': IMAGE,
                                    'cpu': 1, 'memory': 128})

    def test_unknown_container_parameter(self):
        with self.assertRaises(ParameterError):
            build_container('Job', {'type': 'ec2', 'image': IMAGE,
                                    'cpu': 1, 'memory': 128,
                                    'assign_public_ip': True})

    def test_missing_container(self):
        with self.assertRaises(ParameterError):
            synthesize(self.stack,
                       {'job_definitions': {'Job': {'retry_attempts': 1}}})
        self.assertEqual(len(self.stack.template.resources), 0)

    def test_unknown_job_definition_parameter(self):
        meta = self.meta['job_definitions']['Train']
        meta['priority'] = 1
        with self.assertRaises(ParameterError):
            synthesize(self.stack, {'job_definitions': {'Train': meta}})

    def test_unknown_retry_reason(self):
        with self.assertRaises(ParameterError):
            build_retry_strategy('Job',
                                 {'action': 'retry', 'reason': 'always'})

    def test_arn_entry_rejects_other_keys(self):
        meta = {'job_definitions': {'Nightly': {
            'arn': 'job-definition/nightly',
            'container': {'type': 'ec2', 'image': IMAGE,
                          'cpu': 1, 'memory': 128}}}}
        with self.assertRaises(ParameterError):
            synthesize(self.stack, meta)
        self.assertIsNone(self.stack.find_child('Nightly'))
        self.assertEqual(len(self.stack.template.resources), 0)


class TestLoadMeta(unittest.TestCase):

    def setUp(self) -> None:
        self.tmp_dir = tempfile.mkdtemp()
        self.meta_path = os.path.join(self.tmp_dir, 'job_definitions.yml')

    def tearDown(self) -> None:
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def test_load(self):
        meta = {'job_definitions': {'Nightly': {
            'arn': 'job-definition/nightly'}}}
        with open(self.meta_path, 'w') as meta_file:
            yaml.safe_dump(meta, meta_file)
        self.assertEqual(load_meta(self.meta_path), meta)

    def test_missing_job_definitions(self):
        with open(self.meta_path, 'w') as meta_file:
            yaml.safe_dump({'resources': {}}, meta_file)
        with self.assertRaises(ResourceMetadataError):
            load_meta(self.meta_path)

    def test_retry_reason_written_in_yaml(self):
        with open(self.meta_path, 'w') as meta_file:
            meta_file.write('job_definitions:\n'
                            '  ProcessImages:\n'
                            '    container:\n'
                            '      type: fargate\n'
                            f'      image: {IMAGE}\n'
                            '      cpu: 1\n'
                            '      memory: 2048\n'
                            '    retry_strategies:\n'
                            '      - action: retry\n'
                            '        reason: spot_instance_reclaimed\n')
        meta = load_meta(self.meta_path)
        stack = Stack('analytics', account='123456789012',
                      region='eu-central-1')
        job_definition, = synthesize(stack, meta)
        strategies = job_definition.retry_strategies
        self.assertEqual(
            [strategy.render() for strategy in strategies],
            [{'Action': 'RETRY', 'OnStatusReason': 'Host EC2*'}])
