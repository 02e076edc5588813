import unittest

from batch_constructs.core.batch import (Compatibility,
                                         EcsEc2ContainerDefinition,
                                         EcsFargateContainerDefinition)
from batch_constructs.core.construct import Stack
from batch_constructs.exceptions import ParameterError

IMAGE = 'public.ecr.aws/amazonlinux/amazonlinux:latest'


class TestEcsContainerDefinition(unittest.TestCase):

    def setUp(self) -> None:
        self.stack = Stack('analytics', account='123456789012',
                           region='eu-central-1')

    def test_minimal_rendering(self):
        container = EcsFargateContainerDefinition(image=IMAGE, cpu=0.5,
                                                  memory=1024)
        self.assertEqual(
            container.render_container_definition(self.stack),
            {
                'Image': IMAGE,
                'ResourceRequirements': [
                    {'Type': 'MEMORY', 'Value': '1024'},
                    {'Type': 'VCPU', 'Value': '0.5'}
                ]
            })

    def test_whole_cpu_rendered_without_fraction(self):
        container = EcsEc2ContainerDefinition(image=IMAGE, cpu=2.0,
                                              memory=4096)
        requirements = container.render_container_definition(
            self.stack)['ResourceRequirements']
        self.assertIn({'Type': 'VCPU', 'Value': '2'}, requirements)

    def test_common_properties(self):
        container = EcsEc2ContainerDefinition(
            image=IMAGE, cpu=1, memory=2048,
            command=['python', 'main.py', 'Ref::date'],
            environment={'STAGE': 'prod', 'THREADS': 4},
            secrets={'DB_PASSWORD':
                     'arn:aws:secretsmanager:eu-central-1:123456789012:'
                     'secret:db'},
            job_role='job-runner',
            execution_role='arn:aws:iam::210987654321:role/executor',
            readonly_root_filesystem=True,
            user='batch')
        rendered = container.render_container_definition(self.stack)
        self.assertEqual(rendered['Command'],
                         ['python', 'main.py', 'Ref::date'])
        self.assertEqual(rendered['Environment'],
                         [{'Name': 'STAGE', 'Value': 'prod'},
                          {'Name': 'THREADS', 'Value': '4'}])
        self.assertEqual(rendered['Secrets'][0]['Name'], 'DB_PASSWORD')
        self.assertEqual(rendered['JobRoleArn'],
                         'arn:aws:iam::123456789012:role/job-runner')
        self.assertEqual(rendered['ExecutionRoleArn'],
                         'arn:aws:iam::210987654321:role/executor')
        self.assertTrue(rendered['ReadonlyRootFilesystem'])
        self.assertEqual(rendered['User'], 'batch')

    def test_ec2_specific_properties(self):
        container = EcsEc2ContainerDefinition(image=IMAGE, cpu=4,
                                              memory=16384, privileged=True,
                                              gpu=1)
        rendered = container.render_container_definition(self.stack)
        self.assertEqual(container.compatibility, Compatibility.EC2)
        self.assertTrue(rendered['Privileged'])
        self.assertIn({'Type': 'GPU', 'Value': '1'},
                      rendered['ResourceRequirements'])

    def test_fargate_specific_properties(self):
        container = EcsFargateContainerDefinition(
            image=IMAGE, cpu=1, memory=2048, assign_public_ip=False,
            fargate_platform_version='LATEST', ephemeral_storage_size=100)
        rendered = container.render_container_definition(self.stack)
        self.assertEqual(container.compatibility, Compatibility.FARGATE)
        self.assertEqual(rendered['NetworkConfiguration'],
                         {'AssignPublicIp': 'DISABLED'})
        self.assertEqual(rendered['FargatePlatformConfiguration'],
                         {'PlatformVersion': 'LATEST'})
        self.assertEqual(rendered['EphemeralStorage'], {'SizeInGiB': 100})

    def test_image_required(self):
        with self.assertRaises(ParameterError):
            EcsFargateContainerDefinition(image='', cpu=1, memory=2048)

    def test_cpu_and_memory_must_be_positive(self):
        with self.assertRaises(ParameterError):
            EcsFargateContainerDefinition(image=IMAGE, cpu=0, memory=2048)
        with self.assertRaises(ParameterError):
            EcsFargateContainerDefinition(image=IMAGE, cpu=1, memory=-1)
        with self.assertRaises(ParameterError):
            EcsFargateContainerDefinition(image=IMAGE, cpu=1, memory='2G')

    def test_negative_gpu(self):
        with self.assertRaises(ParameterError):
            EcsEc2ContainerDefinition(image=IMAGE, cpu=1, memory=2048, gpu=-1)

    def test_ephemeral_storage_bounds(self):
        for size in (20, 201):
            with self.assertRaises(ParameterError):
                EcsFargateContainerDefinition(image=IMAGE, cpu=1,
                                              memory=2048,
                                              ephemeral_storage_size=size)

    def test_gpu_must_be_integer(self):
        for gpu in (True, '1', 1.0):
            with self.assertRaises(ParameterError):
                EcsEc2ContainerDefinition(image=IMAGE, cpu=1, memory=2048,
                                          gpu=gpu)

    def test_ephemeral_storage_must_be_integer(self):
        for size in ('30', True, 30.5):
            with self.assertRaises(ParameterError):
                EcsFargateContainerDefinition(image=IMAGE, cpu=1,
                                              memory=2048,
                                              ephemeral_storage_size=size)
