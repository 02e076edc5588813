import unittest

from batch_constructs.core.arn import (ArnComponents, ArnFormat, split_arn,
                                       format_arn)
from batch_constructs.exceptions import InvalidValueError


class TestSplitArn(unittest.TestCase):

    def test_full_arn_with_slash_resource_name(self):
        components = split_arn(
            'arn:aws:batch:eu-central-1:123456789012:job-definition/my-job',
            ArnFormat.SLASH_RESOURCE_NAME)
        self.assertEqual(components.partition, 'aws')
        self.assertEqual(components.service, 'batch')
        self.assertEqual(components.region, 'eu-central-1')
        self.assertEqual(components.account, '123456789012')
        self.assertEqual(components.resource, 'job-definition')
        self.assertEqual(components.resource_name, 'my-job')

    def test_revision_stays_in_resource_name(self):
        components = split_arn(
            'arn:aws:batch:us-east-1:123456789012:job-definition/nightly:4',
            ArnFormat.SLASH_RESOURCE_NAME)
        self.assertEqual(components.resource_name, 'nightly:4')

    def test_bare_resource_part(self):
        components = split_arn('job-definition/my-job',
                               ArnFormat.SLASH_RESOURCE_NAME)
        self.assertEqual(components.resource, 'job-definition')
        self.assertEqual(components.resource_name, 'my-job')
        self.assertIsNone(components.partition)

    def test_colon_resource_name(self):
        components = split_arn(
            'arn:aws:logs:eu-west-1:123456789012:log-group:my-group',
            ArnFormat.COLON_RESOURCE_NAME)
        self.assertEqual(components.resource, 'log-group')
        self.assertEqual(components.resource_name, 'my-group')

    def test_slash_resource_slash_resource_name(self):
        components = split_arn(
            'arn:aws:ecs:eu-west-1:123456789012:service/cluster/web',
            ArnFormat.SLASH_RESOURCE_SLASH_RESOURCE_NAME)
        self.assertEqual(components.resource, 'service/cluster')
        self.assertEqual(components.resource_name, 'web')

    def test_no_resource_name(self):
        components = split_arn('arn:aws:s3:::my-bucket',
                               ArnFormat.NO_RESOURCE_NAME)
        self.assertEqual(components.resource, 'my-bucket')
        self.assertIsNone(components.resource_name)
        self.assertEqual(components.region, '')

    def test_too_few_parts(self):
        with self.assertRaises(InvalidValueError):
            split_arn('arn:aws:batch:eu-central-1',
                      ArnFormat.SLASH_RESOURCE_NAME)

    def test_missing_separator(self):
        with self.assertRaises(InvalidValueError):
            split_arn('job-definition', ArnFormat.SLASH_RESOURCE_NAME)

    def test_empty_string(self):
        with self.assertRaises(InvalidValueError):
            split_arn('', ArnFormat.SLASH_RESOURCE_NAME)

    def test_unknown_format(self):
        with self.assertRaises(InvalidValueError):
            split_arn('job-definition/my-job', 'dash')


class TestFormatArn(unittest.TestCase):

    def test_slash_resource_name(self):
        arn = format_arn(ArnComponents(partition='aws-cn',
                                       service='batch',
                                       region='cn-north-1',
                                       account='123456789012',
                                       resource='job-definition',
                                       resource_name='my-job'))
        self.assertEqual(
            arn,
            'arn:aws-cn:batch:cn-north-1:123456789012:job-definition/my-job')

    def test_global_service(self):
        arn = format_arn(ArnComponents(partition='aws',
                                       service='iam',
                                       region='',
                                       account='123456789012',
                                       resource='role',
                                       resource_name='runner'))
        self.assertEqual(arn, 'arn:aws:iam::123456789012:role/runner')

    def test_split_of_formatted_arn(self):
        components = ArnComponents(partition='aws',
                                   service='batch',
                                   region='eu-west-1',
                                   account='123456789012',
                                   resource='job-definition',
                                   resource_name='etl')
        self.assertEqual(
            split_arn(format_arn(components), ArnFormat.SLASH_RESOURCE_NAME),
            components)

    def test_resource_name_required(self):
        with self.assertRaises(InvalidValueError):
            format_arn(ArnComponents(partition='aws',
                                     service='batch',
                                     resource='job-definition'))

    def test_service_required(self):
        with self.assertRaises(InvalidValueError):
            format_arn(ArnComponents(partition='aws',
                                     resource='job-definition',
                                     resource_name='etl'))
