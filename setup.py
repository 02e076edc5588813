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
from setuptools import find_packages, setup
from os import path

BATCH_CONSTRUCTS_DESCRIPTION = ('batch-constructs is a construct library '
                                'that synthesizes AWS Batch job definitions '
                                'into CloudFormation templates.')

this_directory = path.abspath(path.dirname(__file__))
with open(path.join(this_directory, 'README.md'), encoding='utf-8') as f:
    long_description = f.read()

setup(
    name='batch-constructs',
    version='1.0.0',
    packages=find_packages(exclude=['tests', 'tests.*']),
    include_package_data=True,
    install_requires=[
        'click>=7.1.2',
        'configobj==5.0.8',
        'pyyaml>=6.0.1',
        'troposphere>=4.1.0'
    ],
    extras_require={
        'test': ['pytest']
    },
    entry_points='''
        [console_scripts]
        batch-constructs=batch_constructs.core.handlers:batch_constructs
    ''',
    long_description=long_description,
    long_description_content_type='text/markdown',
    description=BATCH_CONSTRUCTS_DESCRIPTION,
    author='EPAM Systems',
    keywords=['AWS', 'BATCH', 'CLOUDFORMATION', 'ECS', 'FARGATE'],
    classifiers=[
        'Development Status :: 4 - Beta',
        'Intended Audience :: Developers',
        'Topic :: Software Development :: Build Tools',
        'Programming Language :: Python :: 3.10'
    ],
)
