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


class BatchConstructsBaseError(Exception):
    """
    The base exception class for batch-constructs exceptions.
    """
    pass


# =============================================================================
class InvalidValueError(BatchConstructsBaseError):
    """
    The value error.
    """
    pass


class InvalidTypeError(BatchConstructsBaseError):
    """
    The type error.
    """
    pass


# =============================================================================
class ConfigurationError(BatchConstructsBaseError):
    """
    The configuration error.
    """
    pass


# =============================================================================
class ResourceProcessingError(BatchConstructsBaseError):
    """
    The resource processing error.
    """
    pass


# -----------------------------------------------------------------------------
class ResourceMetadataError(ResourceProcessingError):
    """
    The resource metadata error.
    """
    pass


class ParameterError(ResourceMetadataError):
    """
    The resource metadata parameter error.
    """
    pass
