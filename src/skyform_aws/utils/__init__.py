"""Utility modules for logging, errors, retries and AWS clients."""

from skyform_aws.utils.aws_client import AwsCredentials, CallerIdentity
from skyform_aws.utils.retry import RetryStrategy, Wait, with_retry
from skyform_aws.utils.errors import (
    ErrorCategory,
    ErrorSeverity,
    ErrorContext,
    ProviderError,
    ConfigurationError,
    CredentialError,
    PermissionError,
    NetworkError,
    StateError,
    ProvisioningError,
    ResourceLimitError,
    ValidationError,
    WaitTimeoutError,
    ErrorHandler,
    error_code,
    error_handler,
    is_not_found,
)
from skyform_aws.utils.logging import LogContext, get_logger, setup_logging

__all__ = [
    # AWS Client
    'AwsCredentials',
    'CallerIdentity',

    # Retry
    'RetryStrategy',
    'Wait',
    'with_retry',

    # Errors
    'ErrorCategory',
    'ErrorSeverity',
    'ErrorContext',
    'ProviderError',
    'ConfigurationError',
    'CredentialError',
    'PermissionError',
    'NetworkError',
    'StateError',
    'ProvisioningError',
    'ResourceLimitError',
    'ValidationError',
    'WaitTimeoutError',
    'ErrorHandler',
    'error_code',
    'error_handler',
    'is_not_found',

    # Logging
    'LogContext',
    'get_logger',
    'setup_logging',
]
