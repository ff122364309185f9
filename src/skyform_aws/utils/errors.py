"""Error handling framework for provider operations."""

from typing import Optional, Dict, Any, List
from enum import Enum
from dataclasses import dataclass, asdict
from botocore.exceptions import (
    ClientError,
    EndpointConnectionError,
    NoCredentialsError,
    PartialCredentialsError,
)
from skyform_aws.utils.logging import get_logger

logger = get_logger(__name__)


class ErrorCategory(Enum):
    """Categories of errors raised while managing resources."""
    CONFIGURATION = "configuration"
    AWS = "aws"
    NETWORK = "network"
    STATE = "state"
    PROVISIONING = "provisioning"
    CREDENTIAL = "credential"
    PERMISSION = "permission"
    RESOURCE_LIMIT = "resource_limit"
    VALIDATION = "validation"
    TIMEOUT = "timeout"
    UNKNOWN = "unknown"


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    CRITICAL = "critical"  # Nothing else can run
    ERROR = "error"  # The resource failed
    WARNING = "warning"
    INFO = "info"


@dataclass
class ErrorContext:
    """Where an error happened."""
    resource_id: Optional[str] = None
    resource_type: Optional[str] = None
    operation: Optional[str] = None
    aws_service: Optional[str] = None
    aws_operation: Optional[str] = None
    request_id: Optional[str] = None
    additional_info: Optional[Dict[str, Any]] = None


class ProviderError(Exception):
    """Base exception for provider errors."""

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.UNKNOWN,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
        suggestions: Optional[List[str]] = None
    ):
        """Initialize provider error.

        Args:
            message: Human-readable error message
            category: Error category
            severity: Error severity
            context: Additional context about the error
            cause: Original exception that caused this error
            suggestions: List of suggested fixes
        """
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.cause = cause
        self.suggestions = suggestions or []

    def to_user_message(self) -> str:
        """Convert error to a message suitable for the console.

        Returns:
            Formatted error message
        """
        lines = [f"{self.severity.value.upper()}: {self.message}"]

        if self.context.resource_type and self.context.resource_id:
            lines.append(f"   Resource: {self.context.resource_type} {self.context.resource_id}")
        elif self.context.resource_id:
            lines.append(f"   Resource: {self.context.resource_id}")
        if self.context.operation:
            lines.append(f"   Operation: {self.context.operation}")

        if self.cause:
            lines.append(f"   Cause: {str(self.cause)}")

        if self.suggestions:
            lines.append("\nSuggested fixes:")
            for i, suggestion in enumerate(self.suggestions, 1):
                lines.append(f"   {i}. {suggestion}")

        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for logging/serialization.

        Returns:
            Dictionary representation of the error
        """
        return {
            'message': self.message,
            'category': self.category.value,
            'severity': self.severity.value,
            'context': asdict(self.context),
            'cause': str(self.cause) if self.cause else None,
            'suggestions': self.suggestions
        }


class ConfigurationError(ProviderError):
    """Error in the configuration file or provider settings."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            severity=ErrorSeverity.CRITICAL,
            **kwargs
        )


class CredentialError(ProviderError):
    """Error related to AWS credentials."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.CREDENTIAL,
            severity=ErrorSeverity.CRITICAL,
            **kwargs
        )


class PermissionError(ProviderError):
    """Error related to AWS permissions."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.PERMISSION,
            severity=ErrorSeverity.ERROR,
            **kwargs
        )


class NetworkError(ProviderError):
    """Network-related error."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.NETWORK,
            severity=ErrorSeverity.ERROR,
            **kwargs
        )


class StateError(ProviderError):
    """Error related to state management."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.STATE,
            severity=ErrorSeverity.CRITICAL,
            **kwargs
        )


class ProvisioningError(ProviderError):
    """Error during resource provisioning."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.PROVISIONING,
            severity=ErrorSeverity.ERROR,
            **kwargs
        )


class ResourceLimitError(ProviderError):
    """Error due to AWS service quotas or throttling."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.RESOURCE_LIMIT,
            severity=ErrorSeverity.ERROR,
            **kwargs
        )


class ValidationError(ProviderError):
    """AWS rejected a request as invalid."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.ERROR,
            **kwargs
        )


class WaitTimeoutError(ProviderError):
    """A resource did not reach the expected status in time."""

    def __init__(self, message: str, **kwargs):
        super().__init__(
            message,
            category=ErrorCategory.TIMEOUT,
            severity=ErrorSeverity.ERROR,
            **kwargs
        )


def error_code(error: Exception) -> Optional[str]:
    """Return the AWS error code of a ClientError, or None."""
    if isinstance(error, ClientError):
        return error.response.get('Error', {}).get('Code')
    return None


def is_not_found(error: Exception, *codes: str) -> bool:
    """Check whether a ClientError carries one of the given error codes.

    Args:
        error: The exception raised by a client call
        *codes: Error codes the service uses for missing entities

    Returns:
        True if the error is a ClientError with a matching code
    """
    return error_code(error) in codes


# Error class raised for each category of AWS error code
CATEGORY_ERRORS = {
    ErrorCategory.CREDENTIAL: CredentialError,
    ErrorCategory.PERMISSION: PermissionError,
    ErrorCategory.RESOURCE_LIMIT: ResourceLimitError,
    ErrorCategory.PROVISIONING: ProvisioningError,
    ErrorCategory.VALIDATION: ValidationError,
}


class ErrorHandler:
    """Handles and categorizes errors from AWS and other sources."""

    AWS_ERROR_MAPPING = {
        # Credential errors
        'InvalidClientTokenId': {
            'category': ErrorCategory.CREDENTIAL,
            'message': 'AWS credentials are invalid or expired',
            'suggestions': [
                'Check that your AWS credentials are correctly configured',
                'Verify credentials using: aws sts get-caller-identity',
            ]
        },
        'ExpiredToken': {
            'category': ErrorCategory.CREDENTIAL,
            'message': 'AWS session token has expired',
            'suggestions': [
                'Refresh your AWS session credentials',
            ]
        },
        'UnrecognizedClientException': {
            'category': ErrorCategory.CREDENTIAL,
            'message': 'The security token included in the request is invalid',
            'suggestions': [
                'Check the profile configured for the provider',
            ]
        },

        # Permission errors
        'AccessDenied': {
            'category': ErrorCategory.PERMISSION,
            'message': 'Access denied - insufficient permissions',
            'suggestions': [
                'Check IAM policies attached to your user/role',
                'Verify you have the required permissions for this operation',
            ]
        },
        'AccessDeniedException': {
            'category': ErrorCategory.PERMISSION,
            'message': 'Access denied - insufficient permissions',
            'suggestions': [
                'Check IAM policies attached to your user/role',
                'Check that the role passed to the service can be assumed by it',
            ]
        },
        'NotAuthorizedException': {
            'category': ErrorCategory.PERMISSION,
            'message': 'Operation not authorized',
            'suggestions': [
                'Add the required Cognito permission to your user/role',
            ]
        },

        # Resource limit errors
        'LimitExceededException': {
            'category': ErrorCategory.RESOURCE_LIMIT,
            'message': 'AWS service limit exceeded',
            'suggestions': [
                'Request a service limit increase through AWS Support',
                'Review and clean up unused resources',
            ]
        },
        'ServiceQuotaExceededException': {
            'category': ErrorCategory.RESOURCE_LIMIT,
            'message': 'AWS service quota exceeded',
            'suggestions': [
                'Request a quota increase through Service Quotas',
            ]
        },
        'TooManyLoadBalancers': {
            'category': ErrorCategory.RESOURCE_LIMIT,
            'message': 'Load balancer quota reached',
            'suggestions': [
                'Delete unused load balancers or request a quota increase',
            ]
        },
        'TooManyTargetGroups': {
            'category': ErrorCategory.RESOURCE_LIMIT,
            'message': 'Target group quota reached',
            'suggestions': [
                'Delete unused target groups or request a quota increase',
            ]
        },
        'TooManyRequestsException': {
            'category': ErrorCategory.RESOURCE_LIMIT,
            'message': 'API rate limit exceeded',
            'suggestions': [
                'Reduce the frequency of API calls',
                'Raise max-attempts in the provider settings',
            ]
        },
        'ThrottlingException': {
            'category': ErrorCategory.RESOURCE_LIMIT,
            'message': 'API rate limit exceeded',
            'suggestions': [
                'Raise max-attempts in the provider settings',
            ]
        },

        # Resource errors
        'NotFoundException': {
            'category': ErrorCategory.PROVISIONING,
            'message': 'Resource not found',
            'suggestions': [
                'Verify the resource exists in the specified region',
                'Check if the resource was deleted manually',
            ]
        },
        'ResourceNotFoundException': {
            'category': ErrorCategory.PROVISIONING,
            'message': 'Resource not found',
            'suggestions': [
                'Verify the resource exists in the specified region',
                'Check if the resource was deleted manually',
            ]
        },
        'ConflictException': {
            'category': ErrorCategory.PROVISIONING,
            'message': 'Resource is in a conflicting state',
            'suggestions': [
                'Wait for the resource to finish its current operation',
                'Use a different name for the resource',
            ]
        },
        'ResourceInUseException': {
            'category': ErrorCategory.PROVISIONING,
            'message': 'Resource is currently in use',
            'suggestions': [
                'Wait for the resource to become available',
                'Check for dependencies that are using this resource',
            ]
        },
        'ResourceInUse': {
            'category': ErrorCategory.PROVISIONING,
            'message': 'Resource is currently in use',
            'suggestions': [
                'Delete the listeners or rules that reference this resource first',
            ]
        },
        'DuplicateLoadBalancerName': {
            'category': ErrorCategory.PROVISIONING,
            'message': 'A load balancer with this name already exists',
            'suggestions': [
                'Use a different name for the load balancer',
            ]
        },
        'DuplicateTargetGroupName': {
            'category': ErrorCategory.PROVISIONING,
            'message': 'A target group with this name already exists',
            'suggestions': [
                'Use a different name for the target group',
            ]
        },

        # Validation errors
        'BadRequestException': {
            'category': ErrorCategory.VALIDATION,
            'message': 'Invalid request',
            'suggestions': [
                'Review the error message for specific validation failures',
            ]
        },
        'ValidationException': {
            'category': ErrorCategory.VALIDATION,
            'message': 'Invalid parameter or configuration',
            'suggestions': [
                'Review the error message for specific validation failures',
                'Verify all required parameters are provided',
            ]
        },
        'InvalidParameterException': {
            'category': ErrorCategory.VALIDATION,
            'message': 'Invalid parameter value',
            'suggestions': [
                'Check parameter format and constraints',
            ]
        },
        'InvalidConfigurationRequest': {
            'category': ErrorCategory.VALIDATION,
            'message': 'Invalid load balancer configuration',
            'suggestions': [
                'Check subnets, security groups and scheme for the load balancer',
            ]
        },
    }

    def __init__(self):
        self.logger = get_logger(__name__)

    def handle_exception(
        self,
        error: Exception,
        context: Optional[ErrorContext] = None
    ) -> ProviderError:
        """Convert an exception into a ProviderError.

        Args:
            error: The exception to handle
            context: Additional context about where the error occurred

        Returns:
            ProviderError with categorization and suggestions
        """
        context = context or ErrorContext()

        if isinstance(error, ProviderError):
            return error

        if isinstance(error, ClientError):
            return self._handle_aws_error(error, context)

        if isinstance(error, (NoCredentialsError, PartialCredentialsError)):
            return self._handle_credential_error(error, context)

        if isinstance(error, (ConnectionError, TimeoutError, EndpointConnectionError)):
            return self._handle_network_error(error, context)

        return ProviderError(
            message=str(error),
            category=ErrorCategory.UNKNOWN,
            severity=ErrorSeverity.ERROR,
            context=context,
            cause=error,
            suggestions=['Check logs for more details']
        )

    def _handle_aws_error(
        self,
        error: ClientError,
        context: ErrorContext
    ) -> ProviderError:
        error_code = error.response.get('Error', {}).get('Code', 'Unknown')
        error_message = error.response.get('Error', {}).get('Message', str(error))
        request_id = error.response.get('ResponseMetadata', {}).get('RequestId')

        context.request_id = request_id
        context.aws_operation = context.aws_operation or error.operation_name

        error_info = self.AWS_ERROR_MAPPING.get(error_code)

        if error_info:
            error_class = CATEGORY_ERRORS[error_info['category']]
            return error_class(
                message=f"{error_info['message']}: {error_message}",
                context=context,
                cause=error,
                suggestions=error_info['suggestions']
            )

        return ProviderError(
            message=f"AWS Error ({error_code}): {error_message}",
            category=ErrorCategory.AWS,
            severity=ErrorSeverity.ERROR,
            context=context,
            cause=error,
            suggestions=[
                'Check AWS documentation for this error code',
                f'AWS Request ID: {request_id}',
            ]
        )

    def _handle_credential_error(
        self,
        error: Exception,
        context: ErrorContext
    ) -> CredentialError:
        if isinstance(error, NoCredentialsError):
            return CredentialError(
                message='No AWS credentials found',
                context=context,
                cause=error,
                suggestions=[
                    'Configure AWS credentials using: aws configure',
                    'Set a profile in the provider settings',
                ]
            )

        return CredentialError(
            message='Incomplete AWS credentials',
            context=context,
            cause=error,
            suggestions=[
                'Ensure both access key ID and secret access key are provided',
            ]
        )

    def _handle_network_error(
        self,
        error: Exception,
        context: ErrorContext
    ) -> NetworkError:
        return NetworkError(
            message=f'Network error: {str(error)}',
            context=context,
            cause=error,
            suggestions=[
                'Check your internet connection',
                'Verify endpoint overrides in the provider settings',
            ]
        )

    def log_error(self, error: ProviderError):
        """Log an error with the level matching its severity.

        Args:
            error: The error to log
        """
        log_message = error.to_user_message()

        if error.severity in (ErrorSeverity.CRITICAL, ErrorSeverity.ERROR):
            self.logger.error(log_message)
        elif error.severity == ErrorSeverity.WARNING:
            self.logger.warning(log_message)
        else:
            self.logger.info(log_message)

        self.logger.debug(f"Error details: {error.to_dict()}")


# Global error handler instance
error_handler = ErrorHandler()
