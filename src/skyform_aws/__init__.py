"""AWS provider resources for API Gateway v2, ELBv2, Cognito and Kendra.

Importing the package registers every resource and finder type, so that
configuration files can refer to them as ``aws::<type>``.
"""

__version__ = "0.1.0"

from skyform_aws import apigatewayv2, cognitoidp, elbv2, kendra
from skyform_aws.config import Config, ConfigValidationError, ProviderConfig
from skyform_aws.core import (
    ChangeType,
    ProviderUI,
    State,
    apply_change,
    finder_class,
    plan_change,
    plan_delete,
    resource_class,
    resource_types,
)
from skyform_aws.utils import AwsCredentials, ProviderError, setup_logging

__all__ = [
    "AwsCredentials",
    "ChangeType",
    "Config",
    "ConfigValidationError",
    "ProviderConfig",
    "ProviderError",
    "ProviderUI",
    "State",
    "apigatewayv2",
    "apply_change",
    "cognitoidp",
    "elbv2",
    "finder_class",
    "kendra",
    "plan_change",
    "plan_delete",
    "resource_class",
    "resource_types",
    "setup_logging",
]
