"""AWS session and client management."""

import boto3
from botocore.config import Config
from botocore.exceptions import ClientError, NoCredentialsError, PartialCredentialsError
from typing import Optional, Dict, Any
from dataclasses import dataclass
from skyform_aws.utils.logging import get_logger
from skyform_aws.utils.retry import with_retry

logger = get_logger(__name__)


@dataclass
class CallerIdentity:
    """Identity behind the configured credentials."""
    account_id: str
    user_arn: str
    user_id: str
    region: str
    profile: Optional[str] = None


class AwsCredentials:
    """Owns the boto3 session and hands out cached service clients.

    Every resource bound to a state obtains its clients here, so that
    retry settings and endpoint overrides apply uniformly.
    """

    def __init__(
        self,
        profile: Optional[str] = None,
        region: Optional[str] = None,
        endpoint_overrides: Optional[Dict[str, str]] = None,
        max_attempts: int = 20,
        retry_mode: str = 'standard',
        max_pool_connections: int = 50,
        session: Optional[boto3.Session] = None
    ):
        """Initialize credentials.

        Args:
            profile: AWS profile name to use
            region: AWS region to use
            endpoint_overrides: Service name to endpoint URL
            max_attempts: Attempts botocore makes for throttled or transient failures
            retry_mode: botocore retry mode (legacy, standard, adaptive)
            max_pool_connections: Maximum number of connections in the connection pool
            session: Pre-built session, used instead of creating one
        """
        self.profile = profile
        self._region = region
        self.endpoint_overrides = endpoint_overrides or {}
        self._session = session
        self._clients: Dict[str, Any] = {}
        self._identity: Optional[CallerIdentity] = None

        self._boto_config = Config(
            max_pool_connections=max_pool_connections,
            retries={
                'mode': retry_mode,
                'max_attempts': max_attempts
            },
            connect_timeout=10,
            read_timeout=60
        )

    @classmethod
    def from_config(cls, config) -> 'AwsCredentials':
        """Build credentials from a ProviderConfig."""
        return cls(
            profile=config.profile,
            region=config.region,
            endpoint_overrides=config.endpoint_overrides,
            max_attempts=config.max_attempts,
            retry_mode=config.retry_mode,
        )

    @property
    def session(self) -> boto3.Session:
        """Get or create the boto3 session."""
        if self._session is None:
            kwargs = {}
            if self.profile:
                kwargs['profile_name'] = self.profile
            if self._region:
                kwargs['region_name'] = self._region

            self._session = boto3.Session(**kwargs)
            logger.info(f"Created AWS session - Region: {self._session.region_name}, "
                        f"Profile: {self.profile or 'default'}")

        return self._session

    @property
    def region(self) -> str:
        return self._region or self.session.region_name

    def client(self, service_name: str, region: Optional[str] = None):
        """Get a cached boto3 client for a service.

        Args:
            service_name: AWS service name (e.g., 'apigatewayv2', 'elbv2')
            region: Region to use instead of the default one

        Returns:
            Boto3 client for the service
        """
        region = region or self.region
        cache_key = f"{service_name}:{region}"

        if cache_key in self._clients:
            return self._clients[cache_key]

        kwargs = {'config': self._boto_config, 'region_name': region}
        endpoint_url = self.endpoint_overrides.get(service_name)
        if endpoint_url:
            kwargs['endpoint_url'] = endpoint_url

        client = self.session.client(service_name, **kwargs)
        self._clients[cache_key] = client

        logger.debug(f"Created {service_name} client (cached: {cache_key})")

        return client

    @with_retry(max_retries=3, base_delay=1.0)
    def validate_credentials(self) -> CallerIdentity:
        """Resolve the identity behind the credentials.

        Returns:
            CallerIdentity with account and user information

        Raises:
            NoCredentialsError: If no credentials are found
            PartialCredentialsError: If credentials are incomplete
            ClientError: If credentials are invalid
        """
        if self._identity is not None:
            return self._identity

        try:
            identity = self.client('sts').get_caller_identity()
        except (NoCredentialsError, PartialCredentialsError) as e:
            logger.error(f"AWS credentials are missing or incomplete: {e}")
            raise
        except ClientError as e:
            error_code = e.response.get('Error', {}).get('Code', 'Unknown')
            if error_code in ('InvalidClientTokenId', 'ExpiredToken'):
                logger.error("AWS credentials are invalid or expired")
            raise

        self._identity = CallerIdentity(
            account_id=identity['Account'],
            user_arn=identity['Arn'],
            user_id=identity['UserId'],
            region=self.region,
            profile=self.profile
        )

        logger.info(f"AWS credentials validated - Account: {self._identity.account_id}, "
                    f"Region: {self._identity.region}")

        return self._identity

    def get_account_id(self) -> str:
        return self.validate_credentials().account_id

    def clear_cache(self):
        """Drop cached clients and the resolved identity."""
        self._clients.clear()
        self._identity = None
        logger.debug("Cleared AWS client cache")
