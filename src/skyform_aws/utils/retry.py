"""Retry and polling helpers for AWS operations."""

import time
import random
from typing import Any, Callable, TypeVar, Optional
from functools import wraps
from botocore.exceptions import ClientError
from skyform_aws.utils.errors import WaitTimeoutError
from skyform_aws.utils.logging import get_logger

logger = get_logger(__name__)

T = TypeVar('T')


class RetryStrategy:
    """Implements exponential backoff retry strategy for transient errors."""

    # AWS error codes that should trigger a retry
    RETRYABLE_ERROR_CODES = {
        'RequestTimeout',
        'ServiceUnavailable',
        'ThrottlingException',
        'TooManyRequestsException',
        'RequestLimitExceeded',
        'Throttling',
        'RequestThrottled',
        'InternalError',
        'InternalFailure',
        'InternalServerException',
        'ServiceException',
        'ConflictException',
    }

    RETRYABLE_EXCEPTIONS = (
        ConnectionError,
        TimeoutError,
    )

    def __init__(
        self,
        max_retries: int = 5,
        base_delay: float = 1.0,
        max_delay: float = 60.0,
        exponential_base: float = 2.0,
        jitter: bool = True,
        retry_any_client_error: bool = False
    ):
        """Initialize retry strategy.

        Args:
            max_retries: Maximum number of retry attempts
            base_delay: Base delay in seconds for first retry
            max_delay: Maximum delay in seconds between retries
            exponential_base: Base for exponential backoff calculation
            jitter: Whether to add random jitter to delay
            retry_any_client_error: Retry every ClientError, not only transient ones
        """
        self.max_retries = max_retries
        self.base_delay = base_delay
        self.max_delay = max_delay
        self.exponential_base = exponential_base
        self.jitter = jitter
        self.retry_any_client_error = retry_any_client_error

    def should_retry(self, error: Exception, attempt: int) -> bool:
        """Determine if an error should trigger a retry.

        Args:
            error: The exception that occurred
            attempt: Current attempt number (0-indexed)

        Returns:
            True if the error is retryable and max retries not exceeded
        """
        if attempt >= self.max_retries:
            return False

        if isinstance(error, self.RETRYABLE_EXCEPTIONS):
            return True

        if isinstance(error, ClientError):
            if self.retry_any_client_error:
                return True
            error_code = error.response.get('Error', {}).get('Code', '')
            return error_code in self.RETRYABLE_ERROR_CODES

        return False

    def get_delay(self, attempt: int) -> float:
        """Calculate delay before next retry using exponential backoff.

        Args:
            attempt: Current attempt number (0-indexed)

        Returns:
            Delay in seconds before next retry
        """
        delay = min(
            self.base_delay * (self.exponential_base ** attempt),
            self.max_delay
        )

        # Up to 10% jitter
        if self.jitter:
            delay += random.uniform(0, delay * 0.1)

        return delay

    def execute_with_retry(
        self,
        func: Callable[..., T],
        *args,
        **kwargs
    ) -> T:
        """Execute a function with retry logic.

        Args:
            func: Function to execute
            *args: Positional arguments for the function
            **kwargs: Keyword arguments for the function

        Returns:
            Result of the function call

        Raises:
            The last exception if all retries are exhausted
        """
        for attempt in range(self.max_retries + 1):
            try:
                result = func(*args, **kwargs)

                if attempt > 0:
                    logger.info(f"Operation succeeded after {attempt} retries")

                return result

            except Exception as e:
                if not self.should_retry(e, attempt):
                    logger.debug(f"Error is not retryable or max retries exceeded: {e}")
                    raise

                delay = self.get_delay(attempt)
                logger.warning(
                    f"Attempt {attempt + 1}/{self.max_retries + 1} failed: {self._get_error_info(e)}. "
                    f"Retrying in {delay:.2f}s..."
                )
                time.sleep(delay)

        raise RuntimeError('unreachable')

    def _get_error_info(self, error: Exception) -> str:
        if isinstance(error, ClientError):
            error_code = error.response.get('Error', {}).get('Code', 'Unknown')
            error_message = error.response.get('Error', {}).get('Message', str(error))
            return f"{error_code}: {error_message}"

        return f"{type(error).__name__}: {str(error)}"


def with_retry(
    max_retries: int = 5,
    base_delay: float = 1.0,
    max_delay: float = 60.0,
    exponential_base: float = 2.0,
    jitter: bool = True
):
    """Decorator to add retry logic to a function.

    Example:
        @with_retry(max_retries=3, base_delay=2.0)
        def describe_index(client, index_id):
            return client.describe_index(Id=index_id)
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            strategy = RetryStrategy(
                max_retries=max_retries,
                base_delay=base_delay,
                max_delay=max_delay,
                exponential_base=exponential_base,
                jitter=jitter
            )
            return strategy.execute_with_retry(func, *args, **kwargs)

        return wrapper

    return decorator


class Wait:
    """Bounded polling until a resource reaches a status.

    Example:
        Wait.at_most(600).check_every(120).prompt(ui).until(lambda: link_available())

    The predicate is checked immediately, then once every ``check_every``
    seconds until ``at_most`` seconds have passed. When prompting is enabled
    the UI is asked whether to keep waiting after each timeout.
    """

    def __init__(self, at_most: float = 60.0, check_every: float = 10.0):
        self._at_most = at_most
        self._check_every = check_every
        self._ui = None
        self._timeout_message: Optional[str] = None

    @classmethod
    def at_most(cls, seconds: float) -> 'Wait':
        return cls(at_most=seconds)

    def check_every(self, seconds: float) -> 'Wait':
        self._check_every = seconds
        return self

    def prompt(self, ui: Any) -> 'Wait':
        """Ask ``ui`` whether to keep waiting once the time is up."""
        self._ui = ui
        return self

    def or_raise(self, message: str) -> 'Wait':
        """Raise WaitTimeoutError with ``message`` instead of returning False."""
        self._timeout_message = message
        return self

    def resource_overrides(self, resource: Any, action: str) -> 'Wait':
        """Apply per-resource-type wait settings from the provider config.

        Args:
            resource: Resource being waited on
            action: One of create, update or delete
        """
        state = resource.state() if resource is not None else None
        settings = getattr(state, 'wait_settings', None)
        if settings is not None:
            self._at_most, self._check_every = settings.for_action(
                resource.type_name, action, self._at_most, self._check_every
            )
        return self

    def until(self, predicate: Callable[[], bool]) -> bool:
        """Poll ``predicate`` until it returns True or the time runs out.

        Returns:
            True if the predicate held before the timeout
        """
        while True:
            elapsed = 0.0
            while True:
                if predicate():
                    return True
                if elapsed >= self._at_most:
                    break
                logger.debug(f"Waiting {self._check_every}s ({elapsed}/{self._at_most}s elapsed)")
                time.sleep(self._check_every)
                elapsed += self._check_every

            if self._ui is None or not self._ui.confirm('Wait for completion?'):
                break

        if self._timeout_message:
            raise WaitTimeoutError(self._timeout_message)
        return False
