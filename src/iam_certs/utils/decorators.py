"""Decorator utilities for IAM API calls."""
import time
import logging
import functools
from typing import Any, Callable, TypeVar, cast

from botocore.exceptions import BotoCoreError, ClientError

from iam_certs.errors import RemoteError

# Setup logging
logger = logging.getLogger(__name__)

F = TypeVar('F', bound=Callable[..., Any])


def iam_api_call(operation: str) -> Callable[[F], F]:
    """Decorator that times an IAM call and converts botocore failures.

    Args:
        operation: What the call attempts, used in the error message

    Returns:
        Decorator whose wrapped function raises RemoteError instead of
        ClientError or BotoCoreError
    """
    def decorator(func: F) -> F:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            start_time = time.time()
            try:
                result = func(*args, **kwargs)
            except ClientError as e:
                duration = time.time() - start_time
                error = e.response.get('Error', {})
                code = error.get('Code')
                logger.debug(f"{func.__name__} failed after {duration:.2f}s: {code} - {str(e)}")
                raise RemoteError(operation, error.get('Message') or str(e), code=code) from e
            except BotoCoreError as e:
                duration = time.time() - start_time
                logger.debug(f"{func.__name__} failed after {duration:.2f}s: {str(e)}")
                raise RemoteError(operation, str(e)) from e
            duration = time.time() - start_time
            logger.debug(f"{func.__name__} completed in {duration:.2f}s")
            return result
        return cast(F, wrapper)
    return decorator
