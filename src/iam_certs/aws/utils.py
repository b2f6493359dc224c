"""AWS client management."""
import logging
from typing import Any, Dict, Optional, Tuple

import boto3
from mypy_boto3_iam import IAMClient

from iam_certs.settings import get_settings

logger = logging.getLogger(__name__)


class AWSClientManager:
    """Singleton manager for AWS service clients."""
    _instance = None
    _clients: Dict[Tuple[str, str], Any] = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(AWSClientManager, cls).__new__(cls)
            cls._instance._initialize()
        return cls._instance

    def _initialize(self):
        """Initialize the client manager with settings."""
        self.settings = get_settings()

        logger.debug("Initializing AWSClientManager")
        logger.debug(f"  Region: {self.settings.aws_region}")
        logger.debug(f"  Profile: {self.settings.aws_profile}")
        logger.debug(f"  Endpoint: {self.settings.aws_endpoint_url}")

    def get_client(self, service_name: str, region: Optional[str] = None) -> Any:
        """Get or create an AWS service client for the given region."""
        region = region or self.settings.aws_region
        key = (service_name, region)
        if key in self._clients:
            return self._clients[key]

        client_kwargs = {
            'region_name': region
        }

        # Add credentials from settings; otherwise boto3 resolves its own chain
        if self.settings.aws_access_key_id:
            client_kwargs['aws_access_key_id'] = self.settings.aws_access_key_id
        if self.settings.aws_secret_access_key:
            client_kwargs['aws_secret_access_key'] = self.settings.aws_secret_access_key

        if self.settings.aws_endpoint_url:
            client_kwargs['endpoint_url'] = self.settings.aws_endpoint_url

        try:
            if self.settings.aws_profile:
                session = boto3.Session(profile_name=self.settings.aws_profile)
                client = session.client(service_name, **client_kwargs)
                logger.debug(f"Created {service_name} client using profile: {self.settings.aws_profile}")
            else:
                client = boto3.client(service_name, **client_kwargs)
                logger.debug(f"Created {service_name} client in {region}")
        except Exception as e:
            logger.debug(f"Error creating {service_name} client: {str(e)}")
            raise

        self._clients[key] = client
        return client

    def apply_overrides(self, **overrides):
        """Override settings for this process, e.g. from command-line flags.

        None values are ignored. Cached clients are dropped.
        """
        updates = {k: v for k, v in overrides.items() if v is not None}
        if updates:
            self.settings = self.settings.model_copy(update=updates)
            self.clear_clients()
            logger.debug(f"Applied setting overrides: {sorted(updates)}")

    def clear_clients(self):
        """Clear all cached clients."""
        self._clients.clear()
        logger.debug("Cleared all AWS clients")

    @classmethod
    def reset(cls):
        """Drop the singleton so the next use re-reads settings."""
        if cls._instance is not None:
            cls._instance.clear_clients()
        cls._instance = None


def get_iam_client(region: Optional[str] = None) -> IAMClient:
    """Get the IAM client."""
    return AWSClientManager().get_client('iam', region)
