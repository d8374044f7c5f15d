"""
EBS Resize - Session Manager

This module handles AWS credential resolution and EC2 client creation.
Credentials and region come from the process environment through the
standard boto3 provider chain.
"""

import boto3
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ProfileNotFound

from ebs_resize.core.config import VERSION
from ebs_resize.core.exceptions import AuthenticationError


class SessionManager:
    """
    Manages the boto3 session and EC2 client creation.

    This class:
    1. Builds a boto3 session from the environment
    2. Validates that credentials and a region were found
    3. Creates the EC2 client
    4. Provides clear error messages when resolution fails

    Usage:
        manager = SessionManager(region='eu-west-1')
        client, region = manager.get_client()
    """

    def __init__(self, region: str = None):
        """
        Args:
            region: Explicit region. If None, resolved from AWS_REGION,
                AWS_DEFAULT_REGION or the shared config file.
        """
        self.region = region
        self._session = None
        self._client = None

    def get_session(self):
        """
        Get a validated boto3 session.

        Credentials are searched in the standard order:
        1. AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY environment variables
        2. AWS_PROFILE and the shared credentials file
        3. Instance or container role

        Returns:
            boto3.session.Session

        Raises:
            AuthenticationError: If credentials or region are missing
        """
        if self._session:
            return self._session

        try:
            session = boto3.session.Session(region_name=self.region)
        except ProfileNotFound as e:
            raise AuthenticationError(
                f"AWS profile not found: {e}",
                fix="aws configure list-profiles"
            )

        if session.get_credentials() is None:
            raise AuthenticationError(
                "No AWS credentials found. You need to authenticate first.",
                fix="aws configure"
            )

        if not session.region_name:
            raise AuthenticationError(
                "No AWS region configured.",
                fix="export AWS_REGION=<region> or pass --region"
            )

        self._session = session
        return session

    def get_client(self):
        """
        Get an EC2 client.

        Returns:
            tuple: (ec2_client, region_name)

        Raises:
            AuthenticationError: If the client cannot be created
        """
        session = self.get_session()

        if not self._client:
            try:
                self._client = session.client(
                    'ec2',
                    config=Config(user_agent_extra=f'ebs-resize/{VERSION}')
                )
            except BotoCoreError as e:
                raise AuthenticationError(f"Failed to create EC2 client: {str(e)}")

        return self._client, session.region_name
