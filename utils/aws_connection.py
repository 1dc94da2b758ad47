# utils/aws_connection.py
import logging

import boto3

from utils.aws_helpers import BOTO3_CONFIG, get_default_region

logger = logging.getLogger(__name__)


class AWSConnection:
    """Lazily created boto3 clients and resources shared by one inspection."""

    def __init__(self, region=None):
        self.region = region or get_default_region()
        self._ec2_resource = None
        self._iam_resource = None

    @property
    def ec2_resource(self):
        if self._ec2_resource is None:
            logger.debug(f"Creating EC2 resource for region {self.region}")
            self._ec2_resource = boto3.resource("ec2", region_name=self.region, config=BOTO3_CONFIG)
        return self._ec2_resource

    @property
    def iam_resource(self):
        # IAM is global, region only selects the endpoint
        if self._iam_resource is None:
            logger.debug("Creating IAM resource")
            self._iam_resource = boto3.resource("iam", region_name=self.region, config=BOTO3_CONFIG)
        return self._iam_resource
