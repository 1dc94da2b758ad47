# utils/aws_helpers.py
import logging
import os

from botocore.config import Config
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)

# Boto3 config with retries and timeouts
BOTO3_CONFIG = Config(
    retries={"max_attempts": 10, "mode": "adaptive"},
    connect_timeout=5,
    read_timeout=60,
)

# Error codes EC2 returns for an instance ID that does not (or no longer) exist
MISSING_INSTANCE_ERROR_CODES = (
    "InvalidInstanceID.NotFound",
    "InvalidInstanceID.Malformed",
)


def get_default_region():
    """Region from the Lambda/CLI environment, or None to let boto3 decide."""
    return os.environ.get("AWS_REGION", os.environ.get("AWS_DEFAULT_REGION"))


def safe_get_first(items, default=None):
    """Safely get first item from any iterable (lists, boto3 collections)."""
    if items is None:
        return default
    for item in items:
        return item
    return default


def profile_name_from_arn(arn):
    """Extract the instance profile name from its ARN.

    arn:aws:iam::111:instance-profile/app-role -> app-role
    arn:aws:iam::111:instance-profile/path/app-role -> app-role
    """
    if not arn:
        return None
    return arn.rsplit("/", 1)[-1]


def error_code(exc):
    """Return the AWS error code carried by a ClientError."""
    return exc.response.get("Error", {}).get("Code", "")


def instance_exists(instance):
    """Check whether a boto3 ec2.Instance handle refers to a live record.

    Only the "no such instance" error codes are treated as absence; every other
    ClientError (auth, throttling) propagates to the caller.
    """
    try:
        instance.load()
    except ClientError as e:
        if error_code(e) in MISSING_INSTANCE_ERROR_CODES:
            logger.debug(f"Instance {instance.id} not found: {error_code(e)}")
            return False
        raise
    return instance.meta.data is not None
