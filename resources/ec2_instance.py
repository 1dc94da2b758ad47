# resources/ec2_instance.py
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional

from resources.attributes import InstanceAttribute, state_predicate
from resources.registry import register_resource
from resources.tags import Tags
from utils.aws_connection import AWSConnection
from utils.aws_helpers import instance_exists, profile_name_from_arn, safe_get_first

logger = logging.getLogger(__name__)

NAME_TAG_FILTER = "tag:Name"


@dataclass(frozen=True)
class InstanceSelector:
    """How the caller identified the instance: a raw ID or a Name tag."""

    instance_id: Any = None
    name: Optional[str] = None

    @classmethod
    def from_opts(cls, opts):
        """A mapping with a "name" key is a Name tag lookup, anything else an ID."""
        if isinstance(opts, cls):
            return opts
        if isinstance(opts, Mapping) and "name" in opts:
            return cls(name=opts["name"])
        return cls(instance_id=opts)

    @property
    def is_name_lookup(self):
        return self.name is not None

    @property
    def display_name(self):
        return self.name if self.is_name_lookup else self.instance_id


@register_resource(
    "aws_ec2_instance",
    desc="Verifies settings for an EC2 instance",
    example="""
    instance = AwsEc2Instance("i-123456")
    assert instance.is_running()
    assert instance.has_roles()

    instance = AwsEc2Instance({"name": "my-instance"})
    assert instance.is_running()
    assert instance.has_tag({"env": "prod"})
    """,
)
class AwsEc2Instance:
    """One EC2 instance, resolved lazily and inspected as a point-in-time snapshot.

    Every query reads through a single cached boto3 ``ec2.Instance`` handle. An
    instance that cannot be found yields None/False/empty results; AWS errors
    other than "instance not found" propagate to the caller.
    """

    public_ip_address = InstanceAttribute("public_ip_address")
    private_ip_address = InstanceAttribute("private_ip_address")
    key_name = InstanceAttribute("key_name")
    private_dns_name = InstanceAttribute("private_dns_name")
    public_dns_name = InstanceAttribute("public_dns_name")
    subnet_id = InstanceAttribute("subnet_id")
    architecture = InstanceAttribute("architecture")
    root_device_type = InstanceAttribute("root_device_type")
    root_device_name = InstanceAttribute("root_device_name")
    virtualization_type = InstanceAttribute("virtualization_type")
    client_token = InstanceAttribute("client_token")
    launch_time = InstanceAttribute("launch_time")
    instance_type = InstanceAttribute("instance_type")
    image_id = InstanceAttribute("image_id")
    vpc_id = InstanceAttribute("vpc_id")

    is_pending = state_predicate("pending")
    is_running = state_predicate("running")
    is_shutting_down = state_predicate("shutting-down")
    is_terminated = state_predicate("terminated")
    is_stopping = state_predicate("stopping")
    is_stopped = state_predicate("stopped")
    # "unknown" is a state AWS reports, not a stand-in for a missing instance
    is_unknown = state_predicate("unknown")

    def __init__(self, opts, conn=None):
        self.selector = InstanceSelector.from_opts(opts)
        self._conn = conn or AWSConnection()
        self._id_resolved = False
        self._instance_id = None
        self._instance_fetched = False
        self._remote_instance = None
        self._tags = None
        self._security_groups = None

    @property
    def id(self):
        if not self._id_resolved:
            self._instance_id = self._resolve_id()
            self._id_resolved = True
        return self._instance_id

    instance_id = id

    def _resolve_id(self):
        if not self.selector.is_name_lookup:
            return self.selector.instance_id

        name = self.selector.name
        logger.debug(f"Looking up EC2 instance with Name tag {name}")
        first = safe_get_first(
            self._conn.ec2_resource.instances.filter(
                Filters=[{"Name": NAME_TAG_FILTER, "Values": [name]}]
            )
        )
        if first is None:
            logger.warning(f"No EC2 instance found with Name tag {name}")
            return None

        logger.info(f"Resolved Name tag {name} to {first.id}")
        return first.id

    @property
    def _instance(self):
        if not self._instance_fetched:
            self._remote_instance = self._fetch_instance()
            self._instance_fetched = True
        return self._remote_instance

    def _fetch_instance(self):
        instance_id = self.id
        if not instance_id:
            return None

        instance = self._conn.ec2_resource.Instance(instance_id)
        if not instance_exists(instance):
            logger.warning(f"EC2 instance {instance_id} does not exist")
            return None
        return instance

    def exists(self):
        return self._instance is not None

    @property
    def state(self):
        instance = self._instance
        if instance is None or not instance.state:
            return None
        return instance.state.get("Name")

    @property
    def security_groups(self):
        if self._security_groups is None:
            instance = self._instance
            groups = instance.security_groups if instance is not None else None
            self._security_groups = [
                {"id": sg["GroupId"], "name": sg["GroupName"]} for sg in groups or []
            ]
        return self._security_groups

    @property
    def tags(self):
        if self._tags is None:
            instance = self._instance
            self._tags = Tags.from_aws(instance.tags if instance is not None else None)
        return self._tags

    def has_tag(self, pair):
        return self.tags.has_tag(pair)

    def has_roles(self):
        """True if the attached instance profile carries at least one IAM role."""
        instance = self._instance
        if instance is None:
            return False

        profile = instance.iam_instance_profile
        if not profile:
            return False

        profile_name = profile_name_from_arn(profile.get("Arn"))
        if not profile_name:
            return False

        roles = self._conn.iam_resource.InstanceProfile(profile_name).roles
        logger.debug(f"Instance profile {profile_name} has {len(roles or [])} roles")
        return bool(roles)

    def __str__(self):
        return f"EC2 Instance {self.selector.display_name}"

    def __repr__(self):
        return f"AwsEc2Instance({self.selector!r})"


@register_resource("aws_ec2", desc="Deprecated alias of aws_ec2_instance")
class AwsEc2:
    """Deprecated name for AwsEc2Instance; forwards every query to it."""

    def __init__(self, opts, conn=None):
        logger.warning(
            "[DEPRECATION] `aws_ec2(parameter)` is deprecated. "
            "Please use `aws_ec2_instance(parameter)` instead."
        )
        self._resource = AwsEc2Instance(opts, conn)

    def __getattr__(self, name):
        if name == "_resource":
            raise AttributeError(name)
        return getattr(self._resource, name)

    def __str__(self):
        return str(self._resource)

    def __repr__(self):
        return f"AwsEc2({self._resource.selector!r})"
