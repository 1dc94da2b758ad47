# resources/attributes.py
"""Read-only projections of boto3 ec2.Instance fields and lifecycle states."""

INSTANCE_STATES = (
    "pending",
    "running",
    "shutting-down",
    "terminated",
    "stopping",
    "stopped",
    "unknown",
)

INSTANCE_ATTRIBUTES = (
    "public_ip_address",
    "private_ip_address",
    "key_name",
    "private_dns_name",
    "public_dns_name",
    "subnet_id",
    "architecture",
    "root_device_type",
    "root_device_name",
    "virtualization_type",
    "client_token",
    "launch_time",
    "instance_type",
    "image_id",
    "vpc_id",
)


class InstanceAttribute:
    """Expose one field of the resolved instance, or None when there is none.

    The owning class must provide an ``_instance`` property returning the boto3
    handle (or None).
    """

    def __init__(self, field):
        if field not in INSTANCE_ATTRIBUTES:
            raise ValueError(f"Unknown instance attribute: {field}")
        self.field = field

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        instance = obj._instance
        if instance is None:
            return None
        return getattr(instance, self.field)

    def __set__(self, obj, value):
        raise AttributeError(f"{self.name} is read-only")


def predicate_name(state_name):
    """shutting-down -> is_shutting_down"""
    return "is_" + state_name.replace("-", "_")


def state_predicate(state_name):
    """Build the ``is_<state>()`` query comparing the current state exactly."""
    if state_name not in INSTANCE_STATES:
        raise ValueError(f"Unknown instance state: {state_name}")

    def predicate(self):
        return self.state == state_name

    predicate.__name__ = predicate_name(state_name)
    predicate.__doc__ = f"True when AWS reports the instance as {state_name}."
    return predicate
