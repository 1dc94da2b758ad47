from resources.ec2_instance import AwsEc2, AwsEc2Instance, InstanceSelector
from resources.registry import create_resource, get_resource, list_resources
from resources.tags import Tags

__all__ = [
    "AwsEc2",
    "AwsEc2Instance",
    "InstanceSelector",
    "Tags",
    "create_resource",
    "get_resource",
    "list_resources",
]
