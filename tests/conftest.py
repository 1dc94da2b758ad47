from types import SimpleNamespace

import pytest
from botocore.exceptions import ClientError

from resources.attributes import INSTANCE_ATTRIBUTES


def not_found_error(instance_id):
    return ClientError(
        {
            "Error": {
                "Code": "InvalidInstanceID.NotFound",
                "Message": f"The instance ID '{instance_id}' does not exist",
            }
        },
        "DescribeInstances",
    )


class FakeInstance:
    """Stand-in for a boto3 ec2.Instance."""

    def __init__(self, instance_id, exists=True, state="running", tags=None,
                 security_groups=None, iam_instance_profile=None, load_error=None,
                 **attributes):
        self.id = instance_id
        self.meta = SimpleNamespace(data=None)
        self.state = {"Code": 16, "Name": state} if state else None
        self.tags = tags
        self.security_groups = security_groups or []
        self.iam_instance_profile = iam_instance_profile
        self.load_calls = 0
        self._exists = exists
        self._load_error = load_error
        for name in INSTANCE_ATTRIBUTES:
            setattr(self, name, attributes.get(name))

    def load(self):
        self.load_calls += 1
        if self._load_error is not None:
            raise self._load_error
        if not self._exists:
            raise not_found_error(self.id)
        self.meta.data = {"InstanceId": self.id}


class FakeInstanceCollection:
    def __init__(self, aws):
        self.aws = aws

    def filter(self, Filters=None):
        self.aws.filter_calls.append(Filters)
        values = Filters[0]["Values"]
        return [
            instance for instance in self.aws.instances.values()
            if any(t["Key"] == "Name" and t["Value"] in values for t in instance.tags or [])
        ]


class FakeEC2Resource:
    def __init__(self, aws):
        self.aws = aws
        self.instances = FakeInstanceCollection(aws)

    def Instance(self, instance_id):
        self.aws.instance_calls.append(instance_id)
        if instance_id in self.aws.instances:
            return self.aws.instances[instance_id]
        return FakeInstance(instance_id, exists=False)


class FakeIAMResource:
    def __init__(self, aws):
        self.aws = aws

    def InstanceProfile(self, name):
        self.aws.profile_calls.append(name)
        return SimpleNamespace(roles=self.aws.profiles.get(name, []))


class FakeAWS:
    """In-memory EC2/IAM pair exposing the attributes AWSConnection has."""

    def __init__(self):
        self.instances = {}
        self.profiles = {}
        self.filter_calls = []
        self.instance_calls = []
        self.profile_calls = []
        self.ec2_resource = FakeEC2Resource(self)
        self.iam_resource = FakeIAMResource(self)

    @property
    def conn(self):
        return self

    def add_instance(self, instance_id, **kwargs):
        instance = FakeInstance(instance_id, **kwargs)
        self.instances[instance_id] = instance
        return instance

    def add_profile(self, name, roles):
        self.profiles[name] = [SimpleNamespace(name=role) for role in roles]


@pytest.fixture
def fake_aws():
    return FakeAWS()


@pytest.fixture
def web_instance(fake_aws):
    """A running, tagged instance with an instance profile holding one role."""
    fake_aws.add_profile("app-role", ["AppRole"])
    return fake_aws.add_instance(
        "i-123456",
        state="running",
        tags=[{"Key": "Name", "Value": "web1"}, {"Key": "env", "Value": "prod"}],
        security_groups=[{"GroupId": "sg-1", "GroupName": "web"}],
        iam_instance_profile={
            "Arn": "arn:aws:iam::111:instance-profile/app-role",
            "Id": "AIPA1",
        },
        instance_type="t3.micro",
        image_id="ami-123",
        vpc_id="vpc-1",
        subnet_id="subnet-1",
        private_ip_address="10.0.0.5",
        public_ip_address="54.1.2.3",
    )
