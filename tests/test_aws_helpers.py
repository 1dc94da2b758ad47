import pytest
from botocore.exceptions import ClientError

from utils.aws_helpers import (
    BOTO3_CONFIG,
    get_default_region,
    instance_exists,
    profile_name_from_arn,
    safe_get_first,
)
from utils.aws_connection import AWSConnection


class TestProfileNameFromArn:
    """Test instance profile name extraction."""

    def test_plain_arn(self):
        assert profile_name_from_arn("arn:aws:iam::111:instance-profile/app-role") == "app-role"

    def test_arn_with_path(self):
        assert profile_name_from_arn("arn:aws:iam::111:instance-profile/team/web/app") == "app"

    def test_no_slash(self):
        assert profile_name_from_arn("app-role") == "app-role"

    def test_empty(self):
        assert profile_name_from_arn(None) is None
        assert profile_name_from_arn("") is None


class TestSafeGetFirst:
    """Test safe first-item access."""

    def test_non_empty_list(self):
        assert safe_get_first([1, 2, 3]) == 1
        assert safe_get_first([{"key": "value"}]) == {"key": "value"}

    def test_empty_list(self):
        assert safe_get_first([]) is None
        assert safe_get_first([], default="default") == "default"

    def test_none(self):
        assert safe_get_first(None) is None

    def test_iterator_consumed_lazily(self):
        seen = []

        def items():
            for i in range(3):
                seen.append(i)
                yield i

        assert safe_get_first(items()) == 0
        assert seen == [0]


class TestInstanceExists:
    """Test existence check on instance handles."""

    def test_live_instance(self, fake_aws):
        assert instance_exists(fake_aws.add_instance("i-1")) is True

    def test_not_found(self, fake_aws):
        assert instance_exists(fake_aws.add_instance("i-1", exists=False)) is False

    def test_malformed_id(self, fake_aws):
        malformed = ClientError(
            {"Error": {"Code": "InvalidInstanceID.Malformed", "Message": "bad id"}},
            "DescribeInstances",
        )
        assert instance_exists(fake_aws.add_instance("bogus", load_error=malformed)) is False

    def test_empty_describe_result(self, mocker):
        instance = mocker.Mock()
        instance.meta.data = None

        assert instance_exists(instance) is False
        instance.load.assert_called_once_with()

    def test_other_errors_propagate(self, fake_aws):
        denied = ClientError(
            {"Error": {"Code": "UnauthorizedOperation", "Message": "denied"}},
            "DescribeInstances",
        )
        with pytest.raises(ClientError):
            instance_exists(fake_aws.add_instance("i-1", load_error=denied))


class TestRegionAndConnection:
    """Test region defaults and lazy boto3 setup."""

    def test_region_from_env(self, monkeypatch):
        monkeypatch.setenv("AWS_REGION", "eu-west-1")
        monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
        assert get_default_region() == "eu-west-1"

    def test_region_fallback(self, monkeypatch):
        monkeypatch.delenv("AWS_REGION", raising=False)
        monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
        assert get_default_region() == "us-east-1"

    def test_connection_builds_resources_once(self, mocker):
        resource = mocker.patch("boto3.resource")
        conn = AWSConnection(region="us-west-2")

        assert conn.ec2_resource is conn.ec2_resource
        assert conn.iam_resource is conn.iam_resource

        assert resource.call_count == 2
        resource.assert_any_call("ec2", region_name="us-west-2", config=BOTO3_CONFIG)
        resource.assert_any_call("iam", region_name="us-west-2", config=BOTO3_CONFIG)

    def test_connection_is_lazy(self, mocker):
        resource = mocker.patch("boto3.resource")
        AWSConnection()
        resource.assert_not_called()
