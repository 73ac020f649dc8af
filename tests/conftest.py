from types import SimpleNamespace

import pytest
import requests


class FakeMetadata:
    """Stands in for ec2_metadata.ec2_metadata."""

    def __init__(self, instance_id="i-self", region="us-east-1", mac="0a:1b:2c:3d:4e:5f",
                 interface_id="eni-primary", fail=False):
        self._doc = {"instanceId": instance_id, "region": region}
        self._mac = mac
        self._interfaces = {mac: SimpleNamespace(interface_id=interface_id)}
        self._fail = fail

    def _check(self):
        if self._fail:
            raise requests.exceptions.ConnectionError("metadata endpoint unreachable")

    @property
    def instance_identity_document(self):
        self._check()
        return self._doc

    @property
    def mac(self):
        self._check()
        return self._mac

    @property
    def network_interfaces(self):
        self._check()
        return self._interfaces


@pytest.fixture
def metadata():
    return FakeMetadata()


@pytest.fixture
def aws_credentials(monkeypatch):
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
