"""Shared fixtures."""
import boto3
import pytest
from cryptography import x509
from moto import mock_aws

from iam_certs.aws.utils import AWSClientManager
from iam_certs.settings import get_settings
from tests.consts import TEST_COMMON_NAME, TEST_REGION
from tests.fixtures.pem_fixtures import generate_certificate


@pytest.fixture(autouse=True)
def aws_environment(monkeypatch):
    """Point boto3 at fake credentials and start every test with fresh settings."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", TEST_REGION)
    for var in ("AWS_PROFILE", "AWS_ENDPOINT_URL", "LOG_LEVEL", "CERTIFICATE_PATH"):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    AWSClientManager.reset()
    yield
    AWSClientManager.reset()
    get_settings.cache_clear()


@pytest.fixture
def mocked_aws():
    with mock_aws():
        yield


@pytest.fixture
def iam_client(mocked_aws):
    return boto3.client("iam", region_name=TEST_REGION)


@pytest.fixture(scope="session")
def pem_material():
    """A CA certificate and a leaf certificate/key signed by it."""
    ca_pem, _, ca_key = generate_certificate("Example Test CA", ca=True)
    ca_name = x509.Name([x509.NameAttribute(x509.NameOID.COMMON_NAME, "Example Test CA")])
    cert_pem, key_pem, _ = generate_certificate(TEST_COMMON_NAME, issuer_key=ca_key, issuer_name=ca_name)
    return {"cert": cert_pem, "key": key_pem, "chain": ca_pem}


@pytest.fixture
def cert_files(tmp_path, pem_material):
    """Write a certificate, key and chain to disk and return their paths."""
    paths = {}
    for role, content in pem_material.items():
        path = tmp_path / f"{role}.pem"
        path.write_text(content)
        paths[role] = str(path)
    return paths
