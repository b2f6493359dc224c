####################################
# --- Request/response schemas --- #
####################################

from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
)

DEFAULT_CERTIFICATE_PATH = "/"


class CertificateUploadRequest(BaseModel):
    """Parameters for `UploadServerCertificate`."""
    name: str = Field(
        min_length=1,
        description="The server certificate name.",
        json_schema_extra={"example": "www-example-com-2025"},
    )
    body: str = Field(description="PEM-encoded certificate body.")
    private_key: str = Field(description="PEM-encoded private key.")
    chain: Optional[str] = Field(
        default=None,
        description="PEM-encoded intermediate certificates.",
    )
    path: str = Field(
        default=DEFAULT_CERTIFICATE_PATH,
        description="IAM path, e.g. /cloudfront/ for CloudFront distributions.",
    )

    def to_api_params(self) -> Dict[str, str]:
        """Keyword arguments for `iam.upload_server_certificate`."""
        params = {
            "ServerCertificateName": self.name,
            "CertificateBody": self.body,
            "PrivateKey": self.private_key,
        }
        if self.chain is not None:
            params["CertificateChain"] = self.chain
        if self.path != DEFAULT_CERTIFICATE_PATH:
            params["Path"] = self.path
        return params


class CertificateMetadata(BaseModel):
    """Metadata IAM returns for a server certificate."""
    name: str = Field(alias="ServerCertificateName")
    id: str = Field(alias="ServerCertificateId")
    arn: str = Field(alias="Arn")
    expiration: Optional[datetime] = Field(default=None, alias="Expiration")
    path: Optional[str] = Field(default=None, alias="Path")
    upload_date: Optional[datetime] = Field(default=None, alias="UploadDate")

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "ServerCertificateName": "www-example-com-2025",
                "ServerCertificateId": "ASCACKCEVSQ6C2EXAMPLE",
                "Arn": "arn:aws:iam::123456789012:server-certificate/www-example-com-2025",
                "Expiration": "2026-01-01T00:00:00Z",
            }
        }
    )

    @classmethod
    def from_api(cls, metadata: Dict[str, Any]) -> "CertificateMetadata":
        """Build from a `ServerCertificateMetadata` response dict."""
        return cls.model_validate(metadata)
