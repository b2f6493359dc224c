"""Server certificate operations against IAM."""
import logging
from pathlib import Path
from typing import List, Optional

from mypy_boto3_iam import IAMClient

from iam_certs.errors import CertificateFileError
from iam_certs.schemas import (
    DEFAULT_CERTIFICATE_PATH,
    CertificateMetadata,
    CertificateUploadRequest,
)
from iam_certs.utils.decorators import iam_api_call

logger = logging.getLogger(__name__)


def read_pem_file(path: str, role: str) -> str:
    """Read a PEM file as text.

    Raises:
        CertificateFileError: If the file cannot be read or decoded
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        reason = e.strerror if isinstance(e, OSError) and e.strerror else str(e)
        logger.debug(f"Could not read {role} from {path}: {reason}")
        raise CertificateFileError(role, path, reason) from e


class CertificateManager:
    """Upload, list and delete IAM server certificates."""

    def __init__(self, client: IAMClient):
        self.client = client

    def build_upload_request(self, name: str, cert_path: str, key_path: str,
                             chain_path: Optional[str] = None,
                             path: str = DEFAULT_CERTIFICATE_PATH) -> CertificateUploadRequest:
        """Read the local files into an upload request.

        Files are read in the order certificate, key, chain; the chain only
        when a path was given.
        """
        body = read_pem_file(cert_path, "certificate")
        private_key = read_pem_file(key_path, "private key")
        chain = read_pem_file(chain_path, "certificate chain") if chain_path else None
        return CertificateUploadRequest(
            name=name,
            body=body,
            private_key=private_key,
            chain=chain,
            path=path,
        )

    def upload_certificate(self, name: str, cert_path: str, key_path: str,
                           chain_path: Optional[str] = None,
                           path: str = DEFAULT_CERTIFICATE_PATH) -> CertificateMetadata:
        """Upload a certificate/key pair and return the stored metadata.

        Raises:
            CertificateFileError: If a local file is unreadable
            RemoteError: If IAM rejects the upload
        """
        request = self.build_upload_request(name, cert_path, key_path, chain_path, path)
        return self.upload(request)

    @iam_api_call("upload certificate")
    def upload(self, request: CertificateUploadRequest) -> CertificateMetadata:
        logger.info(f"Uploading server certificate {request.name} (chain: {request.chain is not None})")
        response = self.client.upload_server_certificate(**request.to_api_params())
        metadata = CertificateMetadata.from_api(response["ServerCertificateMetadata"])
        logger.info(f"Uploaded server certificate {metadata.name} ({metadata.id})")
        return metadata

    @iam_api_call("list certificates")
    def list_certificates(self, path_prefix: Optional[str] = None) -> List[CertificateMetadata]:
        """Return the account's server certificates; only the first page."""
        params = {}
        if path_prefix:
            params["PathPrefix"] = path_prefix
        response = self.client.list_server_certificates(**params)
        certificates = [
            CertificateMetadata.from_api(item)
            for item in response.get("ServerCertificateMetadataList", [])
        ]
        if response.get("IsTruncated"):
            logger.warning("Certificate listing is truncated; only the first page is shown")
        logger.info(f"Found {len(certificates)} server certificate(s)")
        return certificates

    @iam_api_call("delete certificate")
    def delete_certificate(self, name: str) -> None:
        """Delete a server certificate by name.

        Raises:
            RemoteError: If IAM rejects the delete, e.g. NoSuchEntity or DeleteConflict
        """
        self.client.delete_server_certificate(ServerCertificateName=name)
        logger.info(f"Deleted server certificate {name}")
