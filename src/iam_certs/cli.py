# cli.py
import logging
import sys
from typing import Optional

import click
from botocore.exceptions import BotoCoreError
from pydantic import ValidationError

from iam_certs.aws.utils import AWSClientManager, get_iam_client
from iam_certs.certificates import CertificateManager
from iam_certs.errors import CertificateFileError, RemoteError
from iam_certs.settings import get_settings

logger = logging.getLogger(__name__)


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr so stdout only carries command output."""
    level = logging.DEBUG if verbose else get_settings().log_level
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logging.getLogger(__name__.split('.')[0]).setLevel(level)


def fail(message: str, ctx: Optional[click.Context] = None) -> None:
    """Print an error (and usage, when a context is given) and exit 1."""
    click.echo(f"Error: {message}", err=True)
    if ctx is not None:
        click.echo("", err=True)
        click.echo(ctx.get_help(), err=True)
    sys.exit(1)


def print_list(manager: CertificateManager, path_prefix: Optional[str]) -> None:
    certificates = manager.list_certificates(path_prefix)
    if not certificates:
        print("No certificates found")
        return

    print("Server Certificates:")
    for cert in certificates:
        print(f"  - Name: {cert.name}")
        print(f"    ID: {cert.id}")
        print(f"    ARN: {cert.arn}")
        print(f"    Expiration: {cert.expiration}\n")


@click.command(context_settings={"help_option_names": ["-h", "-help", "--help"]})
@click.option("-name", "--name", "name", default="",
              help="Certificate name (required for upload/delete)")
@click.option("-cert", "--cert", "cert_path", default="",
              help="Path to certificate file (required for upload)")
@click.option("-key", "--key", "key_path", default="",
              help="Path to private key file (required for upload)")
@click.option("-chain", "--chain", "chain_path", default="",
              help="Path to certificate chain file (optional)")
@click.option("-list", "--list", "list_certs", is_flag=True, default=False,
              help="List existing certificates")
@click.option("-delete", "--delete", "delete_cert", is_flag=True, default=False,
              help="Delete a certificate")
@click.option("-region", "--region", "region", default=None,
              help="AWS region [default: us-east-1 or AWS_DEFAULT_REGION]")
@click.option("--path", "path", default=None,
              help="IAM path for the uploaded certificate, e.g. /cloudfront/")
@click.option("--path-prefix", "path_prefix", default=None,
              help="Only list certificates under this IAM path")
@click.option("--profile", "profile", default=None,
              help="Named AWS profile to use")
@click.option("--endpoint-url", "endpoint_url", default=None,
              help="Alternate IAM endpoint URL")
@click.option("-v", "--verbose", is_flag=True, default=False,
              help="Enable debug logging")
@click.pass_context
def cli(ctx, name, cert_path, key_path, chain_path, list_certs, delete_cert,
        region, path, path_prefix, profile, endpoint_url, verbose):
    """Upload, list and delete IAM server certificates."""
    try:
        configure_logging(verbose)
        client_manager = AWSClientManager()
        client_manager.apply_overrides(aws_profile=profile, aws_endpoint_url=endpoint_url)
        manager = CertificateManager(get_iam_client(region))
    except (BotoCoreError, ValidationError, ValueError) as e:
        click.echo(f"Failed to load AWS config: {e}", err=True)
        sys.exit(1)

    try:
        if list_certs:
            print_list(manager, path_prefix)
            return

        if delete_cert:
            if not name:
                fail("-name is required for delete", ctx)
            manager.delete_certificate(name)
            print(f"Certificate '{name}' deleted successfully!")
            return

        if not (name and cert_path and key_path):
            fail("-name, -cert, and -key are required for upload", ctx)

        metadata = manager.upload_certificate(
            name,
            cert_path,
            key_path,
            chain_path or None,
            path or client_manager.settings.certificate_path,
        )
        print("Certificate uploaded successfully!")
        print(f"Certificate Name: {metadata.name}")
        print(f"Certificate ID: {metadata.id}")
        print(f"ARN: {metadata.arn}")
    except (CertificateFileError, RemoteError) as e:
        fail(str(e))


def main():
    cli(prog_name="iam-certs")


if __name__ == "__main__":
    main()
