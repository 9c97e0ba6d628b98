"""S3 store adapter using boto3."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import boto3
from botocore.exceptions import ClientError

from repochain.core.exceptions import StoreAccessError, StoreCorruptError, StoreError
from repochain.core.models import Entity


if TYPE_CHECKING:
    from mypy_boto3_s3 import S3Client

    from repochain.core.models import Identity


class S3Store:
    """Store adapter for S3.

    Implements StorePort. Each entity is a JSON object at
    <prefix>/<identity>.json; persisting an existing identity overwrites it.
    As with FilesystemStore, 1 and "1" share an object and find_by_id() only
    returns it for the form it was persisted under.

    Example:
        >>> store = S3Store("s3://my-bucket/entities/products")
    """

    def __init__(self, uri: str, client: S3Client | None = None) -> None:
        """Initialize S3 store.

        Args:
            uri: S3 URI of the bucket or prefix (s3://bucket/ or s3://bucket/prefix).
            client: Optional boto3 S3 client. If not provided, creates a default client.
        """
        self.bucket, prefix = self._parse_s3_uri_prefix(uri)
        self.prefix = prefix.strip("/")
        self._client = client or boto3.client("s3")

    def _key(self, identity: Identity) -> str:
        name = f"{identity}.json"
        return f"{self.prefix}/{name}" if self.prefix else name

    def _uri(self, key: str) -> str:
        return f"s3://{self.bucket}/{key}"

    def find_by_id(self, identity: Identity) -> Entity | None:
        """Read the entity object, or None if the key does not exist.

        Raises:
            StoreAccessError: If access is denied.
            StoreCorruptError: If the object is not a valid entity.
            StoreError: For other S3 errors, including a missing bucket.
        """
        key = self._key(identity)
        try:
            response = self._client.get_object(Bucket=self.bucket, Key=key)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in ("404", "NoSuchKey"):
                return None
            raise self._translate_client_error(e, self._uri(key)) from e

        body = response["Body"].read()
        try:
            entity = Entity.from_dict(json.loads(body))
        except (json.JSONDecodeError, UnicodeDecodeError, ValueError, TypeError) as e:
            raise StoreCorruptError(
                f"Stored entity is corrupt: {self._uri(key)}",
                location=self._uri(key),
                cause=e,
            ) from e
        # The object belongs to the other form of this id (1 versus "1")
        if entity.id != identity:
            return None
        return entity

    def persist(self, entity: Entity) -> None:
        """Write the entity object, replacing any existing one.

        Raises:
            StoreAccessError: If access is denied.
            StoreError: For other S3 errors.
        """
        key = self._key(entity.id)
        try:
            self._client.put_object(
                Bucket=self.bucket,
                Key=key,
                Body=json.dumps(entity.to_dict()).encode(),
                ContentType="application/json",
            )
        except ClientError as e:
            raise self._translate_client_error(e, self._uri(key)) from e

    def _parse_s3_uri_prefix(self, uri: str) -> tuple[str, str]:
        """Parse an S3 URI prefix into bucket and key prefix.

        Args:
            uri: S3 URI in format s3://bucket/ or s3://bucket/prefix/.

        Returns:
            Tuple of (bucket, key_prefix).

        Raises:
            ValueError: If URI is not a valid S3 URI.
        """
        if not uri.startswith("s3://"):
            raise ValueError(f"Invalid S3 URI: {uri}")

        path = uri[5:]  # Remove s3://
        parts = path.split("/", 1)
        bucket = parts[0]
        if not bucket:
            raise ValueError(f"Invalid S3 URI (missing bucket): {uri}")
        key_prefix = parts[1] if len(parts) > 1 else ""

        return bucket, key_prefix

    def _translate_client_error(self, error: ClientError, location: str) -> StoreError:
        """Translate botocore ClientError to domain exception.

        Args:
            error: The botocore ClientError.
            location: The object URI for context.

        Returns:
            Appropriate StoreError subclass.
        """
        code = error.response.get("Error", {}).get("Code", "")

        if code in ("403", "AccessDenied"):
            return StoreAccessError(
                f"Access denied: {location}",
                location=location,
                cause=error,
            )

        return StoreError(
            f"S3 error ({code}): {error}",
            location=location,
            cause=error,
        )
