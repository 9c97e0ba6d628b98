"""Durable store adapters."""

from repochain.adapters.store.filesystem import FilesystemStore
from repochain.adapters.store.s3 import S3Store


__all__ = ["FilesystemStore", "S3Store"]
