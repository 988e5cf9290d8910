from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional
from urllib.parse import quote

from minio import Minio
from minio.error import MinioException
from urllib3.exceptions import HTTPError as TransportError

from .config import StorageConfig
from .errors import NetworkError, StorageError
from .models import AudioAsset

logger = logging.getLogger(__name__)


class MinioUploader:
    """Pushes local files to a MinIO (S3-compatible) bucket."""

    def __init__(
        self,
        *,
        endpoint: str,
        access_key: str,
        secret_key: str,
        port: int = 9000,
        secure: bool = True,
        client: Any | None = None,
    ) -> None:
        self.endpoint = endpoint
        self.port = port
        self.secure = secure
        self._client = client if client is not None else Minio(
            f"{endpoint}:{port}",
            access_key=access_key,
            secret_key=secret_key,
            secure=secure,
        )

    @classmethod
    def from_config(cls, config: StorageConfig, *, client: Any | None = None) -> "MinioUploader":
        return cls(
            endpoint=config.endpoint,
            access_key=config.access_key,
            secret_key=config.secret_key,
            port=config.port,
            secure=config.secure,
            client=client,
        )

    def object_url(self, bucket: str, object_key: str) -> str:
        scheme = "https" if self.secure else "http"
        return f"{scheme}://{self.endpoint}:{self.port}/{bucket}/{quote(object_key)}"

    def upload(
        self,
        local_path: Path | str,
        bucket: str,
        object_key: Optional[str] = None,
    ) -> AudioAsset:
        path = Path(local_path)
        if not path.is_file():
            raise FileNotFoundError(f"Audio file not found: {path}")

        key = object_key or path.name

        try:
            if not self._client.bucket_exists(bucket):
                raise StorageError(f"Bucket does not exist: {bucket}")
            logger.info("Uploading %s to %s/%s", path, bucket, key)
            self._client.fput_object(bucket, key, str(path))
        except MinioException as exc:
            raise StorageError(f"Upload of {path.name} to {bucket} failed") from exc
        except TransportError as exc:
            raise NetworkError(f"Object storage at {self.endpoint}:{self.port} is unreachable") from exc

        url = self.object_url(bucket, key)
        logger.debug("Uploaded %s -> %s", path, url)
        return AudioAsset(local_path=path, remote_url=url, bucket=bucket, object_key=key)


__all__ = ["MinioUploader"]
