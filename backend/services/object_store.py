"""Storage for uploaded candidate documents.

Two backends: a local directory and a Supabase Storage bucket. Both only
expose `.pdf` objects and list them in a stable order.
"""

import asyncio
import logging
import random
import time
from abc import ABC, abstractmethod
from pathlib import Path
from urllib.parse import quote

import httpx

from config import Settings
from models.responses import StoredProfile
from models.schemas import Document

logger = logging.getLogger(__name__)

PDF_SUFFIX = ".pdf"


class ObjectStoreError(RuntimeError):
    """The store could not be listed or written."""


def generate_profile_name() -> str:
    """Unique stored name for an uploaded profile."""
    return f"profile-{int(time.time() * 1000)}-{random.randint(0, 10**9)}{PDF_SUFFIX}"


def _is_pdf(name: str) -> bool:
    return name.lower().endswith(PDF_SUFFIX)


class ObjectStore(ABC):
    """Lists, stores and removes candidate documents by name."""

    name: str = ""

    @abstractmethod
    async def list_documents(self) -> list[Document]:
        """All documents with their bytes, in listing order. May be empty."""

    @abstractmethod
    async def list_profiles(self) -> list[StoredProfile]:
        """Names and sizes only."""

    @abstractmethod
    async def put(self, name: str, data: bytes) -> str:
        """Store bytes under `name` and return the stored name."""

    @abstractmethod
    async def delete(self, name: str) -> bool:
        """Remove a document. Returns False if it did not exist."""


class LocalDirectoryStore(ObjectStore):
    """Documents kept as files in one directory, listed by name."""

    name = "local"

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _resolve(self, name: str) -> Path | None:
        # Only bare file names; anything with a path component is rejected
        if not name or Path(name).name != name or name in (".", ".."):
            return None
        return self.directory / name

    def _pdf_paths(self) -> list[Path]:
        if not self.directory.is_dir():
            return []
        return sorted(p for p in self.directory.iterdir() if p.is_file() and _is_pdf(p.name))

    async def list_documents(self) -> list[Document]:
        documents = []
        for path in self._pdf_paths():
            try:
                raw_bytes = await asyncio.to_thread(path.read_bytes)
                documents.append(Document(name=path.name, raw_bytes=raw_bytes))
            except OSError as e:
                logger.warning("Skipping unreadable profile %s: %s", path.name, e)
        logger.info("Found %d profile(s) in %s", len(documents), self.directory)
        return documents

    async def list_profiles(self) -> list[StoredProfile]:
        return [StoredProfile(filename=p.name, size=p.stat().st_size) for p in self._pdf_paths()]

    async def put(self, name: str, data: bytes) -> str:
        path = self._resolve(name)
        if path is None:
            raise ObjectStoreError(f"Invalid profile name: {name!r}")
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise ObjectStoreError(f"Could not store {name}: {e}") from e
        logger.info("Stored profile %s (%d bytes)", name, len(data))
        return name

    async def delete(self, name: str) -> bool:
        path = self._resolve(name)
        if path is None or not path.is_file():
            return False
        try:
            path.unlink()
        except OSError as e:
            raise ObjectStoreError(f"Could not delete {name}: {e}") from e
        logger.info("Deleted profile %s", name)
        return True


class SupabaseStorageStore(ObjectStore):
    """Documents in a Supabase Storage bucket, newest first."""

    name = "supabase"

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        url: str,
        service_key: str,
        bucket: str = "candidate_profiles",
        list_limit: int = 10,
    ):
        self.http_client = http_client
        self.base_url = url.rstrip("/")
        self.service_key = service_key
        self.bucket = bucket
        self.list_limit = list_limit

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.service_key}",
            "apikey": self.service_key,
        }

    def _object_url(self, name: str) -> str:
        return f"{self.base_url}/storage/v1/object/{self.bucket}/{quote(name)}"

    async def _list_objects(self) -> list[dict]:
        try:
            response = await self.http_client.post(
                f"{self.base_url}/storage/v1/object/list/{self.bucket}",
                headers=self.headers,
                json={
                    "prefix": "",
                    "limit": self.list_limit,
                    "offset": 0,
                    "sortBy": {"column": "created_at", "order": "desc"},
                },
            )
        except httpx.HTTPError as e:
            raise ObjectStoreError(f"Listing bucket {self.bucket} failed: {e}") from e

        if not response.is_success:
            raise ObjectStoreError(
                f"Listing bucket {self.bucket} failed: HTTP {response.status_code}"
            )
        try:
            items = response.json()
        except ValueError as e:
            raise ObjectStoreError(f"Listing bucket {self.bucket} returned a non-JSON body") from e
        if not isinstance(items, list) or not all(isinstance(item, dict) for item in items):
            raise ObjectStoreError(f"Listing bucket {self.bucket} returned an unexpected body")
        return [item for item in items if _is_pdf(str(item.get("name", "")))]

    async def list_documents(self) -> list[Document]:
        objects = await self._list_objects()
        logger.info("Found %d PDF file(s) in bucket %s", len(objects), self.bucket)

        documents = []
        for item in objects:
            name = item["name"]
            try:
                response = await self.http_client.get(self._object_url(name), headers=self.headers)
                response.raise_for_status()
            except httpx.HTTPError as e:
                logger.warning("Skipping %s, download failed: %s", name, e)
                continue
            logger.debug("Downloaded %s, %d bytes", name, len(response.content))
            documents.append(Document(name=name, raw_bytes=response.content))
        return documents

    async def list_profiles(self) -> list[StoredProfile]:
        return [
            StoredProfile(filename=item["name"], size=(item.get("metadata") or {}).get("size", 0))
            for item in await self._list_objects()
        ]

    async def put(self, name: str, data: bytes) -> str:
        try:
            response = await self.http_client.post(
                self._object_url(name),
                headers={**self.headers, "Content-Type": "application/pdf"},
                content=data,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ObjectStoreError(f"Upload of {name} failed: {e}") from e
        logger.info("Uploaded %s to bucket %s", name, self.bucket)
        return name

    async def delete(self, name: str) -> bool:
        try:
            response = await self.http_client.request(
                "DELETE",
                f"{self.base_url}/storage/v1/object/{self.bucket}",
                headers=self.headers,
                json={"prefixes": [name]},
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise ObjectStoreError(f"Delete of {name} failed: {e}") from e
        return bool(response.json())


def build_object_store(settings: Settings, http_client: httpx.AsyncClient | None = None) -> ObjectStore:
    if settings.storage_backend == LocalDirectoryStore.name:
        return LocalDirectoryStore(settings.profiles_dir)
    if settings.storage_backend == SupabaseStorageStore.name:
        if http_client is None or not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError("Supabase storage needs SUPABASE_URL and SUPABASE_SERVICE_KEY")
        return SupabaseStorageStore(
            http_client,
            url=settings.supabase_url,
            service_key=settings.supabase_service_key,
            bucket=settings.supabase_bucket,
            list_limit=settings.storage_list_limit,
        )
    raise ValueError(f"Unknown storage backend: {settings.storage_backend}")
