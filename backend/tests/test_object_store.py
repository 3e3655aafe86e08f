import asyncio
import json

import httpx
import pytest

from config import Settings
from services import object_store
from services.object_store import (
    LocalDirectoryStore,
    ObjectStoreError,
    SupabaseStorageStore,
    build_object_store,
    generate_profile_name,
)

BASE = "https://project.supabase.test"


def test_generated_names_are_unique_pdfs():
    names = {generate_profile_name() for _ in range(50)}
    assert len(names) == 50
    assert all(n.startswith("profile-") and n.endswith(".pdf") for n in names)


class TestLocalDirectoryStore:
    @pytest.mark.asyncio
    async def test_lists_only_pdfs_sorted_by_name(self, tmp_path):
        (tmp_path / "zeta.pdf").write_bytes(b"z")
        (tmp_path / "alpha.PDF").write_bytes(b"a")
        (tmp_path / "readme.md").write_text("skip")
        (tmp_path / "folder.pdf").mkdir()

        documents = await LocalDirectoryStore(tmp_path).list_documents()

        assert [d.name for d in documents] == ["alpha.PDF", "zeta.pdf"]
        assert documents[1].raw_bytes == b"z"

    @pytest.mark.asyncio
    async def test_reads_files_in_worker_thread(self, tmp_path, monkeypatch):
        (tmp_path / "a.pdf").write_bytes(b"%PDF a")
        offloaded = []
        to_thread = asyncio.to_thread

        async def recording_to_thread(func, *args, **kwargs):
            offloaded.append(func)
            return await to_thread(func, *args, **kwargs)

        monkeypatch.setattr(object_store.asyncio, "to_thread", recording_to_thread)

        documents = await LocalDirectoryStore(tmp_path).list_documents()

        assert [d.raw_bytes for d in documents] == [b"%PDF a"]
        assert len(offloaded) == 1

    @pytest.mark.asyncio
    async def test_missing_directory_is_empty(self, tmp_path):
        store = LocalDirectoryStore(tmp_path / "nope")
        assert await store.list_documents() == []
        assert await store.list_profiles() == []

    @pytest.mark.asyncio
    async def test_put_list_delete(self, tmp_path):
        store = LocalDirectoryStore(tmp_path / "profiles")

        assert await store.put("cv.pdf", b"%PDF-1.4 data") == "cv.pdf"
        profiles = await store.list_profiles()
        assert [(p.filename, p.size) for p in profiles] == [("cv.pdf", 13)]

        assert await store.delete("cv.pdf") is True
        assert await store.delete("cv.pdf") is False
        assert await store.list_profiles() == []

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["../escape.pdf", "sub/dir.pdf", "", ".."])
    async def test_rejects_path_names(self, tmp_path, name):
        store = LocalDirectoryStore(tmp_path)
        with pytest.raises(ObjectStoreError):
            await store.put(name, b"x")
        assert await store.delete(name) is False


class TestSupabaseStorageStore:
    def _store(self, handler) -> SupabaseStorageStore:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return SupabaseStorageStore(client, url=BASE + "/", service_key="service-key", list_limit=10)

    @pytest.mark.asyncio
    async def test_lists_and_downloads_pdfs(self):
        requests = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            if request.url.path == "/storage/v1/object/list/candidate_profiles":
                return httpx.Response(200, json=[
                    {"name": "new.pdf", "metadata": {"size": 3}},
                    {"name": "photo.png", "metadata": {"size": 9}},
                    {"name": "old.pdf", "metadata": {"size": 3}},
                ])
            return httpx.Response(200, content=request.url.path.rsplit("/", 1)[-1].encode())

        documents = await self._store(handler).list_documents()

        assert [(d.name, d.raw_bytes) for d in documents] == [
            ("new.pdf", b"new.pdf"), ("old.pdf", b"old.pdf"),
        ]
        listing = json.loads(requests[0].content)
        assert listing["limit"] == 10
        assert listing["sortBy"] == {"column": "created_at", "order": "desc"}
        assert requests[0].headers["Authorization"] == "Bearer service-key"
        assert requests[0].headers["apikey"] == "service-key"

    @pytest.mark.asyncio
    async def test_failed_download_is_skipped(self):
        def handler(request: httpx.Request) -> httpx.Response:
            if "/list/" in request.url.path:
                return httpx.Response(200, json=[{"name": "a.pdf"}, {"name": "b.pdf"}])
            if request.url.path.endswith("a.pdf"):
                return httpx.Response(404)
            return httpx.Response(200, content=b"b")

        documents = await self._store(handler).list_documents()
        assert [d.name for d in documents] == ["b.pdf"]

    @pytest.mark.asyncio
    async def test_listing_failure_raises(self):
        store = self._store(lambda request: httpx.Response(401, json={"error": "unauthorized"}))
        with pytest.raises(ObjectStoreError):
            await store.list_documents()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "response",
        [
            httpx.Response(200, content=b"<html>gateway</html>"),
            httpx.Response(200, json={"error": "not a list"}),
            httpx.Response(200, json=["a.pdf", "b.pdf"]),
        ],
    )
    async def test_malformed_listing_raises(self, response):
        store = self._store(lambda request: response)
        with pytest.raises(ObjectStoreError):
            await store.list_documents()

    @pytest.mark.asyncio
    async def test_list_profiles_reports_sizes(self):
        store = self._store(lambda request: httpx.Response(200, json=[
            {"name": "a.pdf", "metadata": {"size": 1024}},
            {"name": "b.pdf", "metadata": None},
        ]))
        profiles = await store.list_profiles()
        assert [(p.filename, p.size) for p in profiles] == [("a.pdf", 1024), ("b.pdf", 0)]

    @pytest.mark.asyncio
    async def test_put_uploads_pdf_bytes(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen.update(method=request.method, path=request.url.path,
                        content_type=request.headers["Content-Type"], body=request.content)
            return httpx.Response(200, json={"Key": "candidate_profiles/cv.pdf"})

        assert await self._store(handler).put("cv.pdf", b"%PDF") == "cv.pdf"
        assert seen == {
            "method": "POST",
            "path": "/storage/v1/object/candidate_profiles/cv.pdf",
            "content_type": "application/pdf",
            "body": b"%PDF",
        }

    @pytest.mark.asyncio
    async def test_put_failure_raises(self):
        store = self._store(lambda request: httpx.Response(500))
        with pytest.raises(ObjectStoreError):
            await store.put("cv.pdf", b"%PDF")

    @pytest.mark.asyncio
    async def test_delete(self):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.method == "DELETE"
            prefixes = json.loads(request.content)["prefixes"]
            return httpx.Response(200, json=[{"name": p} for p in prefixes if p == "cv.pdf"])

        store = self._store(handler)
        assert await store.delete("cv.pdf") is True
        assert await store.delete("other.pdf") is False


def test_build_local_store():
    store = build_object_store(Settings(storage_backend="local", profiles_dir="somewhere"))
    assert isinstance(store, LocalDirectoryStore)
    assert str(store.directory) == "somewhere"


def test_build_supabase_store_needs_credentials():
    with pytest.raises(ValueError):
        build_object_store(Settings(storage_backend="supabase", supabase_url="", supabase_service_key=""))


def test_build_supabase_store():
    store = build_object_store(
        Settings(storage_backend="supabase", supabase_url=BASE, supabase_service_key="k", storage_list_limit=5),
        httpx.AsyncClient(),
    )
    assert isinstance(store, SupabaseStorageStore)
    assert store.list_limit == 5
    assert store.bucket == "candidate_profiles"


def test_build_unknown_backend():
    with pytest.raises(ValueError, match="s3"):
        build_object_store(Settings.model_construct(storage_backend="s3"))
