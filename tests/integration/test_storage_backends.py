"""Integration tests for the persistence backends"""

import json

import httpx
import pytest

from pixelfin.config import Settings
from pixelfin.domain.exceptions import StorageReadError, StorageWriteError
from pixelfin.infrastructure.storage.base import build_storage
from pixelfin.infrastructure.storage.file import FileStorage
from pixelfin.infrastructure.storage.http import HttpStorage
from pixelfin.infrastructure.storage.memory import MemoryStorage
from pixelfin.infrastructure.storage.sql import SqlStorage
from pixelfin.services.ledger_store import LedgerStore

KEY = "@pixelfin/transactions/v1"


@pytest.fixture
def kv_transport():
    """httpx transport emulating the remote key/value endpoint"""
    data = {}

    def handler(request: httpx.Request) -> httpx.Response:
        key = request.url.path.removeprefix("/kv/")
        if request.method == "GET":
            if key not in data:
                return httpx.Response(404)
            return httpx.Response(200, json={"value": data[key]})
        if request.method == "PUT":
            data[key] = json.loads(request.content)["value"]
            return httpx.Response(204)
        if request.method == "DELETE":
            if data.pop(key, None) is None:
                return httpx.Response(404)
            return httpx.Response(204)
        return httpx.Response(405)

    return httpx.MockTransport(handler)


@pytest.fixture(params=["memory", "file", "sql", "http"])
def backend(request, tmp_path, kv_transport):
    if request.param == "memory":
        return MemoryStorage()
    if request.param == "file":
        return FileStorage(tmp_path / "data")
    if request.param == "sql":
        return SqlStorage.from_url(f"sqlite:///{tmp_path / 'ledger.db'}")
    return HttpStorage("http://kv.test", timeout=1.0, transport=kv_transport)


@pytest.mark.integration
async def test_backend_get_set_remove(backend):
    assert await backend.get(KEY) is None

    await backend.set(KEY, "[1]")
    assert await backend.get(KEY) == "[1]"

    await backend.set(KEY, "[1, 2]")
    assert await backend.get(KEY) == "[1, 2]"

    await backend.remove(KEY)
    assert await backend.get(KEY) is None

    # removing an absent key is not an error
    await backend.remove(KEY)


@pytest.mark.integration
async def test_store_round_trip_through_backend(backend, clock):
    writer = LedgerStore(backend, key=KEY, clock=clock)
    await writer.load()
    await writer.add_saving(20, note="allowance")
    await writer.add_expense(7.25)

    reader = LedgerStore(backend, key=KEY, clock=clock)
    result = await reader.load()

    assert result.ok is True
    assert reader.transactions == writer.transactions
    assert reader.balance == 12.75


@pytest.mark.integration
def test_file_storage_keeps_key_in_one_file(tmp_path):
    storage = FileStorage(tmp_path)
    path = storage.path_for(KEY)

    assert path.parent == tmp_path
    assert "/" not in path.name


@pytest.mark.integration
async def test_file_storage_unreadable_file_raises_read_error(tmp_path):
    storage = FileStorage(tmp_path)
    storage.path_for(KEY).mkdir(parents=True)

    with pytest.raises(StorageReadError):
        await storage.get(KEY)


@pytest.mark.integration
async def test_http_storage_server_error_raises():
    transport = httpx.MockTransport(lambda request: httpx.Response(500))
    storage = HttpStorage("http://kv.test", transport=transport)

    with pytest.raises(StorageReadError):
        await storage.get(KEY)
    with pytest.raises(StorageWriteError):
        await storage.set(KEY, "[]")
    with pytest.raises(StorageWriteError):
        await storage.remove(KEY)


@pytest.mark.integration
async def test_http_storage_malformed_response_raises_read_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"nope": 1}))
    storage = HttpStorage("http://kv.test", transport=transport)

    with pytest.raises(StorageReadError):
        await storage.get(KEY)


@pytest.mark.integration
async def test_http_storage_unreachable_raises():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    storage = HttpStorage("http://kv.test", transport=httpx.MockTransport(handler))

    with pytest.raises(StorageReadError):
        await storage.get(KEY)


@pytest.mark.parametrize(
    "backend_name, expected",
    [("memory", MemoryStorage), ("file", FileStorage), ("sql", SqlStorage), ("http", HttpStorage)],
)
def test_build_storage_selects_backend(tmp_path, backend_name, expected):
    config = Settings(
        storage_backend=backend_name,
        data_dir=str(tmp_path),
        database_url=f"sqlite:///{tmp_path / 'pixelfin.db'}",
    )

    assert isinstance(build_storage(config), expected)


def test_build_storage_unknown_backend():
    with pytest.raises(ValueError):
        build_storage(Settings(storage_backend="s3"))
