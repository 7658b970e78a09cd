import pytest

from fieldforce.container import build_container
from fieldforce.store.memory_store import InMemoryDocumentStore


class RecordingAssetStore:
    def __init__(self, fail: bool = False):
        self.deleted: list[str] = []
        self._fail = fail

    def delete_asset(self, ref):
        if self._fail:
            raise OSError("storage unavailable")
        self.deleted.append(ref)


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def assets():
    return RecordingAssetStore()


@pytest.fixture
def container(store, assets):
    return build_container(store=store, assets=assets)


@pytest.fixture
def failing_assets():
    return RecordingAssetStore(fail=True)
