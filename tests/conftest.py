import pytest
from PIL import Image

from bill_session import BillSession
from bill_store import BillStore, LocalStorage
from constants import MODE_FLAT, MODE_ITEMIZED
from data_models import BillConfig, LineItem, Participant


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(tmp_path / "fairshare.json")


@pytest.fixture
def itemized_session(storage):
    return BillSession(BillStore(storage, MODE_ITEMIZED))


@pytest.fixture
def flat_session(storage):
    return BillSession(BillStore(storage, MODE_FLAT))


@pytest.fixture
def make_person():
    """Build an itemized participant from a list of prices"""
    def _make(name, *prices, paid=False):
        items = [LineItem(id=f"{name}_{i}", name=f"dish {i}", price=p) for i, p in enumerate(prices)]
        return Participant(id=name.lower(), name=name, items=items, paid=paid)
    return _make


@pytest.fixture
def sample_people(make_person):
    return [make_person("Alice", 200, 100), make_person("Bob", 200)]


@pytest.fixture
def sample_config():
    return BillConfig(delivery=40, service=10, discount=100)


@pytest.fixture
def qr_png(tmp_path):
    """A small real PNG on disk"""
    path = tmp_path / "qr.png"
    Image.new("RGB", (64, 64), (0, 0, 0)).save(path, format="PNG")
    return path
