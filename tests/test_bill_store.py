import json

import pytest

from bill_store import BillStore, LocalStorage, bill_from_dict, flat_bill_from_dict
from constants import MODE_FLAT, MODE_ITEMIZED
from data_models import Bill, BillConfig, FlatBill, LineItem, Participant


def test_absent_key_loads_nothing(storage):
    assert BillStore(storage, MODE_ITEMIZED).load() is None
    assert BillStore(storage, MODE_FLAT).load() is None


def test_itemized_bill_survives_save_and_load(storage):
    bill = Bill(
        platform="grab",
        bill_config=BillConfig(delivery=40, service=10, discount=100),
        people=[Participant(id="p1", name="Alice", items=[LineItem(id="i1", name="Pad thai", price=80)], paid=True)],
        qr_code="data:image/png;base64,AAAA",
    )
    store = BillStore(storage, MODE_ITEMIZED)
    store.save(bill)

    assert store.load() == bill


def test_itemized_wire_format_uses_fixed_key(storage):
    store = BillStore(storage, MODE_ITEMIZED)
    store.save(Bill(people=[Participant(id="p1", name="Alice")]))

    document = json.loads(storage.get_item("billSplitterData"))
    assert set(document) == {"platform", "billConfig", "people", "qrCode"}
    assert document["billConfig"] == {"delivery": 0.0, "service": 0.0, "discount": 0.0}
    assert document["people"] == [{"id": "p1", "name": "Alice", "items": [], "paid": False}]


def test_flat_bill_uses_discount_data_key(storage):
    store = BillStore(storage, MODE_FLAT)
    store.save(FlatBill(total_before=500, total_after=450, people=[Participant(id="x", name="Ann", amount=300)]))

    document = json.loads(storage.get_item("discountData"))
    assert document == {
        "totalBefore": 500,
        "totalAfter": 450,
        "people": [{"name": "Ann", "amount": 300, "paid": False}],
    }

    loaded = store.load()
    assert loaded.total_before == 500
    assert loaded.people[0].name == "Ann"
    assert loaded.people[0].amount == 300


def test_missing_paid_defaults_to_false():
    bill = flat_bill_from_dict({"totalBefore": 100, "totalAfter": 90, "people": [{"name": "Ann", "amount": 50}]})

    assert bill.people[0].paid is False


def test_non_numeric_values_coerced_to_zero():
    bill = bill_from_dict({
        "billConfig": {"delivery": "abc", "service": None, "discount": "12,5"},
        "people": [{"name": "Alice", "items": [{"name": "Tea", "price": ""}, "junk"]}, 42],
    })

    assert bill.bill_config == BillConfig(delivery=0, service=0, discount=12.5)
    assert len(bill.people) == 1
    assert bill.people[0].items[0].price == 0
    assert bill.people[0].id
    assert bill.people[0].items[0].id
    assert bill.platform == "default"


def test_malformed_json_falls_back(storage, capsys):
    storage.set_item("billSplitterData", "{not json")

    assert BillStore(storage, MODE_ITEMIZED).load() is None
    assert "corrupted" in capsys.readouterr().out


def test_unexpected_document_shape_falls_back(storage):
    storage.set_item("discountData", json.dumps([1, 2, 3]))

    assert BillStore(storage, MODE_FLAT).load() is None


def test_corrupted_storage_file_is_treated_as_empty(tmp_path, capsys):
    path = tmp_path / "broken.json"
    path.write_text("]]]", encoding="utf-8")
    storage = LocalStorage(path)

    assert storage.get_item("billSplitterData") is None
    assert "Could not read storage" in capsys.readouterr().out

    storage.set_item("billSplitterData", "{}")
    assert storage.get_item("billSplitterData") == "{}"


def test_clear_only_removes_own_key(storage):
    BillStore(storage, MODE_ITEMIZED).save(Bill())
    BillStore(storage, MODE_FLAT).save(FlatBill(total_before=1))

    BillStore(storage, MODE_ITEMIZED).clear()

    assert storage.get_item("billSplitterData") is None
    assert storage.get_item("discountData") is not None


def test_unknown_mode_rejected(storage):
    with pytest.raises(ValueError):
        BillStore(storage, "weekly")
