"""
Persistence module for FairShare
Keeps the current bill in a local key-value JSON file
"""

import json
from pathlib import Path
from typing import Any, Dict, Optional, Union

from constants import DEFAULT_PLATFORM, MODE_FLAT, MODE_ITEMIZED, STORAGE_KEYS
from data_models import Bill, BillConfig, FlatBill, LineItem, Participant, new_id
from utils import coerce_amount

AnyBill = Union[Bill, FlatBill]


class LocalStorage:
    """Key-value store backed by a single JSON file, values are JSON strings"""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            print(f"⚠ Could not read storage {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            print(f"⚠ Ignoring malformed storage file {self.path}")
            return {}
        return data

    def _write_all(self, data: Dict[str, str]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding='utf-8')

    def get_item(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str):
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str):
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _as_text(value: Any, default: str = '') -> str:
    if value is None:
        return default
    return str(value)


def bill_to_dict(bill: Bill) -> Dict[str, Any]:
    return {
        'platform': bill.platform,
        'billConfig': {
            'delivery': bill.bill_config.delivery,
            'service': bill.bill_config.service,
            'discount': bill.bill_config.discount,
        },
        'people': [
            {
                'id': person.id,
                'name': person.name,
                'items': [{'id': item.id, 'name': item.name, 'price': item.price} for item in person.items],
                'paid': person.paid,
            }
            for person in bill.people
        ],
        'qrCode': bill.qr_code,
    }


def bill_from_dict(data: Dict[str, Any]) -> Bill:
    config = data.get('billConfig')
    if not isinstance(config, dict):
        config = {}

    people = []
    for raw in _as_list(data.get('people')):
        if not isinstance(raw, dict):
            continue
        items = [
            LineItem(
                id=_as_text(item.get('id')) or new_id('item'),
                name=_as_text(item.get('name')),
                price=coerce_amount(item.get('price')),
            )
            for item in _as_list(raw.get('items'))
            if isinstance(item, dict)
        ]
        people.append(Participant(
            id=_as_text(raw.get('id')) or new_id('person'),
            name=_as_text(raw.get('name')),
            items=items,
            paid=bool(raw.get('paid', False)),
        ))

    qr_code = data.get('qrCode')
    return Bill(
        platform=_as_text(data.get('platform'), DEFAULT_PLATFORM) or DEFAULT_PLATFORM,
        bill_config=BillConfig(
            delivery=coerce_amount(config.get('delivery')),
            service=coerce_amount(config.get('service')),
            discount=coerce_amount(config.get('discount')),
        ),
        people=people,
        qr_code=qr_code if isinstance(qr_code, str) and qr_code else None,
    )


def flat_bill_to_dict(bill: FlatBill) -> Dict[str, Any]:
    return {
        'totalBefore': bill.total_before,
        'totalAfter': bill.total_after,
        'people': [{'name': p.name, 'amount': p.amount, 'paid': p.paid} for p in bill.people],
    }


def flat_bill_from_dict(data: Dict[str, Any]) -> FlatBill:
    people = [
        Participant(
            id=_as_text(raw.get('name')),
            name=_as_text(raw.get('name')),
            amount=coerce_amount(raw.get('amount')),
            paid=bool(raw.get('paid', False)),
        )
        for raw in _as_list(data.get('people'))
        if isinstance(raw, dict)
    ]
    return FlatBill(
        total_before=coerce_amount(data.get('totalBefore')),
        total_after=coerce_amount(data.get('totalAfter')),
        people=people,
    )


SERIALIZERS = {
    MODE_ITEMIZED: (bill_to_dict, bill_from_dict),
    MODE_FLAT: (flat_bill_to_dict, flat_bill_from_dict),
}


class BillStore:
    """Load/save the current bill of one variant under its fixed key"""

    def __init__(self, storage: LocalStorage, mode: str = MODE_ITEMIZED):
        if mode not in SERIALIZERS:
            raise ValueError(f"Unknown bill mode: {mode!r}")
        self.storage = storage
        self.mode = mode
        self.key = STORAGE_KEYS[mode]

    def load(self) -> Optional[AnyBill]:
        """Stored bill, or None when absent or unreadable"""
        raw = self.storage.get_item(self.key)
        if raw is None:
            return None

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            print(f"⚠ Saved bill is corrupted, starting fresh: {e}")
            return None

        if not isinstance(data, dict):
            print("⚠ Saved bill has an unexpected format, starting fresh")
            return None

        _, from_dict = SERIALIZERS[self.mode]
        return from_dict(data)

    def save(self, bill: AnyBill):
        to_dict, _ = SERIALIZERS[self.mode]
        self.storage.set_item(self.key, json.dumps(to_dict(bill), ensure_ascii=False))

    def clear(self):
        self.storage.remove_item(self.key)
