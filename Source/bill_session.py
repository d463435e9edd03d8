"""
Bill session for FairShare
Owns the current bill, applies edits and persists after each one
"""

from typing import List, Optional

from bill_splitter import get_strategy
from bill_store import BillStore
from constants import DEFAULT_PLATFORM, MODE_FLAT, MODE_ITEMIZED
from data_models import Allocation, Bill, BillConfig, FlatBill, LineItem, Participant, new_id
from utils import coerce_amount


class BillSession:
    """Application state for one bill variant"""

    def __init__(self, store: BillStore):
        self.store = store
        self.mode = store.mode
        self.strategy = get_strategy(self.mode)
        self.bill = store.load() or self._empty_bill()

    def _empty_bill(self):
        return Bill() if self.mode == MODE_ITEMIZED else FlatBill()

    def _require_mode(self, mode: str):
        if self.mode != mode:
            raise ValueError(f"Operation needs a {mode} bill, current bill is {self.mode}")

    def _persist(self):
        try:
            self.store.save(self.bill)
        except OSError as e:
            print(f"⚠ Could not save bill: {e}")

    def allocation(self) -> Allocation:
        return self.strategy.allocate(self.bill)

    def participant_names(self) -> List[str]:
        seen = []
        for person in self.bill.people:
            if person.name not in seen:
                seen.append(person.name)
        return seen

    # Itemized bill

    def _person(self, participant_id: str) -> Participant:
        person = self.bill.find_person(participant_id)
        if person is None:
            raise KeyError(participant_id)
        return person

    def add_participant(self, name: str) -> Participant:
        self._require_mode(MODE_ITEMIZED)
        person = Participant(id=new_id('person'), name=name.strip())
        self.bill.people.append(person)
        self._persist()
        return person

    def rename_participant(self, participant_id: str, name: str):
        self._require_mode(MODE_ITEMIZED)
        self._person(participant_id).name = name.strip()
        self._persist()

    def remove_participant(self, participant_id: str):
        self._require_mode(MODE_ITEMIZED)
        person = self._person(participant_id)
        self.bill.people.remove(person)
        self._persist()

    def add_item(self, participant_id: str, name: str, price) -> LineItem:
        self._require_mode(MODE_ITEMIZED)
        person = self._person(participant_id)
        item = LineItem(id=new_id('item'), name=name.strip(), price=coerce_amount(price))
        person.items.append(item)
        self._persist()
        return item

    def update_item(self, participant_id: str, item_id: str, name: Optional[str] = None, price=None):
        self._require_mode(MODE_ITEMIZED)
        item = self._person(participant_id).find_item(item_id)
        if item is None:
            raise KeyError(item_id)
        if name is not None:
            item.name = name.strip()
        if price is not None:
            item.price = coerce_amount(price)
        self._persist()

    def remove_item(self, participant_id: str, item_id: str):
        self._require_mode(MODE_ITEMIZED)
        person = self._person(participant_id)
        item = person.find_item(item_id)
        if item is None:
            raise KeyError(item_id)
        person.items.remove(item)
        self._persist()

    def set_bill_config(self, delivery=0, service=0, discount=0):
        self._require_mode(MODE_ITEMIZED)
        self.bill.bill_config = BillConfig(
            delivery=coerce_amount(delivery),
            service=coerce_amount(service),
            discount=coerce_amount(discount),
        )
        self._persist()

    def set_platform(self, platform: str):
        self._require_mode(MODE_ITEMIZED)
        self.bill.platform = platform or DEFAULT_PLATFORM
        self._persist()

    def set_qr_code(self, data_uri: str):
        self._require_mode(MODE_ITEMIZED)
        self.bill.qr_code = data_uri
        self._persist()

    def clear_qr_code(self):
        self._require_mode(MODE_ITEMIZED)
        self.bill.qr_code = None
        self._persist()

    # Flat bill

    def set_totals(self, total_before, total_after):
        self._require_mode(MODE_FLAT)
        self.bill.total_before = coerce_amount(total_before)
        self.bill.total_after = coerce_amount(total_after)
        self._persist()

    def adjust_amount(self, name: str, delta) -> Optional[Participant]:
        """Add delta to a person's purchases, creating the person if needed"""
        self._require_mode(MODE_FLAT)
        name = (name or '').strip()
        delta = coerce_amount(delta)
        if not name or delta == 0:
            return None

        person = self.bill.find_person(name)
        if person is not None:
            person.amount = max(person.amount + delta, 0.0)
        else:
            # flat participants are keyed by name
            person = Participant(id=name, name=name, amount=max(delta, 0.0))
            self.bill.people.append(person)
        self._persist()
        return person

    def set_amount(self, name: str, amount):
        self._require_mode(MODE_FLAT)
        person = self.bill.find_person(name)
        if person is None:
            raise KeyError(name)
        person.amount = coerce_amount(amount)
        self._persist()

    def remove_person(self, name: str) -> int:
        """Remove every entry with this name, returns how many were removed"""
        self._require_mode(MODE_FLAT)
        before = len(self.bill.people)
        self.bill.people = [p for p in self.bill.people if p.name != name]
        removed = before - len(self.bill.people)
        if removed:
            self._persist()
        return removed

    # Both

    def toggle_paid(self, key: str) -> bool:
        """Flip paid status by participant id (itemized) or name (flat)"""
        if self.mode == MODE_ITEMIZED:
            targets = [self._person(key)]
        else:
            targets = [p for p in self.bill.people if p.name == key]
            if not targets:
                raise KeyError(key)
        for person in targets:
            person.paid = not person.paid
        self._persist()
        return targets[0].paid

    def reset(self):
        self.bill = self._empty_bill()
        try:
            self.store.clear()
        except OSError as e:
            print(f"⚠ Could not clear saved bill: {e}")
