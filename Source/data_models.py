"""
Data models for FairShare - Bill state and allocation results
"""

import uuid
from dataclasses import dataclass, field
from typing import List, Optional

from constants import DEFAULT_PLATFORM


def new_id(prefix: str) -> str:
    """Generate a unique identifier"""
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


@dataclass
class LineItem:
    """A single purchase on a participant's tab"""
    id: str
    name: str
    price: float = 0.0


@dataclass
class Participant:
    """Someone sharing the bill"""
    id: str
    name: str
    items: List[LineItem] = field(default_factory=list)
    amount: float = 0.0
    paid: bool = False

    @property
    def person_food(self) -> float:
        """Pre-discount purchase total"""
        if self.items:
            return sum(item.price for item in self.items)
        return self.amount

    def find_item(self, item_id: str) -> Optional[LineItem]:
        return next((item for item in self.items if item.id == item_id), None)


@dataclass
class BillConfig:
    """Shared fees and discount for the itemized bill"""
    delivery: float = 0.0
    service: float = 0.0
    discount: float = 0.0

    @property
    def total_fees(self) -> float:
        return self.delivery + self.service


@dataclass
class Bill:
    """The itemized bill"""
    platform: str = DEFAULT_PLATFORM
    bill_config: BillConfig = field(default_factory=BillConfig)
    people: List[Participant] = field(default_factory=list)
    qr_code: Optional[str] = None

    def find_person(self, participant_id: str) -> Optional[Participant]:
        return next((p for p in self.people if p.id == participant_id), None)


@dataclass
class FlatBill:
    """The flat bill: one purchase amount per person and a before/after total pair"""
    total_before: float = 0.0
    total_after: float = 0.0
    people: List[Participant] = field(default_factory=list)

    @property
    def total_discount(self) -> float:
        return self.total_before - self.total_after

    def find_person(self, name: str) -> Optional[Participant]:
        return next((p for p in self.people if p.name == name), None)


@dataclass
class ParticipantShare:
    """What one participant owes"""
    participant_id: str
    name: str
    food: float
    discount_share: float
    fee_share: float
    net: float
    paid: bool = False


@dataclass
class BillTotals:
    """Bill-wide figures of an allocation"""
    total_food: float
    effective_food_discount: float
    effective_fee_discount: float
    fee_per_person: float
    grand_total: float


@dataclass
class Allocation:
    """Result of splitting a bill"""
    shares: List[ParticipantShare] = field(default_factory=list)
    totals: Optional[BillTotals] = None

    @property
    def is_empty(self) -> bool:
        return not self.shares

    @property
    def outstanding(self) -> float:
        """Amount still owed by unpaid participants"""
        return sum(share.net for share in self.shares if not share.paid)

    @property
    def collected(self) -> float:
        """Amount already settled by paid participants"""
        return sum(share.net for share in self.shares if share.paid)

    def share_for(self, participant_id: str) -> Optional[ParticipantShare]:
        return next((s for s in self.shares if s.participant_id == participant_id), None)
