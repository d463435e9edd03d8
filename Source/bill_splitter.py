"""
Bill Splitter module for FairShare
Handles discount and fee allocation across participants

Two modes share one interface:
  - two-tier: discount goes against food first (proportionally), any surplus
    reduces the shared fees, and fees are split equally
  - ratio: each purchase is scaled by total_after / total_before

All math stays in floats. Rounding happens only when values are formatted.
"""

from typing import Dict, List, Sequence

from constants import MODE_FLAT, MODE_ITEMIZED
from data_models import (
    Allocation,
    Bill,
    BillConfig,
    BillTotals,
    FlatBill,
    Participant,
    ParticipantShare,
)


def allocate_two_tier(people: Sequence[Participant], config: BillConfig) -> Allocation:
    """Split food discount proportionally and fees equally"""
    if not people:
        return Allocation()

    total_food = sum(p.person_food for p in people)

    # food first, overflow spills into fees
    if config.discount <= total_food:
        food_discount = config.discount
        fee_discount = 0.0
    else:
        food_discount = total_food
        fee_discount = config.discount - total_food

    fee_per_person = max(0.0, (config.total_fees - fee_discount) / len(people))

    shares = []
    for person in people:
        food = person.person_food
        if total_food > 0 and food_discount == total_food:
            # food fully covered, keep it exact
            discount_share = food
        elif total_food > 0:
            discount_share = (food / total_food) * food_discount
        else:
            discount_share = 0.0
        net = max(0.0, food - discount_share + fee_per_person)
        shares.append(ParticipantShare(
            participant_id=person.id,
            name=person.name,
            food=food,
            discount_share=discount_share,
            fee_share=fee_per_person,
            net=net,
            paid=person.paid,
        ))

    totals = BillTotals(
        total_food=total_food,
        effective_food_discount=food_discount,
        effective_fee_discount=fee_discount,
        fee_per_person=fee_per_person,
        grand_total=sum(s.net for s in shares),
    )
    return Allocation(shares=shares, totals=totals)


def allocate_ratio(people: Sequence[Participant], total_before: float, total_after: float) -> Allocation:
    """Scale each purchase by the bill's after/before ratio"""
    if not people:
        return Allocation()

    shares = []
    for person in people:
        food = person.person_food
        share = (food / total_before) * total_after if total_before != 0 else 0.0
        net = max(0.0, share)
        shares.append(ParticipantShare(
            participant_id=person.id,
            name=person.name,
            food=food,
            discount_share=food - net,
            fee_share=0.0,
            net=net,
            paid=person.paid,
        ))

    totals = BillTotals(
        total_food=sum(s.food for s in shares),
        effective_food_discount=total_before - total_after,
        effective_fee_discount=0.0,
        fee_per_person=0.0,
        grand_total=sum(s.net for s in shares),
    )
    return Allocation(shares=shares, totals=totals)


class AllocationStrategy:
    """Common interface for the allocation modes"""

    mode: str = ''

    def allocate(self, bill) -> Allocation:
        raise NotImplementedError


class TwoTierAllocation(AllocationStrategy):
    mode = MODE_ITEMIZED

    def allocate(self, bill: Bill) -> Allocation:
        return allocate_two_tier(bill.people, bill.bill_config)


class RatioAllocation(AllocationStrategy):
    mode = MODE_FLAT

    def allocate(self, bill: FlatBill) -> Allocation:
        return allocate_ratio(bill.people, bill.total_before, bill.total_after)


STRATEGIES: Dict[str, AllocationStrategy] = {
    MODE_ITEMIZED: TwoTierAllocation(),
    MODE_FLAT: RatioAllocation(),
}


def get_strategy(mode: str) -> AllocationStrategy:
    """Resolve the allocation strategy for a bill mode"""
    try:
        return STRATEGIES[mode]
    except KeyError:
        raise ValueError(f"Unknown bill mode: {mode!r} (expected one of {', '.join(STRATEGIES)})")


def available_modes() -> List[str]:
    return list(STRATEGIES)
