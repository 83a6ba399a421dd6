from decimal import Decimal


# (inclusive capacity ceiling, flat fee)
FEE_SCHEDULE: tuple[tuple[int, Decimal], ...] = (
    (10, Decimal('0.00')),
    (50, Decimal('5.00')),
    (100, Decimal('10.00')),
)
TOP_FEE = Decimal('15.00')


def platform_fee_for(total_capacity: int) -> Decimal:
    for ceiling, fee in FEE_SCHEDULE:
        if total_capacity <= ceiling:
            return fee
    return TOP_FEE
