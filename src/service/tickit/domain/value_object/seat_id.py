"""
Seat identifiers

Reserved seating addresses a seat by its grid position, ``{row}_{col}``.
General admission addresses a numbered unit of a tier, ``GA_{tierId}_{index}``.
"""

from enum import StrEnum
import re
from typing import Optional

import attrs

from src.platform.exception.exceptions import DomainError


# ASCII digits, no leading zeros: one spelling per seat
_NUMBER = r'(0|[1-9][0-9]*)'
_RESERVED_PATTERN = re.compile(rf'{_NUMBER}_{_NUMBER}')
_GENERAL_ADMISSION_PATTERN = re.compile(rf'GA_(.+)_{_NUMBER}')


class SeatKind(StrEnum):
    RESERVED = 'reserved'
    GENERAL_ADMISSION = 'general_admission'


@attrs.frozen
class SeatId:
    kind: SeatKind
    row: Optional[int] = None
    col: Optional[int] = None
    tier_id: Optional[str] = None
    index: Optional[int] = None

    @classmethod
    def parse(cls, raw: str) -> 'SeatId':
        seat_id = cls._match(raw)
        if seat_id is None or str(seat_id) != raw:
            raise DomainError(f'Invalid seat identifier: {raw}')
        return seat_id

    @classmethod
    def _match(cls, raw: str) -> Optional['SeatId']:
        if match := _RESERVED_PATTERN.fullmatch(raw):
            return cls(kind=SeatKind.RESERVED, row=int(match.group(1)), col=int(match.group(2)))
        if match := _GENERAL_ADMISSION_PATTERN.fullmatch(raw):
            return cls(
                kind=SeatKind.GENERAL_ADMISSION,
                tier_id=match.group(1),
                index=int(match.group(2)),
            )
        return None

    @classmethod
    def reserved(cls, *, row: int, col: int) -> 'SeatId':
        return cls(kind=SeatKind.RESERVED, row=row, col=col)

    @classmethod
    def general_admission(cls, *, tier_id: str, index: int) -> 'SeatId':
        return cls(kind=SeatKind.GENERAL_ADMISSION, tier_id=tier_id, index=index)

    @property
    def is_reserved(self) -> bool:
        return self.kind == SeatKind.RESERVED

    def __str__(self) -> str:
        if self.is_reserved:
            return f'{self.row}_{self.col}'
        return f'GA_{self.tier_id}_{self.index}'
