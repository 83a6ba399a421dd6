from enum import StrEnum


class EventStatus(StrEnum):
    # Events go live on creation, there is no draft stage
    PUBLISHED = 'PUBLISHED'
