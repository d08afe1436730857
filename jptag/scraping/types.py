"""
Shared crawl runtime data models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

UNKNOWN = "Unknown"

OUTPUT_HEADER: tuple[str, ...] = (
    "Tag",
    "Import date",
    "DOB",
    "Transfer",
    "Transfer Date",
    "Prefecture",
    "City",
    "Location",
)


@dataclass(frozen=True)
class OutputRow:
    """
    One flat output line, the unit the sink persists.
    """

    tag_id: str
    import_date: str
    date_of_birth: str
    transfer: str
    transfer_date: str
    prefecture: str
    city: str
    location: str

    @classmethod
    def placeholder(cls, tag_id: str) -> "OutputRow":
        return cls(tag_id, UNKNOWN, UNKNOWN, UNKNOWN, UNKNOWN, UNKNOWN, UNKNOWN, UNKNOWN)

    def as_list(self) -> list[str]:
        return [
            self.tag_id,
            self.import_date,
            self.date_of_birth,
            self.transfer,
            self.transfer_date,
            self.prefecture,
            self.city,
            self.location,
        ]

    @property
    def is_placeholder(self) -> bool:
        return all(value == UNKNOWN for value in self.as_list()[1:])


@dataclass(frozen=True)
class TransferEvent:
    """
    One ownership or location change in a tag's history.
    """

    transfer_description: str
    transfer_date: str
    prefecture: str
    city: str
    location: str


@dataclass(frozen=True)
class CattleRecord:
    """
    Parsed result page for one tag.
    """

    tag_id: str
    import_date: str
    date_of_birth: str
    listed_id: str = UNKNOWN
    transfers: tuple[TransferEvent, ...] = field(default_factory=tuple)
    cell_count: int = 0

    def to_rows(self) -> list[OutputRow]:
        """
        One row per transfer event, or a single placeholder when there are none.
        """

        if not self.transfers:
            return [OutputRow.placeholder(self.tag_id)]
        return [
            OutputRow(
                tag_id=self.tag_id,
                import_date=self.import_date,
                date_of_birth=self.date_of_birth,
                transfer=event.transfer_description,
                transfer_date=event.transfer_date,
                prefecture=event.prefecture,
                city=event.city,
                location=event.location,
            )
            for event in self.transfers
        ]


@dataclass(frozen=True)
class UnknownRecord:
    """
    Sentinel for a tag whose result page held too few cells to trust.
    """

    tag_id: str
    cell_count: int = 0

    def to_rows(self) -> list[OutputRow]:
        return [OutputRow.placeholder(self.tag_id)]
