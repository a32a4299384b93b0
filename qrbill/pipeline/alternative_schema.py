"""Decomposition of alternative schema lines into tag, delimiter and values."""

from dataclasses import dataclass, field
from typing import List, Optional


ALTERNATIVE_SCHEMA_COUNT = 2


@dataclass(frozen=True)
class AlternativeSchemaEntry:
    """One decomposed alternative schema line.

    Attributes:
        tag: Two-character schema identifier
        delimiter: Single character separating the values
        values: Payload split on the delimiter (empty values kept)
    """
    tag: str
    delimiter: str
    values: List[str] = field(default_factory=list)

    def as_list(self) -> List[str]:
        """Flat form: tag, delimiter, then each value."""
        return [self.tag, self.delimiter, *self.values]


def split_alternative_schema(line: Optional[str]) -> Optional[AlternativeSchemaEntry]:
    """Split an alternative schema line.

    Returns None for lines shorter than three characters, since they cannot
    hold both a tag and a delimiter. The payload is split literally on the
    delimiter character.
    """
    if line is None or len(line) < 3:
        return None
    tag, delimiter, payload = line[:2], line[2], line[3:]
    return AlternativeSchemaEntry(tag=tag, delimiter=delimiter, values=payload.split(delimiter))
