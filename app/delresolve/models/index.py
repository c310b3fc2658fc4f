"""Media index models.

Defines the collections of the shared media index, the entries the
resolver locates in them, and the deletion tickets issued for entries.
"""

from dataclasses import dataclass
from enum import Enum


class MediaCollection(str, Enum):
    """Collection of the media index an entry belongs to.

    Attributes:
        IMAGES: Image files.
        VIDEO: Video files.
        AUDIO: Audio files.
        FILES: Generic catch-all collection for any other file kind.
    """

    IMAGES = "images"
    VIDEO = "video"
    AUDIO = "audio"
    FILES = "files"


# Typed collections first, generic last.
LOOKUP_ORDER: tuple[MediaCollection, ...] = (
    MediaCollection.IMAGES,
    MediaCollection.VIDEO,
    MediaCollection.AUDIO,
    MediaCollection.FILES,
)


@dataclass(frozen=True, slots=True)
class IndexEntry:
    """A row of the media index matching a target path.

    Attributes:
        id: Row identifier within its collection.
        collection: Collection the row was found in.
    """

    id: int
    collection: MediaCollection

    @property
    def uri(self) -> str:
        """Content URI identifying this entry."""
        return f"content://media/external/{self.collection.value}/{self.id}"


@dataclass(frozen=True, slots=True)
class DeleteTicket:
    """Opaque request to delete index entries, pending external approval.

    Attributes:
        id: Unique ticket identifier.
        entries: Exactly the entries the ticket was issued for.
    """

    id: str
    entries: tuple[IndexEntry, ...]

    def __post_init__(self) -> None:
        """Validate ticket data after initialization."""
        if not self.id:
            msg = "Ticket ID cannot be empty"
            raise ValueError(msg)
        if not self.entries:
            msg = "Ticket must cover at least one entry"
            raise ValueError(msg)
