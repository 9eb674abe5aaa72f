"""Document decoding shared by every repository adapter."""

from typing import Any

from lodestar.domain.aggregates import Roadmap, RoadmapNote
from lodestar.domain.errors import DomainError
from lodestar.interfaces.errors import DocumentDecodeError


def decode_roadmap(document: dict[str, Any]) -> Roadmap:
    """Turn a stored document back into a `Roadmap`.

    Raises:
        DocumentDecodeError: If the document is missing fields or holds bad values.
    """
    try:
        return Roadmap.from_dict(document)
    except (KeyError, TypeError, ValueError, DomainError) as e:
        raise DocumentDecodeError(
            "roadmap", str(document.get("id", "?")), str(e)
        ) from e


def decode_note(document: dict[str, Any]) -> RoadmapNote:
    """Turn a stored document back into a `RoadmapNote`.

    Raises:
        DocumentDecodeError: If the document is missing fields or holds bad values.
    """
    try:
        return RoadmapNote.from_dict(document)
    except (KeyError, TypeError, ValueError, DomainError) as e:
        raise DocumentDecodeError("note", str(document.get("id", "?")), str(e)) from e
