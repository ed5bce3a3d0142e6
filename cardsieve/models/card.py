"""
Card and tag shapes.

Cards arrive as JSON mappings using the authoring field names, so they are
kept as plain dicts and addressed with dot paths (``contentArea.title``).
The TypedDicts below describe tags; every other field
is carried through untouched.
"""

from typing import Any, NotRequired, TypedDict


class TagParent(TypedDict):
    id: str


class Tag(TypedDict):
    """
    A categorical tag on a card.

    Attributes:
        id: Panel-prefixed tag id (e.g. "caas:topic/security")
        parent: Optional parent tag naming the panel explicitly
    """

    id: str
    parent: NotRequired[TagParent]


# Cards are open mappings. Besides id, tags and contentArea the engines read
# cardDate / modifiedDate for sorting, and the assembler sets isBookmarked and
# isFeatured.
Card = dict[str, Any]
