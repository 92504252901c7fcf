# postboard/client/view.py
from enum import Enum
from typing import List, Sequence

from postboard.schemas.post_schema import PostRead


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"

    def toggled(self) -> "SortOrder":
        return SortOrder.DESC if self is SortOrder.ASC else SortOrder.ASC


def filter_and_sort(posts: Sequence[PostRead], search_term: str = "", sort_order: SortOrder = SortOrder.ASC) -> List[PostRead]:
    """
    Posts whose name contains `search_term` (case-insensitive), sorted by
    name without regard to case. Pure: the input sequence is not touched.
    """
    needle = search_term.casefold()
    matches = [p for p in posts if needle in p.name.casefold()]
    return sorted(matches, key=lambda p: p.name.casefold(), reverse=sort_order == SortOrder.DESC)
