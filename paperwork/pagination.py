"""Split expense attachments into printable pages.

The first page also carries the "From" / "Bill to" header, so it holds fewer
rows than the following ones. How many fewer depends on the header height,
which we estimate from the number of lines in both addresses.
"""
from __future__ import annotations

from typing import List, Optional, Sequence, TypeVar

T = TypeVar("T")

BASE_NB_ON_FIRST_PAGE = 12
MIN_NB_ON_FIRST_PAGE = 8
ATTACHMENTS_PER_PAGE = 22


def count_lines(address: Optional[str]) -> int:
    """Number of newline characters in *address* (``None`` counts as zero)."""
    return (address or "").count("\n")


def first_page_capacity(
    from_address: Optional[str],
    to_address: Optional[str],
    base_nb_on_first_page: int = BASE_NB_ON_FIRST_PAGE,
    min_nb_on_first_page: int = MIN_NB_ON_FIRST_PAGE,
) -> int:
    header_lines = count_lines(from_address) + count_lines(to_address)
    return max(min_nb_on_first_page, base_nb_on_first_page - header_lines)


def chunk(items: Sequence[T], size: int) -> List[List[T]]:
    return [list(items[i:i + size]) for i in range(0, len(items), size)]


def chunk_attachments(
    attachments: Sequence[T],
    from_address: Optional[str],
    to_address: Optional[str],
    base_nb_on_first_page: int = BASE_NB_ON_FIRST_PAGE,
    min_nb_on_first_page: int = MIN_NB_ON_FIRST_PAGE,
    attachments_per_page: int = ATTACHMENTS_PER_PAGE,
) -> List[List[T]]:
    """Return *attachments* grouped by page, first page first.

    When the attachments don't fit on a single page anyway we give the first
    page its full base capacity and let the header push the rest down.
    Always returns at least one (possibly empty) chunk.
    """
    max_nb_on_first_page = first_page_capacity(
        from_address, to_address, base_nb_on_first_page, min_nb_on_first_page
    )
    if len(attachments) > base_nb_on_first_page:
        nb_on_first_page = base_nb_on_first_page
    else:
        nb_on_first_page = max_nb_on_first_page

    first_page = list(attachments[:nb_on_first_page])
    return [first_page, *chunk(attachments[nb_on_first_page:], attachments_per_page)]


def chunk_expense_attachments(expense) -> List[list]:
    """Chunk the attachments of an :class:`~paperwork.expenses.Expense`."""
    bill_from = expense.payee.address if expense.payee else None
    bill_to = expense.account.address if expense.account else None
    return chunk_attachments(expense.attachments, bill_from, bill_to)
