"""Expenses, as fetched from the GraphQL API for invoice rendering."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from logging import getLogger
from typing import Any, List, Mapping, Optional

import requests

logger = getLogger(__name__)

EXPENSE_INVOICE_QUERY = """
query ExpenseInvoice($legacyExpenseId: Int!) {
  expense(expense: { legacyId: $legacyExpenseId }) {
    id
    legacyId
    description
    currency
    type
    invoiceInfo
    amount
    account {
      id
      slug
      name
      type
      location {
        address
        country
      }
    }
    payee {
      id
      slug
      name
      type
      location {
        address
        country
      }
    }
    items {
      id
      amount
      description
      incurredAt
      url
    }
  }
}
"""


@dataclass
class Account:
    slug: str
    name: str
    id: Optional[str] = None
    type: Optional[str] = None
    address: Optional[str] = None
    country: Optional[str] = None

    @classmethod
    def from_api(cls, data: Optional[Mapping[str, Any]]) -> Optional["Account"]:
        if not data:
            return None
        location = data.get('location') or {}
        return cls(
            id=data.get('id'),
            slug=data.get('slug') or '',
            name=data.get('name') or '',
            type=data.get('type'),
            address=location.get('address'),
            country=location.get('country'),
        )


@dataclass
class Attachment:
    """One line item of the expense."""
    amount: int
    description: str
    incurred_at: datetime
    id: Optional[str] = None
    url: Optional[str] = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Attachment":
        return cls(
            id=data.get('id'),
            amount=int(data.get('amount') or 0),
            description=data.get('description') or '',
            incurred_at=parse_datetime(data.get('incurredAt')),
            url=data.get('url'),
        )


@dataclass
class Expense:
    legacy_id: int
    description: str
    currency: str
    amount: int
    account: Optional[Account] = None
    payee: Optional[Account] = None
    attachments: List[Attachment] = field(default_factory=list)
    id: Optional[str] = None
    type: Optional[str] = None
    invoice_info: Optional[str] = None

    @classmethod
    def from_api(cls, data: Mapping[str, Any]) -> "Expense":
        return cls(
            id=data.get('id'),
            legacy_id=int(data['legacyId']),
            description=data.get('description') or '',
            currency=data.get('currency') or 'USD',
            amount=int(data.get('amount') or 0),
            type=data.get('type'),
            invoice_info=data.get('invoiceInfo'),
            account=Account.from_api(data.get('account')),
            payee=Account.from_api(data.get('payee')),
            attachments=[Attachment.from_api(item) for item in data.get('items') or []],
        )


def parse_datetime(value: Optional[str]) -> datetime:
    """ISO 8601 timestamps from the API, ``Z`` suffix included"""
    if not value:
        raise ValueError('Missing date')
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'
    return datetime.fromisoformat(value)


def fetch_expense(legacy_id: int, api_url: str, timeout: int = 10) -> Optional[Expense]:
    """
    Fetch an expense by its legacy id

    :return: the expense, or None if it doesn't exist or the API can't be reached
    """
    try:
        resp = requests.post(
            api_url,
            json={'query': EXPENSE_INVOICE_QUERY, 'variables': {'legacyExpenseId': legacy_id}},
            timeout=timeout,
        )
        resp.raise_for_status()
        data = resp.json()
    except (requests.RequestException, ValueError) as e:
        logger.warning('Could not fetch expense %s: %s', legacy_id, e)
        return None

    if data.get('errors'):
        logger.warning('API errors for expense %s: %s', legacy_id, data['errors'])
    expense = (data.get('data') or {}).get('expense')
    if not expense:
        return None
    try:
        return Expense.from_api(expense)
    except (KeyError, TypeError, ValueError) as e:
        logger.warning('Malformed expense %s: %s', legacy_id, e)
        return None
