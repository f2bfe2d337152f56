"""Billomat resource collections and their envelope keys.

Why in the domain layer:
- The singular table is vendor knowledge, not HTTP; adapters and the CLI read
  the same read-only mapping.
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping


class ResourceName(str, Enum):
    """API collections reachable under `/api/<name>`."""

    ACTIVITY_FEED = "activity-feed"
    ARTICLES = "articles"
    CLIENTS = "clients"
    CLIENT_PROPERTY_VALUES = "client-property-values"
    CONFIRMATIONS = "confirmations"
    COUNTRIES = "countries"
    CONTACTS = "contacts"
    CREDIT_NOTES = "credit-notes"
    CURRENCIES = "currencies"
    DELIVERY_NOTES = "delivery-notes"
    ESTIMATES = "estimates"
    INCOMINGS = "incomings"
    INVOICES = "invoices"
    LETTERS = "letters"
    RECURRINGS = "recurrings"
    REMINDERS = "reminders"
    SEARCH = "search"
    SUPPLIERS = "suppliers"
    USERS = "users"

    def __str__(self) -> str:
        return self.value


# Key wrapping a single entity in request/response bodies.
SINGULAR: Mapping[str, str] = MappingProxyType(
    {
        ResourceName.ACTIVITY_FEED.value: "activity",
        ResourceName.ARTICLES.value: "article",
        ResourceName.CLIENTS.value: "client",
        ResourceName.CLIENT_PROPERTY_VALUES.value: "client-property-value",
        ResourceName.CONFIRMATIONS.value: "confirmation",
        ResourceName.COUNTRIES.value: "country",
        ResourceName.CONTACTS.value: "contact",
        ResourceName.CREDIT_NOTES.value: "credit-note",
        ResourceName.CURRENCIES.value: "currency",
        ResourceName.DELIVERY_NOTES.value: "delivery-note",
        ResourceName.ESTIMATES.value: "estimate",
        ResourceName.INCOMINGS.value: "incoming",
        ResourceName.INVOICES.value: "invoice",
        ResourceName.LETTERS.value: "letter",
        ResourceName.RECURRINGS.value: "recurring",
        ResourceName.REMINDERS.value: "reminder",
        ResourceName.SEARCH.value: "result",
        ResourceName.SUPPLIERS.value: "supplier",
        ResourceName.USERS.value: "user",
    }
)


def singular_name(resource: ResourceName | str) -> str | None:
    """Envelope key for `resource`, or `None` if the collection is unknown."""

    return SINGULAR.get(str(resource))
