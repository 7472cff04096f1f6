"""Cross-table join helpers.

The sheets have no reliable foreign keys between some tables, so company
identity is matched on a normalized display name. Both sides of a comparison
must go through the same normalizer.
"""

import re
from collections.abc import Callable, Hashable, Iterable, Sequence
from datetime import datetime
from typing import Any, TypeVar

from app.models.crm.company import Company
from app.models.crm.contact import LinkedContact, OfficialContact, OppContactLink, PotentialContact
from helpers.dates import parse_timestamp

T = TypeVar("T")
K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

ACTIVE = "active"

_PARENTHETICAL = re.compile(r"\([^()]*\)|（[^（）]*）")
_CJK_SUFFIX = re.compile(r"股份有限公司|有限公司|公司")
_LATIN_SUFFIX = re.compile(
    r"[\s,]+(?:co\.?\s*,?\s*ltd\.?|ltd\.?|limited|inc\.?|incorporated|corp\.?|corporation|co\.?|company|llc|plc|gmbh)$"
)
_TRAILING_PUNCT = re.compile(r"[\s,.\-]+$")
_WHITESPACE = re.compile(r"\s+")


# ========== Normalization ==========


def normalize_key(value: Any) -> str:
    """Plain join key: lower-cased and trimmed."""
    if value is None:
        return ""
    return str(value).lower().strip()


def _normalize_company_once(name: str) -> str:
    s = name.lower().strip()
    s = _PARENTHETICAL.sub("", s)
    s = _CJK_SUFFIX.sub("", s)
    s = _LATIN_SUFFIX.sub("", s)
    s = _TRAILING_PUNCT.sub("", s)
    return _WHITESPACE.sub(" ", s).strip()


def normalize_company_name(name: Any) -> str:
    """Company identity key, e.g. "ACME Co., Ltd. (Taipei)" -> "acme".

    Applied until stable, so normalizing a normalized key is a no-op.
    """
    if not name:
        return ""
    current = str(name)
    while True:
        nxt = _normalize_company_once(current)
        if nxt == current:
            return nxt
        current = nxt


def contact_card_key(name: Any, company: Any) -> str:
    """Key pairing a person with a company across contact tables."""
    return f"{normalize_key(name)}|{normalize_company_name(company)}"


def match_company(companies: Iterable[Company], name: str) -> Company | None:
    """First company whose name equals `name` exactly or after normalization."""
    target = normalize_company_name(name)
    if not target:
        return None
    for company in companies:
        if company.company_name == name or normalize_company_name(company.company_name) == target:
            return company
    return None


# ========== Join maps ==========


def build_join_map(
    records: Iterable[T],
    key_fn: Callable[[T], K],
    value_fn: Callable[[T], V],
) -> dict[K, V]:
    """Lookup table built once per call. First write wins; empty keys are skipped."""
    result: dict[K, V] = {}
    for record in records:
        key = key_fn(record)
        if not key or key in result:
            continue
        result[key] = value_fn(record)
    return result


def company_name_map(companies: Iterable[Company]) -> dict[str, str]:
    return build_join_map(companies, lambda c: c.company_id, lambda c: c.company_name)


def resolve_linked_contacts(
    opportunity_id: str,
    official_contacts: Sequence[OfficialContact],
    links: Iterable[OppContactLink],
    potential_contacts: Iterable[PotentialContact],
    companies: Iterable[Company],
) -> list[LinkedContact]:
    """Official contacts actively linked to an opportunity, with company name and card image.

    The card image only exists on the potential-contact (business card) row the
    contact was promoted from, so it is recovered by name + company. Any miss
    yields an empty string.
    """
    linked_ids = {
        link.contact_id for link in links if link.opportunity_id == opportunity_id and link.status == ACTIVE
    }
    if not linked_ids:
        return []

    names = company_name_map(companies)
    cards = build_join_map(
        (pc for pc in potential_contacts if pc.name and pc.company and pc.drive_link),
        lambda pc: contact_card_key(pc.name, pc.company),
        lambda pc: pc.drive_link,
    )

    result = []
    for contact in official_contacts:
        if contact.contact_id not in linked_ids:
            continue
        company_name = names.get(contact.company_id, "")
        drive_link = ""
        if contact.name and company_name:
            drive_link = cards.get(contact_card_key(contact.name, company_name), "")
        result.append(LinkedContact.from_official(contact, company_name=company_name, drive_link=drive_link))
    return result


# ========== Activity ==========


def last_activity_map(*streams: Iterable[tuple[str, Any]]) -> dict[str, datetime]:
    """Latest valid timestamp per entity across event streams of (entity_id, timestamp)."""
    result: dict[str, datetime] = {}
    for stream in streams:
        for entity_id, value in stream:
            if not entity_id:
                continue
            ts = parse_timestamp(value)
            if ts is None:
                continue
            current = result.get(entity_id)
            if current is None or ts > current:
                result[entity_id] = ts
    return result


def compute_last_activity(
    entity_id: str,
    events: Iterable[tuple[str, Any]],
    created: Any = None,
) -> datetime | None:
    """Latest event timestamp for one entity, falling back to its creation time."""
    latest = last_activity_map(events).get(entity_id)
    if latest is not None:
        return latest
    return parse_timestamp(created)
