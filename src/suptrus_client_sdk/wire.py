"""Conversion between SDK models and Candid values.

Candid values use the shapes produced and accepted by ic-py:

* records are dicts keyed by field name (or ``_<hash>`` when the decoder
  had no field names to work with),
* variants are single-key dicts ``{"Tag": payload}``, ``None`` for unit tags,
* ``opt T`` is ``[]`` or ``[value]``,
* tuples are two-element lists,
* principals are text (ic-py ``Principal`` objects are converted through
  ``to_str``).
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping, TypeVar

from .models import (
    AnalyticsData,
    CanisterStatus,
    EventStatus,
    Partner,
    PartnerRegistration,
    PartnerType,
    Product,
    ProductRegistration,
    ProductSearchQuery,
    ProductStatus,
    ProductWithHistory,
    SupplyChainEvent,
    SupplyChainEventInput,
    SupplyChainStage,
    User,
    UserPermissions,
    UserRegistration,
    UserRole,
)

E = TypeVar("E", bound=Enum)


def idl_hash(name: str) -> int:
    value = 0
    for byte in name.encode("utf-8"):
        value = (value * 223 + byte) % 2**32
    return value


def field(record: Mapping[str, Any], name: str) -> Any:
    if not isinstance(record, Mapping):
        raise TypeError(f"Expected a Candid record, got {type(record).__name__}")
    if name in record:
        return record[name]
    hashed = f"_{idl_hash(name)}"
    if hashed in record:
        return record[hashed]
    raise KeyError(f"Candid record is missing field {name!r}")


def variant(member: Enum) -> dict[str, None]:
    return {member.value: None}


def variant_tag(value: Any) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping) and len(value) == 1:
        return next(iter(value))
    raise ValueError(f"Expected a Candid variant, got {value!r}")


def enum_from_variant(value: Any, enum_type: type[E]) -> E:
    return enum_type(variant_tag(value))


def opt(value: Any) -> list[Any]:
    return [] if value is None else [value]


def unopt(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        if len(value) > 1:
            raise ValueError(f"Candid opt holds more than one value: {value!r}")
        return value[0] if value else None
    return value


def principal_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    to_str = getattr(value, "to_str", None)
    if callable(to_str):
        return to_str()
    raise TypeError(f"Expected a principal, got {type(value).__name__}")


def text_map(entries: Any) -> dict[str, str]:
    if isinstance(entries, Mapping):
        return {str(key): str(val) for key, val in entries.items()}
    result: dict[str, str] = {}
    for entry in entries or []:
        if isinstance(entry, Mapping):
            key, val = entry["_0_"], entry["_1_"]
        else:
            key, val = entry
        result[str(key)] = str(val)
    return result


def text_entries(mapping: Mapping[str, str]) -> list[tuple[str, str]]:
    return [(key, mapping[key]) for key in sorted(mapping)]


# -- encoders --------------------------------------------------------------


def encode_user_registration(payload: UserRegistration) -> dict[str, Any]:
    return {
        "email": payload.email,
        "first_name": payload.first_name,
        "last_name": payload.last_name,
        "company": payload.company,
        "role": variant(payload.role),
    }


def encode_product_registration(payload: ProductRegistration) -> dict[str, Any]:
    return {
        "name": payload.name,
        "category": payload.category,
        "description": opt(payload.description),
        "batch_number": opt(payload.batch_number),
        "production_date": payload.production_date,
        "manufacturing_location": payload.manufacturing_location,
        "raw_materials": list(payload.raw_materials),
        "certifications": list(payload.certifications),
        "sustainability_score": opt(payload.sustainability_score),
        "estimated_value": opt(payload.estimated_value),
    }


def encode_product_search_query(query: ProductSearchQuery) -> dict[str, Any]:
    return {
        "name": opt(query.name),
        "category": opt(query.category),
        "manufacturer": opt(query.manufacturer),
        "status": opt(variant(query.status) if query.status is not None else None),
        "limit": opt(query.limit),
    }


def encode_event_input(payload: SupplyChainEventInput) -> dict[str, Any]:
    return {
        "product_id": payload.product_id,
        "stage": variant(payload.stage),
        "location": payload.location,
        "status": variant(payload.status),
        "details": payload.details,
        "certifications": list(payload.certifications),
        "estimated_arrival": opt(payload.estimated_arrival),
        "metadata": text_entries(payload.metadata),
    }


def encode_partner_registration(payload: PartnerRegistration) -> dict[str, Any]:
    return {
        "company_name": payload.company_name,
        "partner_type": variant(payload.partner_type),
        "contact_email": payload.contact_email,
        "contact_person": payload.contact_person,
        "certifications": list(payload.certifications),
    }


# -- decoders --------------------------------------------------------------


def decode_text(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Expected text, got {type(value).__name__}")
    return value


def decode_null(value: Any) -> None:
    if value not in (None, [], {}, ()):
        raise ValueError(f"Expected null, got {value!r}")
    return None


def decode_user(record: Mapping[str, Any]) -> User:
    permissions = field(record, "permissions")
    return User(
        id=principal_text(field(record, "id")),
        email=field(record, "email"),
        first_name=field(record, "first_name"),
        last_name=field(record, "last_name"),
        company=field(record, "company"),
        role=enum_from_variant(field(record, "role"), UserRole),
        created_at=field(record, "created_at"),
        is_verified=field(record, "is_verified"),
        permissions=UserPermissions(
            can_register_products=field(permissions, "can_register_products"),
            can_update_supply_chain=field(permissions, "can_update_supply_chain"),
            can_manage_partners=field(permissions, "can_manage_partners"),
            can_view_analytics=field(permissions, "can_view_analytics"),
            can_verify_users=field(permissions, "can_verify_users"),
        ),
    )


def decode_product(record: Mapping[str, Any]) -> Product:
    return Product(
        id=field(record, "id"),
        name=field(record, "name"),
        category=field(record, "category"),
        description=unopt(field(record, "description")),
        manufacturer=field(record, "manufacturer"),
        manufacturer_id=principal_text(field(record, "manufacturer_id")),
        batch_number=unopt(field(record, "batch_number")),
        production_date=field(record, "production_date"),
        raw_materials=list(field(record, "raw_materials")),
        certifications=list(field(record, "certifications")),
        sustainability_score=unopt(field(record, "sustainability_score")),
        estimated_value=unopt(field(record, "estimated_value")),
        current_status=enum_from_variant(field(record, "current_status"), ProductStatus),
        current_location=field(record, "current_location"),
        created_at=field(record, "created_at"),
        updated_at=field(record, "updated_at"),
    )


def decode_event(record: Mapping[str, Any]) -> SupplyChainEvent:
    return SupplyChainEvent(
        id=field(record, "id"),
        product_id=field(record, "product_id"),
        stage=enum_from_variant(field(record, "stage"), SupplyChainStage),
        location=field(record, "location"),
        timestamp=field(record, "timestamp"),
        actor=field(record, "actor"),
        actor_id=principal_text(field(record, "actor_id")),
        status=enum_from_variant(field(record, "status"), EventStatus),
        details=field(record, "details"),
        certifications=list(field(record, "certifications")),
        estimated_arrival=unopt(field(record, "estimated_arrival")),
        metadata=text_map(field(record, "metadata")),
    )


def decode_events(values: Any) -> list[SupplyChainEvent]:
    return [decode_event(item) for item in values]


def decode_product_with_history(record: Mapping[str, Any]) -> ProductWithHistory:
    return ProductWithHistory(
        product=decode_product(field(record, "product")),
        supply_chain_events=decode_events(field(record, "supply_chain_events")),
        ethical_score=field(record, "ethical_score"),
    )


def decode_products(values: Any) -> list[Product]:
    return [decode_product(item) for item in values]


def decode_partner(record: Mapping[str, Any]) -> Partner:
    return Partner(
        id=principal_text(field(record, "id")),
        company_name=field(record, "company_name"),
        partner_type=enum_from_variant(field(record, "partner_type"), PartnerType),
        contact_email=field(record, "contact_email"),
        contact_person=field(record, "contact_person"),
        certifications=list(field(record, "certifications")),
        verified=field(record, "verified"),
        created_at=field(record, "created_at"),
        reputation_score=field(record, "reputation_score"),
    )


def decode_partners(values: Any) -> list[Partner]:
    return [decode_partner(item) for item in values]


def decode_analytics(record: Mapping[str, Any]) -> AnalyticsData:
    return AnalyticsData(
        total_products=field(record, "total_products"),
        active_shipments=field(record, "active_shipments"),
        completed_deliveries=field(record, "completed_deliveries"),
        average_ethical_score=field(record, "average_ethical_score"),
        total_partners=field(record, "total_partners"),
        total_users=field(record, "total_users"),
    )


def decode_canister_status(record: Mapping[str, Any]) -> CanisterStatus:
    return CanisterStatus(
        version=field(record, "version"),
        total_products=field(record, "total_products"),
        total_users=field(record, "total_users"),
        total_events=field(record, "total_events"),
        uptime=field(record, "uptime"),
    )
