"""Candid signatures of the supply-chain canister, expressed with ic-py types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ic.candid import Types

QUERY = "query"
UPDATE = "update"


def _unit_variant(*tags: str) -> Any:
    return Types.Variant({tag: Types.Null for tag in tags})


def _result(ok: Any) -> Any:
    return Types.Variant({"Ok": ok, "Err": Types.Text})


UserRole = _unit_variant(
    "Manufacturer",
    "LogisticsProvider",
    "Retailer",
    "QualityAssurance",
    "SupplyChainManager",
    "Admin",
    "Consumer",
)
ProductStatus = _unit_variant("Manufacturing", "InTransit", "Delivered", "Recalled")
SupplyChainStage = _unit_variant(
    "RawMaterialSourcing",
    "Manufacturing",
    "QualityControl",
    "Packaging",
    "Shipping",
    "Distribution",
    "Retail",
)
EventStatus = _unit_variant("Pending", "InProgress", "Completed", "Failed")
PartnerType = _unit_variant(
    "Manufacturer",
    "Supplier",
    "LogisticsProvider",
    "Distributor",
    "Retailer",
    "CertificationBody",
)

UserPermissions = Types.Record(
    {
        "can_register_products": Types.Bool,
        "can_update_supply_chain": Types.Bool,
        "can_manage_partners": Types.Bool,
        "can_view_analytics": Types.Bool,
        "can_verify_users": Types.Bool,
    }
)
User = Types.Record(
    {
        "id": Types.Principal,
        "email": Types.Text,
        "first_name": Types.Text,
        "last_name": Types.Text,
        "company": Types.Text,
        "role": UserRole,
        "created_at": Types.Nat64,
        "is_verified": Types.Bool,
        "permissions": UserPermissions,
    }
)
UserRegistration = Types.Record(
    {
        "email": Types.Text,
        "first_name": Types.Text,
        "last_name": Types.Text,
        "company": Types.Text,
        "role": UserRole,
    }
)
Product = Types.Record(
    {
        "id": Types.Text,
        "name": Types.Text,
        "category": Types.Text,
        "description": Types.Opt(Types.Text),
        "manufacturer": Types.Text,
        "manufacturer_id": Types.Principal,
        "batch_number": Types.Opt(Types.Text),
        "production_date": Types.Nat64,
        "raw_materials": Types.Vec(Types.Text),
        "certifications": Types.Vec(Types.Text),
        "sustainability_score": Types.Opt(Types.Float64),
        "estimated_value": Types.Opt(Types.Float64),
        "current_status": ProductStatus,
        "current_location": Types.Text,
        "created_at": Types.Nat64,
        "updated_at": Types.Nat64,
    }
)
ProductRegistration = Types.Record(
    {
        "name": Types.Text,
        "category": Types.Text,
        "description": Types.Opt(Types.Text),
        "batch_number": Types.Opt(Types.Text),
        "production_date": Types.Nat64,
        "manufacturing_location": Types.Text,
        "raw_materials": Types.Vec(Types.Text),
        "certifications": Types.Vec(Types.Text),
        "sustainability_score": Types.Opt(Types.Float64),
        "estimated_value": Types.Opt(Types.Float64),
    }
)
ProductSearchQuery = Types.Record(
    {
        "name": Types.Opt(Types.Text),
        "category": Types.Opt(Types.Text),
        "manufacturer": Types.Opt(Types.Text),
        "status": Types.Opt(ProductStatus),
        "limit": Types.Opt(Types.Nat32),
    }
)
Metadata = Types.Vec(Types.Tuple(Types.Text, Types.Text))
SupplyChainEvent = Types.Record(
    {
        "id": Types.Text,
        "product_id": Types.Text,
        "stage": SupplyChainStage,
        "location": Types.Text,
        "timestamp": Types.Nat64,
        "actor": Types.Text,
        "actor_id": Types.Principal,
        "status": EventStatus,
        "details": Types.Text,
        "certifications": Types.Vec(Types.Text),
        "estimated_arrival": Types.Opt(Types.Nat64),
        "metadata": Metadata,
    }
)
SupplyChainEventInput = Types.Record(
    {
        "product_id": Types.Text,
        "stage": SupplyChainStage,
        "location": Types.Text,
        "status": EventStatus,
        "details": Types.Text,
        "certifications": Types.Vec(Types.Text),
        "estimated_arrival": Types.Opt(Types.Nat64),
        "metadata": Metadata,
    }
)
ProductWithHistory = Types.Record(
    {
        "product": Product,
        "supply_chain_events": Types.Vec(SupplyChainEvent),
        "ethical_score": Types.Float64,
    }
)
Partner = Types.Record(
    {
        "id": Types.Principal,
        "company_name": Types.Text,
        "partner_type": PartnerType,
        "contact_email": Types.Text,
        "contact_person": Types.Text,
        "certifications": Types.Vec(Types.Text),
        "verified": Types.Bool,
        "created_at": Types.Nat64,
        "reputation_score": Types.Nat32,
    }
)
PartnerRegistration = Types.Record(
    {
        "company_name": Types.Text,
        "partner_type": PartnerType,
        "contact_email": Types.Text,
        "contact_person": Types.Text,
        "certifications": Types.Vec(Types.Text),
    }
)
AnalyticsData = Types.Record(
    {
        "total_products": Types.Nat64,
        "active_shipments": Types.Nat64,
        "completed_deliveries": Types.Nat64,
        "average_ethical_score": Types.Float64,
        "total_partners": Types.Nat64,
        "total_users": Types.Nat64,
    }
)
CanisterStatus = Types.Record(
    {
        "version": Types.Text,
        "total_products": Types.Nat64,
        "total_users": Types.Nat64,
        "total_events": Types.Nat64,
        "uptime": Types.Nat64,
    }
)


@dataclass(frozen=True)
class MethodSignature:
    name: str
    mode: str
    args: tuple[Any, ...]
    returns: tuple[Any, ...]


SERVICE: dict[str, MethodSignature] = {
    sig.name: sig
    for sig in (
        MethodSignature("register_user", UPDATE, (UserRegistration,), (_result(User),)),
        MethodSignature("get_user", QUERY, (), (_result(User),)),
        MethodSignature(
            "update_user_verification",
            UPDATE,
            (Types.Principal, Types.Bool),
            (_result(Types.Null),),
        ),
        MethodSignature("register_product", UPDATE, (ProductRegistration,), (_result(Types.Text),)),
        MethodSignature("get_product", QUERY, (Types.Text,), (_result(ProductWithHistory),)),
        MethodSignature("search_products", QUERY, (ProductSearchQuery,), (Types.Vec(Product),)),
        MethodSignature(
            "add_supply_chain_event",
            UPDATE,
            (SupplyChainEventInput,),
            (_result(Types.Text),),
        ),
        MethodSignature(
            "get_supply_chain_events",
            QUERY,
            (Types.Text,),
            (_result(Types.Vec(SupplyChainEvent)),),
        ),
        MethodSignature("register_partner", UPDATE, (PartnerRegistration,), (_result(Types.Null),)),
        MethodSignature("get_partners", QUERY, (), (Types.Vec(Partner),)),
        MethodSignature("get_analytics", QUERY, (), (AnalyticsData,)),
        MethodSignature("get_canister_status", QUERY, (), (CanisterStatus,)),
    )
}


def encode_args(method: str, args: list[Any]) -> list[dict[str, Any]]:
    signature = SERVICE[method]
    if len(args) != len(signature.args):
        raise ValueError(f"{method} expects {len(signature.args)} argument(s), got {len(args)}")
    return [{"type": idl_type, "value": value} for idl_type, value in zip(signature.args, args)]
