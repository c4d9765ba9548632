from __future__ import annotations

from typing import Any

PRINCIPAL_A = "2vxsx-fae"
PRINCIPAL_B = "aaaaa-aa"


def user_record(principal: str = PRINCIPAL_A) -> dict[str, Any]:
    return {
        "id": principal,
        "email": "ops@acme.example",
        "first_name": "Ada",
        "last_name": "Moreno",
        "company": "Acme Textiles",
        "role": {"Manufacturer": None},
        "created_at": 1_700_000_000_000_000_000,
        "is_verified": False,
        "permissions": {
            "can_register_products": True,
            "can_update_supply_chain": True,
            "can_manage_partners": False,
            "can_view_analytics": True,
            "can_verify_users": False,
        },
    }


def product_record(product_id: str = "CT-2024-001234") -> dict[str, Any]:
    return {
        "id": product_id,
        "name": "Organic Cotton T-Shirt",
        "category": "Apparel",
        "description": ["Fair-trade cotton tee"],
        "manufacturer": "Acme Textiles",
        "manufacturer_id": PRINCIPAL_A,
        "batch_number": [],
        "production_date": 1_704_067_200_000_000_000,
        "raw_materials": ["cotton"],
        "certifications": ["GOTS"],
        "sustainability_score": [8.5],
        "estimated_value": [],
        "current_status": {"InTransit": None},
        "current_location": "Rotterdam",
        "created_at": 1_704_067_200_000_000_000,
        "updated_at": 1_704_153_600_000_000_000,
    }


def event_record(event_id: str = "EVT-1") -> dict[str, Any]:
    return {
        "id": event_id,
        "product_id": "CT-2024-001234",
        "stage": {"Shipping": None},
        "location": "Rotterdam",
        "timestamp": 1_704_153_600_000_000_000,
        "actor": "Acme Textiles",
        "actor_id": PRINCIPAL_A,
        "status": {"InProgress": None},
        "details": "Container loaded",
        "certifications": [],
        "estimated_arrival": [1_704_412_800_000_000_000],
        "metadata": [("container", "MSCU1234567"), ("carrier", "MSC")],
    }


def partner_record() -> dict[str, Any]:
    return {
        "id": PRINCIPAL_B,
        "company_name": "FastFreight",
        "partner_type": {"LogisticsProvider": None},
        "contact_email": "desk@fastfreight.example",
        "contact_person": "Lee Park",
        "certifications": ["ISO 9001"],
        "verified": True,
        "created_at": 1_700_000_000_000_000_000,
        "reputation_score": 87,
    }


def canister_status_record() -> dict[str, Any]:
    return {
        "version": "1.0.0",
        "total_products": 3,
        "total_users": 2,
        "total_events": 5,
        "uptime": 1_704_153_600_000_000_000,
    }
