from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    MANUFACTURER = "Manufacturer"
    LOGISTICS_PROVIDER = "LogisticsProvider"
    RETAILER = "Retailer"
    QUALITY_ASSURANCE = "QualityAssurance"
    SUPPLY_CHAIN_MANAGER = "SupplyChainManager"
    ADMIN = "Admin"
    CONSUMER = "Consumer"


class ProductStatus(str, Enum):
    MANUFACTURING = "Manufacturing"
    IN_TRANSIT = "InTransit"
    DELIVERED = "Delivered"
    RECALLED = "Recalled"


class SupplyChainStage(str, Enum):
    RAW_MATERIAL_SOURCING = "RawMaterialSourcing"
    MANUFACTURING = "Manufacturing"
    QUALITY_CONTROL = "QualityControl"
    PACKAGING = "Packaging"
    SHIPPING = "Shipping"
    DISTRIBUTION = "Distribution"
    RETAIL = "Retail"


class EventStatus(str, Enum):
    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    FAILED = "Failed"


class PartnerType(str, Enum):
    MANUFACTURER = "Manufacturer"
    SUPPLIER = "Supplier"
    LOGISTICS_PROVIDER = "LogisticsProvider"
    DISTRIBUTOR = "Distributor"
    RETAILER = "Retailer"
    CERTIFICATION_BODY = "CertificationBody"


class UserPermissions(BaseModel):
    can_register_products: bool
    can_update_supply_chain: bool
    can_manage_partners: bool
    can_view_analytics: bool
    can_verify_users: bool


class User(BaseModel):
    id: str
    email: str
    first_name: str
    last_name: str
    company: str
    role: UserRole
    created_at: int
    is_verified: bool
    permissions: UserPermissions


class UserRegistration(BaseModel):
    email: str
    first_name: str
    last_name: str
    company: str
    role: UserRole


class Product(BaseModel):
    id: str
    name: str
    category: str
    description: str | None = None
    manufacturer: str
    manufacturer_id: str
    batch_number: str | None = None
    production_date: int
    raw_materials: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    sustainability_score: float | None = None
    estimated_value: float | None = None
    current_status: ProductStatus
    current_location: str
    created_at: int
    updated_at: int


class ProductRegistration(BaseModel):
    name: str
    category: str
    description: str | None = None
    batch_number: str | None = None
    production_date: int
    manufacturing_location: str
    raw_materials: list[str] = Field(default_factory=list)
    certifications: list[str] = Field(default_factory=list)
    sustainability_score: float | None = None
    estimated_value: float | None = None


class SupplyChainEvent(BaseModel):
    id: str
    product_id: str
    stage: SupplyChainStage
    location: str
    timestamp: int
    actor: str
    actor_id: str
    status: EventStatus
    details: str
    certifications: list[str] = Field(default_factory=list)
    estimated_arrival: int | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


class SupplyChainEventInput(BaseModel):
    product_id: str
    stage: SupplyChainStage
    location: str
    status: EventStatus
    details: str
    certifications: list[str] = Field(default_factory=list)
    estimated_arrival: int | None = None
    metadata: dict[str, str] = Field(default_factory=dict)


class ProductWithHistory(BaseModel):
    product: Product
    supply_chain_events: list[SupplyChainEvent] = Field(default_factory=list)
    ethical_score: float


class ProductSearchQuery(BaseModel):
    name: str | None = None
    category: str | None = None
    manufacturer: str | None = None
    status: ProductStatus | None = None
    limit: int | None = Field(default=None, ge=0, le=2**32 - 1)


class Partner(BaseModel):
    id: str
    company_name: str
    partner_type: PartnerType
    contact_email: str
    contact_person: str
    certifications: list[str] = Field(default_factory=list)
    verified: bool
    created_at: int
    reputation_score: int


class PartnerRegistration(BaseModel):
    company_name: str
    partner_type: PartnerType
    contact_email: str
    contact_person: str
    certifications: list[str] = Field(default_factory=list)


class AnalyticsData(BaseModel):
    total_products: int
    active_shipments: int
    completed_deliveries: int
    average_ethical_score: float
    total_partners: int
    total_users: int


class CanisterStatus(BaseModel):
    version: str
    total_products: int
    total_users: int
    total_events: int
    uptime: int


class SessionData(BaseModel):
    principal: str
    private_key: str
    key_type: str = "ed25519"
    identity_provider: str
    network: str
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
