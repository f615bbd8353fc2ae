"""
Shipment Service Data Models

Pydantic models for shipments, status changes and bulk outcomes.
"""

from pydantic import BaseModel, Field, ConfigDict
from typing import Optional, List
from datetime import datetime
from decimal import Decimal
from enum import Enum


class ShipmentStatus(str, Enum):
    """Shipment status enumeration"""
    NEW = "New"
    IN_PICKUP_STAGE = "InPickupStage"
    IN_WAREHOUSE = "InWarehouse"
    DELIVERED_TO_AGENT = "DeliveredToAgent"
    DELIVERED = "Delivered"
    POSTPONED = "Postponed"
    CUSTOMER_UNREACHABLE = "CustomerUnreachable"
    REJECTED_NO_SHIPPING_FEES = "RejectedNoShippingFees"
    REJECTED_WITH_SHIPPING_FEES = "RejectedWithShippingFees"
    CANCELED_BY_MERCHANT = "CanceledByMerchant"
    PARTIALLY_DELIVERED = "PartiallyDelivered"
    REJECTED_BY_US = "RejectedByUs"
    RETURNED = "Returned"

    @property
    def wire_code(self) -> int:
        """Numeric code the backend uses for bulk status updates"""
        return _WIRE_CODES[self]

    @classmethod
    def from_wire_code(cls, code: int) -> Optional["ShipmentStatus"]:
        for status, status_code in _WIRE_CODES.items():
            if status_code == code:
                return status
        return None


_WIRE_CODES = {
    ShipmentStatus.NEW: 0,
    ShipmentStatus.IN_PICKUP_STAGE: 1,
    ShipmentStatus.IN_WAREHOUSE: 2,
    ShipmentStatus.DELIVERED_TO_AGENT: 3,
    ShipmentStatus.DELIVERED: 4,
    ShipmentStatus.POSTPONED: 5,
    ShipmentStatus.CUSTOMER_UNREACHABLE: 6,
    ShipmentStatus.REJECTED_NO_SHIPPING_FEES: 7,
    ShipmentStatus.REJECTED_WITH_SHIPPING_FEES: 8,
    ShipmentStatus.PARTIALLY_DELIVERED: 9,
    ShipmentStatus.REJECTED_BY_US: 10,
    ShipmentStatus.RETURNED: 11,
    # Not part of the backend's numeric enum yet
    ShipmentStatus.CANCELED_BY_MERCHANT: 12,
}


class BulkFailureReason(str, Enum):
    """Why a single item of a bulk operation failed"""
    SAME_STATUS = "same-status"
    NOT_PERMITTED = "not-permitted"
    NOT_FOUND = "not-found"
    TRANSPORT_ERROR = "transport-error"


# Core Shipment Models

class Shipment(BaseModel):
    """Shipment record as held by the backend"""
    model_config = ConfigDict(from_attributes=True)

    shipment_id: str
    status: ShipmentStatus
    seller_id: Optional[str] = None
    agent_id: Optional[str] = None
    order_number: Optional[str] = None
    price: Decimal = Decimal("0")
    delivery_cost: Decimal = Decimal("0")
    created_at: Optional[datetime] = None


# Request Models

class ShipmentCreateRequest(BaseModel):
    """Create shipment request"""
    seller_id: str = Field(..., description="Seller that owns the shipment")
    seller_name: str = Field(default="", description="Seller display name for notifications")
    customer_name: str = Field(..., min_length=1)
    customer_phone: str = Field(..., min_length=1)
    address: str = Field(..., min_length=1)
    zone_id: Optional[str] = None
    price: Decimal = Field(..., ge=0, description="Product price collected on delivery")
    delivery_cost: Decimal = Field(default=Decimal("0"), ge=0)
    notes: Optional[str] = None


# Response Models

class StatusChangeResult(BaseModel):
    """Outcome of a single accepted status change"""
    shipment_id: str
    old_status: ShipmentStatus
    new_status: ShipmentStatus
    changed_at: datetime
    warning: Optional[str] = None  # notification sync warning, non-fatal


class ShipmentCreationResult(BaseModel):
    """Outcome of an accepted shipment creation"""
    shipment: Shipment
    warning: Optional[str] = None


class AgentAssignmentResult(BaseModel):
    """Outcome of a single accepted agent assignment"""
    shipment_id: str
    agent_id: str
    warning: Optional[str] = None


class BulkItemFailure(BaseModel):
    """One failed item in a bulk operation"""
    shipment_id: str
    reason: BulkFailureReason
    message: str


class BulkOperationResult(BaseModel):
    """Per-item outcomes of a bulk operation, in processing order"""
    succeeded: List[str] = Field(default_factory=list)
    failed: List[BulkItemFailure] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)

    def record_success(self, shipment_id: str) -> None:
        self.succeeded.append(shipment_id)

    def record_failure(self, shipment_id: str, reason: BulkFailureReason, message: str) -> None:
        self.failed.append(
            BulkItemFailure(shipment_id=shipment_id, reason=reason, message=message)
        )

    @property
    def failed_ids(self) -> List[str]:
        return [f.shipment_id for f in self.failed]

    @property
    def all_succeeded(self) -> bool:
        return not self.failed


class BulkStatusChangeResult(BulkOperationResult):
    """Bulk status change outcome"""
    target_status: ShipmentStatus


class BulkAgentAssignmentResult(BulkOperationResult):
    """Bulk agent assignment outcome"""
    agent_id: str
