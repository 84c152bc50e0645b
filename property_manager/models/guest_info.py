"""Guest-only information models (WiFi, equipment, health and safety)."""

from typing import Optional
from pydantic import Field

from property_manager.models.base import ExternalLink, Image, RecordModel
from property_manager.models.localization import LocalizedValue


class GuestEquipmentInstruction(RecordModel):
    id: str = ""
    name: LocalizedValue = Field(default_factory=LocalizedValue)
    instructions: Optional[LocalizedValue] = None
    pdf_id: Optional[str] = None


class GuestEmergencyContact(RecordModel):
    category: str = ""
    name: Optional[LocalizedValue] = None
    phone: Optional[str] = None
    notes: Optional[LocalizedValue] = None
    images: list[Image] = Field(default_factory=list)
    map_reference: Optional[str] = None
    links: list[ExternalLink] = Field(default_factory=list)
    distance: Optional[float] = None


class GuestSafetyAdviceItem(RecordModel):
    topic: Optional[LocalizedValue] = None
    notes: Optional[LocalizedValue] = None


class GuestHealthAndSafety(RecordModel):
    emergency_contacts: list[GuestEmergencyContact] = Field(default_factory=list)
    safety_advice_items: list[GuestSafetyAdviceItem] = Field(default_factory=list)


class GuestInfo(RecordModel):
    """Information shown only to guests holding a valid booking link."""
    wifi_network_name: Optional[str] = None
    wifi_password: Optional[str] = None
    wifi_notes: Optional[LocalizedValue] = None
    equipment_instructions: list[GuestEquipmentInstruction] = Field(default_factory=list)
    health_and_safety: Optional[GuestHealthAndSafety] = None

    def has_content(self) -> bool:
        """True when there is anything worth rendering on the guest page."""
        if self.wifi_network_name or self.wifi_password:
            return True
        if self.equipment_instructions:
            return True
        safety = self.health_and_safety
        return bool(safety and (safety.emergency_contacts or safety.safety_advice_items))
