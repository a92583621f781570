"""Domain package: all ORM models are imported here so metadata sees every table.

Folder intent:
  building.py   Buildings (with coordinates and managing FM)
  people.py     Facility managers and tenants
  meter.py      Meters, assets and asset custody assignments
  tariff.py     Global tariff row and per-building overrides
  purchase.py   Gas purchases, vend tokens, tenant wallets
  vendor.py     Gas vendors, profiles, plants, price history, deliveries
  support.py    Support tickets and their messages
  admin.py      Console staff roles, PIN access, preferences
  audit.py      Admin audit log (insert only)
  mixins.py     Shared UUID / timestamp column mixins
"""

from gridgas_admin.domain.admin import AdminPasswordedAccess, AdminRole, AdminUserPreferences
from gridgas_admin.domain.audit import AdminAuditLog
from gridgas_admin.domain.building import Building
from gridgas_admin.domain.meter import Asset, AssetAssignment, Meter
from gridgas_admin.domain.people import FmProfile, TenantProfile
from gridgas_admin.domain.purchase import GasPurchase, MeterVend, WalletBalance, WalletTransaction
from gridgas_admin.domain.support import SupportTicket, SupportTicketMessage
from gridgas_admin.domain.tariff import GLOBAL_TARIFF_ID, BuildingTariffOverride, TariffSetting
from gridgas_admin.domain.vendor import (
    GasVendor,
    VendorDelivery,
    VendorPlant,
    VendorPricingHistory,
    VendorProfile,
)

__all__ = [
    "AdminAuditLog",
    "AdminPasswordedAccess",
    "AdminRole",
    "AdminUserPreferences",
    "Asset",
    "AssetAssignment",
    "Building",
    "BuildingTariffOverride",
    "FmProfile",
    "GLOBAL_TARIFF_ID",
    "GasPurchase",
    "GasVendor",
    "Meter",
    "MeterVend",
    "SupportTicket",
    "SupportTicketMessage",
    "TariffSetting",
    "TenantProfile",
    "VendorDelivery",
    "VendorPlant",
    "VendorPricingHistory",
    "VendorProfile",
    "WalletBalance",
    "WalletTransaction",
]
