"""Fixed reference data: inspected office properties, branches, conditions."""

from __future__ import annotations

OFFICE_PROPERTIES: tuple[tuple[str, str], ...] = (
    ("electrical-outlets-switches", "Electrical Outlets & Switches"),
    ("network-data-ports", "Network & Data Ports"),
    ("cctv-cameras-tv-printers", "CCTV Cameras, TV, Printers"),
    ("signage-logo-wall", "Signage / Logo Wall"),
    ("aircon", "Aircon"),
    ("aircon-tambol", "Aircon Tambol"),
    ("tables", "Tables"),
    ("chairs", "Chairs"),
    ("cabinets", "Cabinets"),
    ("light-fixtures", "Light Fixtures"),
    ("blinds-curtains", "Blinds / Curtains"),
    ("walls-ceiling", "Walls & Ceiling"),
    ("carpet", "Carpet"),
    ("door", "Door"),
    ("reception-counter", "Reception Counter"),
    ("glass-panels-windows", "Glass Panels & Windows"),
    ("flooring-tiles-vinyl", "Flooring (Tiles / Vinyl)"),
    ("pest-control-signs", "Pest Control Signs"),
)

PROPERTY_NAMES: dict[str, str] = dict(OFFICE_PROPERTIES)

OFFICE_BRANCHES: tuple[str, ...] = (
    "Head Office",
    "Branch A",
    "Branch B",
    "Warehouse",
    "Others",
)

GOOD = "Good"
NEEDS_FIXING = "Needs Fixing"
NOT_AVAILABLE = "Not Available"
CONDITIONS: tuple[str, ...] = (GOOD, NEEDS_FIXING, NOT_AVAILABLE)

ALLOWED_PHOTO_TYPES: tuple[str, ...] = ("image/jpeg", "image/png", "image/webp")

COMMENTS_MAX_LENGTH = 500
ADDITIONAL_COMMENTS_MAX_LENGTH = 1000

ROLE_ADMIN = "admin"
ROLE_REPORTER = "reporter"
ROLES: tuple[str, ...] = (ROLE_ADMIN, ROLE_REPORTER)

UNASSIGNED_BRANCH = "Not Assigned"
