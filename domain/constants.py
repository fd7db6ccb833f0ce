"""
This module contains centralized constants used throughout the application,
ensuring a single source of truth for statuses, roles and default settings.
"""

# Senior record statuses
STATUS_ACTIVE = "Active"
STATUS_INACTIVE = "Inactive"
STATUS_SUSPENDED = "Suspended"
SENIOR_STATUSES = [STATUS_ACTIVE, STATUS_INACTIVE, STATUS_SUSPENDED]

# Application review states (forward only: Pending -> Approved | Rejected)
APP_PENDING = "Pending"
APP_APPROVED = "Approved"
APP_REJECTED = "Rejected"
APP_STATUSES = [APP_PENDING, APP_APPROVED, APP_REJECTED]

GENDERS = ["Male", "Female", "Other"]

ROLE_ADMIN = "Admin"
ROLE_STAFF = "Staff"
ROLE_QR_CHECKER = "QR Checker Staff"
ROLES = [ROLE_ADMIN, ROLE_STAFF, ROLE_QR_CHECKER]

# Personal fields shared by senior records and applications
PERSON_FIELDS = [
    "first_name", "middle_name", "last_name", "suffix", "dob", "gender",
    "address", "contact_number", "emergency_contact", "emergency_phone",
    "photo", "signature",
]
REQUIRED_PERSON_FIELDS = ["first_name", "last_name", "dob", "address"]

# Seeded on first access when no users exist. Changed on first login in practice.
DEFAULT_ADMIN = {
    "id": "1",
    "username": "admin",
    "password": "password123",
    "role": ROLE_ADMIN,
}

DEFAULT_SETTINGS = {
    "title": "Paluan SeniorID",
    "logo": "https://upload.wikimedia.org/wikipedia/commons/e/e0/Paluan_Seal.png",
    "primary_color": "#065f46",  # emerald-800
    "dark_mode": False,
}

THEME_COLORS = {
    "Emerald": "#065f46",
    "Indigo": "#3730a3",
    "Blue": "#1e40af",
    "Rose": "#9f1239",
    "Slate": "#334155",
    "Amber": "#92400e",
}

# Bumped whenever a persisted record shape changes; see services.persistence.
SCHEMA_VERSION = 2
