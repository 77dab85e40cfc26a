# backend/qr_attendance/services/fingerprint_service.py
"""Device fingerprinting for the one-device-per-session rule.

The fingerprint binds the caller's network identity to a session without
storing the raw identity. The identity signals are caller controlled, so
this is an anti-abuse heuristic rather than a security boundary.
"""
import hashlib
from dataclasses import dataclass


@dataclass(frozen=True)
class NetworkIdentity:
    """Identity signals presented by the submitting client."""
    user_agent: str = ''
    address: str = ''


class FingerprintService:
    """Service for device fingerprint operations."""

    @staticmethod
    def compute(identity: NetworkIdentity, session_id: str) -> str:
        """Return the sha256 hex digest of ``user_agent|address|session_id``."""
        data_string = f"{identity.user_agent or ''}|{identity.address or ''}|{session_id}"
        return hashlib.sha256(data_string.encode('utf-8')).hexdigest()
