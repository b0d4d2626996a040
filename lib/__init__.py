# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Supabase client singleton and error type
# - crypto.py: AES-256-GCM encryption for stored API keys
# - utils.py: Shared utilities (error base class, UUID/JSON helpers)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, SupabaseClientError
from lib.crypto import CipherError, decrypt_secret, encrypt_secret
from lib.utils import ApplicationError, normalize_uuid, to_json_string

__all__ = [
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    # Crypto
    "CipherError",
    "decrypt_secret",
    "encrypt_secret",
    # Utils
    "ApplicationError",
    "normalize_uuid",
    "to_json_string",
]
