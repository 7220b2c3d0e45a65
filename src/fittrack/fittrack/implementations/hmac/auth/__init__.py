# ABOUTME: HMAC token authentication implementations
# ABOUTME: Provides HmacTokenManager and HmacRequestAuthenticator

from .authenticator import HmacRequestAuthenticator
from .token_manager import HmacTokenManager
from .utils import extract_bearer_token, generate_user_id

__all__ = ["HmacRequestAuthenticator", "HmacTokenManager", "extract_bearer_token", "generate_user_id"]
