"""工具函数"""
from .security import hash_password, verify_password, issue_token, verify_token
from .rate_limit import RateLimiter, auth_limiter

__all__ = [
    "hash_password", "verify_password", "issue_token", "verify_token",
    "RateLimiter", "auth_limiter",
]
