"""
API routers package.
"""
from interview_ai.api import health, interviews

__all__ = ["health", "interviews"]
