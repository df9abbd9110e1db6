"""Guided-audio relay"""
from .audio_proxy_service import ALLOWED_HOSTS, AudioProxyError, AudioProxyService, is_allowed_host

__all__ = ["ALLOWED_HOSTS", "AudioProxyError", "AudioProxyService", "is_allowed_host"]
