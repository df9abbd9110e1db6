from .reflection_result import (
    LocalReflection,
    ReflectionApiConfig,
    ReflectionResult,
    RemoteReflection,
)

__all__ = ["LocalReflection", "ReflectionApiConfig", "ReflectionResult", "RemoteReflection"]
