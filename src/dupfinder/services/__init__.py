from .root_service import RootService

__all__ = ["RootService"]
