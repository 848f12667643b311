from .adminstore import AdminClient

__all__ = ["AdminClient"]
