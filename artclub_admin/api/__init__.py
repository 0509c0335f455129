from artclub_admin.api.client import ApiClient

__all__ = ["ApiClient"]
