# agrorain/errors.py
from typing import Optional


class AgroRainError(Exception):
    pass


class StoreError(AgroRainError):
    """A backend rejected or could not serve a request."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class FormError(AgroRainError):
    """Form input is missing or unparseable; nothing was written."""

    def __init__(self, message: str, fields: Optional[list] = None):
        super().__init__(message)
        self.fields = fields or []
