"""Network contract models (Pydantic schemas, validators)."""

from .models import NetworkSpec, Road

__all__ = ["Road", "NetworkSpec"]
