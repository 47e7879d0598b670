"""
Application Layer Package

This package contains the application-specific business rules
and use cases. It orchestrates the flow of data between the
presentation layer, the domain services and the infrastructure.
"""

# Re-export submodules
from cdnrelay.application import dtos, use_cases

__all__ = ["dtos", "use_cases"]
