"""
Strata Services Module

Record types for discovered services and groups.
"""

from strata.services.definitions import GroupDefinition, ServiceDefinition

__all__ = ["ServiceDefinition", "GroupDefinition"]
