"""Typed in-memory relational store (acsets)."""

from .acset import ACSet, AttributeTypeError, UnknownNameError
from .schema import ATTRIBUTE_TYPES, Hom, Schema

__all__ = [
    "ACSet",
    "ATTRIBUTE_TYPES",
    "AttributeTypeError",
    "Hom",
    "Schema",
    "UnknownNameError",
]
