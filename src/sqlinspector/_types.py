"""Shared types for the extraction pipeline."""

from __future__ import annotations

import enum


class QueryType(enum.Enum):
    SELECT = "SELECT"
    INSERT = "INSERT"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
