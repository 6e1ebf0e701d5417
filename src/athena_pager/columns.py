"""Helpers for building column metadata from Athena ColumnInfo payloads."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

ColumnMeta = Dict[str, Any]
LogicalType = str

_NULLABLE_MAP = {
    "NOT_NULL": False,
    "NULLABLE": True,
    "UNKNOWN": None,
}


def logical_type_from_db_type(db_type: Optional[str]) -> LogicalType:
    """Map an Athena (Trino/Presto) type name to a logical type."""
    if not db_type:
        return "unknown"
    normalized = db_type.strip().lower()
    if normalized.startswith("array"):
        return "array"
    if normalized.startswith("map"):
        return "map"
    if normalized.startswith("row") or normalized.startswith("struct"):
        return "struct"
    if "timestamp" in normalized:
        return "timestamp"
    if normalized == "date":
        return "date"
    if normalized.startswith("time"):
        return "time"
    if "bool" in normalized:
        return "boolean"
    if normalized == "json":
        return "json"
    if normalized == "varbinary":
        return "binary"
    if normalized.startswith("interval"):
        return "string"
    if "decimal" in normalized:
        return "numeric"
    if normalized in ("double", "float", "real"):
        return "float"
    if "int" in normalized:
        return "integer"
    if any(token in normalized for token in ("char", "string", "uuid", "ipaddress")):
        return "string"
    return "unknown"


def build_column_meta(
    name: str,
    logical_type: str,
    db_type: Optional[str] = None,
    nullable: Optional[bool] = None,
    precision: Optional[int] = None,
    scale: Optional[int] = None,
) -> ColumnMeta:
    """Return a normalized column metadata payload."""
    return {
        "name": name,
        "type": logical_type,
        "db_type": db_type,
        "nullable": nullable,
        "precision": precision,
        "scale": scale,
    }


def columns_from_athena_metadata(column_info: Optional[List[dict]]) -> List[ColumnMeta]:
    """Build column metadata from Athena ``ResultSetMetadata.ColumnInfo``."""
    columns: List[ColumnMeta] = []
    for col in column_info or []:
        db_type = col.get("Type")
        logical_type = logical_type_from_db_type(db_type)
        # Athena reports precision/scale for every column; only decimals carry meaning.
        is_numeric = logical_type == "numeric"
        columns.append(
            build_column_meta(
                col.get("Name"),
                logical_type,
                db_type=db_type,
                nullable=_NULLABLE_MAP.get(col.get("Nullable")),
                precision=col.get("Precision") if is_numeric else None,
                scale=col.get("Scale") if is_numeric else None,
            )
        )
    return columns
