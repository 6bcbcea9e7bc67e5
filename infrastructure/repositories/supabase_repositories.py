"""Supabase-хранилище материалов и поиск учётных записей."""
from __future__ import annotations

from datetime import datetime
from typing import Any

from supabase import Client

from domain.entities import Material, Role, UserAccount
from domain.interfaces import AccountDirectory, MaterialRepository


class SupabaseMaterialRepository(MaterialRepository):
    """Stores materials in the ``materials`` table of a Supabase project."""

    def __init__(self, client: Client, table: str = "materials") -> None:
        self._client = client
        self._table = table

    def add(self, material: Material) -> Material:
        row: dict[str, Any] = {
            "title": material.title,
            "content": material.content,
            "file_type": material.file_type,
            "file_path": material.file_path,
            "metadata": material.metadata,
        }
        if material.id:
            row["id"] = material.id
        response = self._client.table(self._table).insert(row).execute()
        return _row_to_material(response.data[0])

    def list(self) -> list[Material]:
        response = (
            self._client.table(self._table)
            .select("*")
            .order("created_at", desc=True)
            .execute()
        )
        return [_row_to_material(row) for row in response.data or []]

    def get(self, material_id: str) -> Material | None:
        response = (
            self._client.table(self._table)
            .select("*")
            .eq("id", material_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _row_to_material(response.data[0])

    def delete(self, material_id: str) -> bool:
        response = self._client.table(self._table).delete().eq("id", material_id).execute()
        return bool(response.data)


class SupabaseAccountDirectory(AccountDirectory):
    """Reads ``users``, ``user_roles`` and the permission RPC."""

    def __init__(self, client: Client) -> None:
        self._client = client

    def find_by_email(self, email: str) -> UserAccount | None:
        response = (
            self._client.table("users")
            .select("id, email, name, organization, email_verified, created_at")
            .eq("email", email.strip().lower())
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return UserAccount(
            id=str(row["id"]),
            email=row["email"],
            name=row.get("name"),
            organization=row.get("organization"),
            email_verified=bool(row.get("email_verified")),
            created_at=_parse_timestamp(row.get("created_at")),
        )

    def roles_for(self, user_id: str) -> list[Role]:
        response = (
            self._client.table("user_roles")
            .select("roles(name, description)")
            .eq("user_id", user_id)
            .execute()
        )
        roles: list[Role] = []
        for row in response.data or []:
            role = row.get("roles")
            if role:
                roles.append(Role(name=role["name"], description=role.get("description")))
        return roles

    def permissions_for(self, user_id: str) -> list[str]:
        response = self._client.rpc("get_user_permissions", {"user_uuid": user_id}).execute()
        permissions: list[str] = []
        for item in response.data or []:
            # The RPC returns bare names or {"permission_name": ...} rows depending on its version.
            if isinstance(item, dict):
                name = item.get("permission_name") or item.get("name")
                if name:
                    permissions.append(name)
            else:
                permissions.append(str(item))
        return permissions


def _parse_timestamp(value: Any) -> datetime | None:
    if not value:
        return None
    return datetime.fromisoformat(str(value).replace("Z", "+00:00"))


def _row_to_material(row: dict[str, Any]) -> Material:
    return Material(
        id=str(row["id"]),
        title=row.get("title") or "",
        content=row.get("content") or "",
        file_type=row.get("file_type") or "unknown",
        file_path=row.get("file_path"),
        metadata=row.get("metadata") or {},
        created_at=_parse_timestamp(row.get("created_at")),
    )


__all__ = ["SupabaseAccountDirectory", "SupabaseMaterialRepository"]
