"""Supabase-backed key-value store."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from nutri_guide.services.storage import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Supabase implementation over a ``key``/``value`` table."""

    client: Client
    table_name: str = "kv_store"

    def get(self, key: str) -> object | None:
        """Return the stored JSON value for a key."""
        response = (
            self.client.table(self.table_name)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0].get("value")

    def set(self, key: str, value: object) -> None:
        """Upsert a JSON value."""
        response = (
            self.client.table(self.table_name)
            .upsert(
                {
                    "key": key,
                    "value": value,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError(f"Failed to store key {key} in Supabase")

    def delete(self, key: str) -> None:
        """Delete a key."""
        self.client.table(self.table_name).delete().eq("key", key).execute()

    def keys(self, prefix: str) -> list[str]:
        """Return keys matching a prefix."""
        response = (
            self.client.table(self.table_name)
            .select("key")
            .like("key", _like_prefix(prefix))
            .order("key", desc=False)
            .execute()
        )
        return [str(row["key"]) for row in response.data or []]


def _like_prefix(prefix: str) -> str:
    escaped = prefix.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"{escaped}%"
