"""Supabase-backed key-value store for string sets."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from photo_deleter.services.processed import KeyValueStore


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Supabase implementation storing each set as a JSON array row."""

    client: Client
    table: str = "string_sets"

    def get_string_set(self, key: str) -> set[str]:
        """Return the stored set for a key."""
        response = (
            self.client.table(self.table)
            .select("members")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return set()
        members = response.data[0].get("members") or []
        return {str(member) for member in members}

    def set_string_set(self, key: str, value: set[str]) -> None:
        """Replace the stored set for a key."""
        self.client.table(self.table).upsert(
            {
                "key": key,
                "members": sorted(value),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
