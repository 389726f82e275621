"""Key-value repository for per-day food intake."""

from dataclasses import dataclass
from datetime import date

from pydantic import TypeAdapter

from nutri_guide.domain.progress import DailyProgress
from nutri_guide.services.progress import DailyProgressRepository
from nutri_guide.services.storage import NamespacedStore

_PROGRESS_ADAPTER = TypeAdapter(DailyProgress)


@dataclass
class KeyValueDailyProgressRepository(DailyProgressRepository):
    """Stores one progress record per ISO date key."""

    namespace: NamespacedStore

    def get_progress(self, day: date) -> DailyProgress | None:
        """Return the record for a date."""
        raw = self.namespace.store.get(_progress_key(self.namespace, day))
        if raw is None:
            return None
        return _PROGRESS_ADAPTER.validate_python(raw)

    def save_progress(self, progress: DailyProgress) -> None:
        """Replace the record for the progress date."""
        self.namespace.store.set(
            _progress_key(self.namespace, progress.date),
            _PROGRESS_ADAPTER.dump_python(progress, mode="json"),
        )


def _progress_key(namespace: NamespacedStore, day: date) -> str:
    return namespace.key(f"daily_progress_{day.isoformat()}")
