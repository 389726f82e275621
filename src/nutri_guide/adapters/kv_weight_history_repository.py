"""Key-value repository for the weight series."""

from dataclasses import dataclass

from pydantic import TypeAdapter

from nutri_guide.domain.progress import WeightSample
from nutri_guide.services.progress import WeightHistoryRepository
from nutri_guide.services.storage import NamespacedStore

_HISTORY_ADAPTER = TypeAdapter(list[WeightSample])


@dataclass
class KeyValueWeightHistoryRepository(WeightHistoryRepository):
    """Stores the whole weight series as one JSON list."""

    namespace: NamespacedStore

    def list_samples(self) -> list[WeightSample]:
        """Return samples in recording order."""
        raw = self.namespace.store.get(self.namespace.key("weight_history"))
        if raw is None:
            return []
        return _HISTORY_ADAPTER.validate_python(raw)

    def append_sample(self, sample: WeightSample) -> None:
        """Append a sample and rewrite the series."""
        history = [*self.list_samples(), sample]
        self.namespace.store.set(
            self.namespace.key("weight_history"),
            _HISTORY_ADAPTER.dump_python(history, mode="json"),
        )
