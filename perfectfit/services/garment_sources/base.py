from typing import Dict, Protocol


class GarmentSource(Protocol):
    def measurements(self, size_label: str, archetype: str) -> Dict[str, float]:  # canonical keys, inches
        ...
