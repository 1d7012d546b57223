"""
Configuration for splitting the master dataset into per-city resources.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for the dataset split pipeline.
    """

    master_path: Path = Path("data/MasterSet_01.json")
    output_dir: Path = Path("data")
    file_pattern: str = "MasterSet_{city}.json"
    fallback_city: str = "other"

    def output_path(self, city: str) -> Path:
        return self.output_dir / self.file_pattern.format(city=city)


DEFAULT_INGESTION_CONFIG = IngestionConfig()
