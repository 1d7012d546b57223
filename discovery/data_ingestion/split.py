"""
Split the combined master dataset into per-city resources.

Usage:
    python -m discovery.data_ingestion.split
"""
from __future__ import annotations

import json
from pathlib import Path

import pandas as pd

from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig

# District or city name as scraped -> metro identifier served by the engine
METRO_BY_DISTRICT: dict[str, str] = {
    "Barcelona": "barcelona",
    "Tsim Sha Tsui": "hongkong",
    "Central": "hongkong",
    "Yau Ma Tei": "hongkong",
    "Sai Ying Pun": "hongkong",
    "Wan Chai": "hongkong",
    "Causeway Bay": "hongkong",
    "Sheung Wan": "hongkong",
    "Tai Mei Tuk Tsuen": "hongkong",
    "Mei Foo Sun Chuen": "hongkong",
    "Sham Shui Po": "hongkong",
    "Mong Kok": "hongkong",
    "Tin Hau": "hongkong",
    "Ma On Shan": "hongkong",
    "Mumbai": "mumbai",
    "Pali, Mumbai": "mumbai",
    "Navi Mumbai": "mumbai",
    "Singapore": "singapore",
    "Bang Rak": "bangkok",
    "Ratchathewi": "bangkok",
    "Watthana": "bangkok",
    "Samphanthawong": "bangkok",
    "Khlong Toei": "bangkok",
    "Pathum Wan": "bangkok",
    "Sathon": "bangkok",
    "Thon Buri": "bangkok",
    "Yan Nawa": "bangkok",
    "Phaya Thai": "bangkok",
    "Phra Nakhon": "bangkok",
    "Lak Si": "bangkok",
    "CuauhtAcmoc, Mexico City": "mexicocity",
    "Miguel Hidalgo, Mexico City": "mexicocity",
    "Venustiano Carranza, Mexico City": "mexicocity",
    "Benito Juarez, Mexico City": "mexicocity",
    "CuauhtAcmoc": "mexicocity",
    "CuauhtAcmoc, Del. Cuauhtemoc": "mexicocity",
    "London": "london",
    "Toshima City": "tokyo",
    "Shinjuku City": "tokyo",
    "Chiyoda City": "tokyo",
    "Shibuya": "tokyo",
    "Chuo City": "tokyo",
    "Minato City": "tokyo",
    "Meguro City": "tokyo",
    "Taito City": "tokyo",
    "Paris": "paris",
    "New York": "newyork",
    "Brooklyn": "newyork",
    "Astoria": "newyork",
}


def assign_metro(df: pd.DataFrame, fallback: str) -> pd.Series:
    if "city" not in df.columns:
        return pd.Series(fallback, index=df.index, dtype=object)
    return df["city"].map(METRO_BY_DISTRICT).fillna(fallback)


def run_split(config: IngestionConfig = DEFAULT_INGESTION_CONFIG) -> dict[str, int]:
    """
    Execute the split pipeline.

    Steps:
    - Read the master JSON array.
    - Tag each row with its metro city.
    - Write one JSON array per metro, preserving row order and content.
    """
    config.output_dir.mkdir(parents=True, exist_ok=True)

    records: list[dict] = json.loads(config.master_path.read_text(encoding="utf-8"))

    # Only the city column goes through pandas; rows are written back as
    # decoded so absent keys and integer fields stay as they were
    df = pd.DataFrame({"city": [row.get("city") for row in records]}, dtype=object)
    metro = assign_metro(df, config.fallback_city)

    counts: dict[str, int] = {}
    for city, group in df.groupby(metro, sort=True):
        output_path: Path = config.output_path(city)
        rows = [records[i] for i in group.index]
        output_path.write_text(json.dumps(rows, indent=2, ensure_ascii=False), encoding="utf-8")
        counts[city] = len(rows)
    return counts


if __name__ == "__main__":
    result = run_split()
    for city, count in result.items():
        print(f"Created {DEFAULT_INGESTION_CONFIG.output_path(city)}: {count} locations")
    print(f"Split complete. {sum(result.values())} locations in {len(result)} city files.")
