"""Configuration for the scenario core."""

from __future__ import annotations

import os
from datetime import timedelta
from enum import Enum
from typing import Self

import attrs
from dotenv import load_dotenv


class StoreBackend(str, Enum):
    """Which document store backs the repository."""

    MEMORY = "memory"
    DUCKDB = "duckdb"


@attrs.frozen
class LiveParallelConfig:
    """Settings for assembling the scenario core.

    Every field has a default suitable for local development.
    """

    collection: str = "scenarios"
    """Name of the document collection holding scenarios."""

    store_backend: StoreBackend = attrs.field(default=StoreBackend.MEMORY, converter=StoreBackend)
    """Document store to use."""

    duckdb_path: str = ":memory:"
    """Database file for the DuckDB store; ':memory:' keeps it in process."""

    generation_delay: timedelta = timedelta(seconds=2)
    """Simulated latency of the dummy generation engine."""

    @classmethod
    def from_env(cls, dotenv: bool = True) -> Self:
        """Read settings from LIVEPARALLEL_* environment variables.

        Args:
            dotenv: Load a .env file into the environment first

        Unset variables keep their defaults.
        """
        if dotenv:
            load_dotenv()
        defaults = cls()
        delay = os.getenv("LIVEPARALLEL_GENERATION_DELAY_SECONDS")
        return cls(
            collection=os.getenv("LIVEPARALLEL_COLLECTION", defaults.collection),
            store_backend=os.getenv("LIVEPARALLEL_STORE_BACKEND", defaults.store_backend),
            duckdb_path=os.getenv("LIVEPARALLEL_DUCKDB_PATH", defaults.duckdb_path),
            generation_delay=timedelta(seconds=float(delay)) if delay else defaults.generation_delay,
        )
