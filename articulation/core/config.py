"""
Articulation — Configuration

Centralised settings from environment variables.
All tuneable constants live here — zero magic numbers in other files.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ServerConfig:
    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = int(os.getenv("PORT", "8080"))
    cors_origins: tuple[str, ...] = (
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:8080",
    )


# ---------------------------------------------------------------------------
# Scoring + progress tunables
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ScoringConfig:
    # Weight kept from the stored subscore when a new attempt is blended in
    blend_previous_weight: float = 0.7
    # Weight given to the new attempt's value
    blend_new_weight: float = 0.3
    # Streak lengths (days) that award a one-off streak achievement
    streak_milestones: tuple[int, ...] = (7, 14, 30, 60, 100)
    # Local hour after which an unpracticed day puts a live streak at risk
    streak_risk_hour: int = 18


# ---------------------------------------------------------------------------
# Storage
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class StorageConfig:
    # "memory" | "file"
    backend: str = os.getenv("ARTICULATION_STORE", "memory")
    data_dir: str = os.getenv("ARTICULATION_DATA_DIR", "./data")
    progress_key_prefix: str = "user_progress:"
    attempts_key_prefix: str = "exercise_attempts:"


# ---------------------------------------------------------------------------
# Singletons
# ---------------------------------------------------------------------------

server_cfg = ServerConfig()
scoring_cfg = ScoringConfig()
storage_cfg = StorageConfig()
