"""
Domain models for Hero Queries.

Row models aligned with `db/init.sql`. They double as psycopg row factories
(`psycopg.rows.class_row`), so field names match the column names.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class Race(BaseModel):
    """
    Representation of a single row in the `race` table.
    """

    race_id: int = Field(..., description="Primary key.")
    race_name: str = Field(..., description="Display name of the race.")

    model_config = {
        "frozen": True,
    }

    def format(self) -> str:
        return f"{self.race_id},{self.race_name}"


class Hero(BaseModel):
    """
    Representation of a single row in the `hero` table.
    """

    hero_id: int = Field(..., description="Primary key.")
    hero_name: str = Field(..., description="Display name of the hero.")
    race_id: Optional[int] = Field(None, description="Nullable reference to race.")
    location_id: Optional[int] = Field(None, description="Nullable reference to location.")

    model_config = {
        "frozen": True,
    }


__all__ = ["Hero", "Race"]
