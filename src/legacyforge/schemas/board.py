"""Document models for board topologies and topology query results."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class BoardVersion(StrEnum):
    """The two shipped board generations."""

    ORIGINAL = "original"
    ADVANCED = "advanced"


class Coordinates(BaseModel):
    x: float
    y: float


class Territory(BaseModel):
    id: str = Field(..., description='Unique kebab-case id (e.g. "north-america-alaska")')
    name: str = Field(..., description="Display name")
    continent: str = Field(..., description="Id of the owning continent")
    adjacentTo: list[str] = Field(..., description="Ids of bordering territories")
    population: float | None = Field(None, description="Population value, if any")
    coordinates: Coordinates | None = Field(None, description="Render position")


class Continent(BaseModel):
    id: str
    name: str
    bonus: int = Field(..., description="Troop bonus for controlling every member territory")
    color: str = Field(..., description="Hex color code for map display")
    territories: list[str] = Field(..., description="Ids of member territories")


class BoardMetadata(BaseModel):
    description: str
    totalTerritories: int
    lastUpdated: str


class Board(BaseModel):
    version: BoardVersion
    territories: list[Territory]
    continents: list[Continent]
    metadata: BoardMetadata


class AdjacencyResult(BaseModel):
    isAdjacent: bool
    fromTerritory: str
    toTerritory: str


class ContinentStats(BaseModel):
    id: str
    name: str
    territoryCount: int
    bonus: int


class BoardStatistics(BaseModel):
    version: BoardVersion
    totalTerritories: int
    totalContinents: int
    continentStats: list[ContinentStats]
    averageAdjacencies: float


class IntegrityReport(BaseModel):
    isValid: bool
    issues: list[str] = Field(default_factory=list)
