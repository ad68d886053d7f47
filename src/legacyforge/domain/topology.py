"""Board topology engine.

Builds lookup indexes over a validated :class:`~legacyforge.schemas.board.Board`
and answers adjacency, movement-legality and integrity queries.

The adjacency index mirrors each territory's ``adjacentTo`` list exactly; it is
never symmetrized.  Asymmetric borders are logged when the topology is built
and callers needing symmetric behaviour must check both directions.
"""

from __future__ import annotations

import logging
from decimal import ROUND_HALF_UP, Decimal

from legacyforge.domain.errors import (
    BoardIntegrityError,
    ContinentNotFoundError,
    TerritoryNotFoundError,
)
from legacyforge.schemas.board import (
    AdjacencyResult,
    Board,
    BoardMetadata,
    BoardStatistics,
    BoardVersion,
    Continent,
    ContinentStats,
    IntegrityReport,
    Territory,
)

logger = logging.getLogger(__name__)


class BoardTopology:
    """Indexed, read-only view over a board document."""

    def __init__(self, board: Board) -> None:
        self._board = board
        self._territories: dict[str, Territory] = {}
        self._continents: dict[str, Continent] = {}
        self._adjacency: dict[str, frozenset[str]] = {}

        for territory in board.territories:
            self._territories[territory.id] = territory
            self._adjacency[territory.id] = frozenset(territory.adjacentTo)

        for continent in board.continents:
            self._continents[continent.id] = continent

        self._check_adjacency_references()

    def _check_adjacency_references(self) -> None:
        """Reject dangling adjacency ids and warn about one-way borders."""

        for territory in self._board.territories:
            for adjacent_id in territory.adjacentTo:
                adjacent = self._territories.get(adjacent_id)
                if adjacent is None:
                    raise BoardIntegrityError(territory.id, adjacent_id)
                if territory.id not in self._adjacency[adjacent_id]:
                    logger.warning(
                        "adjacency not bidirectional: %s -> %s, but %s does not list %s",
                        territory.id,
                        adjacent_id,
                        adjacent_id,
                        territory.id,
                    )

    # --- Lookups ----------------------------------------------------------------

    @property
    def version(self) -> BoardVersion:
        return self._board.version

    @property
    def metadata(self) -> BoardMetadata:
        return self._board.metadata

    def get_territory_by_id(self, territory_id: str) -> Territory | None:
        return self._territories.get(territory_id)

    def get_territory(self, territory_id: str) -> Territory:
        """Return a territory or raise :class:`TerritoryNotFoundError`."""

        territory = self._territories.get(territory_id)
        if territory is None:
            raise TerritoryNotFoundError(territory_id)
        return territory

    def get_continent_by_id(self, continent_id: str) -> Continent | None:
        return self._continents.get(continent_id)

    def get_continent(self, continent_id: str) -> Continent:
        """Return a continent or raise :class:`ContinentNotFoundError`."""

        continent = self._continents.get(continent_id)
        if continent is None:
            raise ContinentNotFoundError(continent_id)
        return continent

    def get_all_territories(self) -> list[Territory]:
        return list(self._board.territories)

    def get_all_continents(self) -> list[Continent]:
        return list(self._board.continents)

    def get_continent_territories(self, continent_id: str) -> list[Territory]:
        continent = self.get_continent(continent_id)
        return [self.get_territory(tid) for tid in continent.territories]

    def get_adjacent_territories(self, territory_id: str) -> list[Territory]:
        territory = self.get_territory(territory_id)
        return [self.get_territory(tid) for tid in territory.adjacentTo]

    def find_territories_by_name(self, search_term: str) -> list[Territory]:
        """Case-insensitive substring match over display names, in document order."""

        needle = search_term.lower()
        return [t for t in self._board.territories if needle in t.name.lower()]

    # --- Movement ---------------------------------------------------------------

    def are_territories_adjacent(self, from_id: str, to_id: str) -> bool:
        """Return whether ``to_id`` is listed as a border of ``from_id``.

        Directional: ``are_territories_adjacent(a, b)`` does not imply
        ``are_territories_adjacent(b, a)`` for asymmetric source data.
        """

        adjacent = self._adjacency.get(from_id)
        if adjacent is None:
            return False
        return to_id in adjacent

    def check_adjacency(self, from_id: str, to_id: str) -> AdjacencyResult:
        return AdjacencyResult(
            isAdjacent=self.are_territories_adjacent(from_id, to_id),
            fromTerritory=from_id,
            toTerritory=to_id,
        )

    def validate_movement(self, from_id: str, to_id: str) -> bool:
        """Movement is legal when both territories exist and share a border."""

        if from_id not in self._territories or to_id not in self._territories:
            return False
        return self.are_territories_adjacent(from_id, to_id)

    # --- Reporting --------------------------------------------------------------

    def get_statistics(self) -> BoardStatistics:
        continent_stats = [
            ContinentStats(
                id=continent.id,
                name=continent.name,
                territoryCount=len(continent.territories),
                bonus=continent.bonus,
            )
            for continent in self._board.continents
        ]
        return BoardStatistics(
            version=self._board.version,
            totalTerritories=len(self._board.territories),
            totalContinents=len(self._board.continents),
            continentStats=continent_stats,
            averageAdjacencies=self._average_adjacencies(),
        )

    def _average_adjacencies(self) -> float:
        territories = self._board.territories
        if not territories:
            return 0.0
        total = sum(len(t.adjacentTo) for t in territories)
        average = Decimal(total) / Decimal(len(territories))
        return float(average.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))

    def verify_integrity(self) -> IntegrityReport:
        """Audit the whole document; never raises."""

        issues: list[str] = []

        isolated = [t for t in self._board.territories if not t.adjacentTo]
        if isolated:
            names = ", ".join(t.name for t in isolated)
            issues.append(f"Found {len(isolated)} isolated territories: {names}")

        for territory in self._board.territories:
            for adjacent_id in territory.adjacentTo:
                if adjacent_id not in self._territories:
                    issues.append(
                        f"Territory {territory.id} references non-existent territory "
                        f"{adjacent_id}"
                    )

        for continent in self._board.continents:
            for territory_id in continent.territories:
                territory = self._territories.get(territory_id)
                if territory is None:
                    issues.append(
                        f"Continent {continent.id} references non-existent territory "
                        f"{territory_id}"
                    )
                elif territory.continent != continent.id:
                    issues.append(
                        f"Territory {territory_id} continent mismatch: in continent list for "
                        f"{continent.id} but territory says {territory.continent}"
                    )

        return IntegrityReport(isValid=not issues, issues=issues)
