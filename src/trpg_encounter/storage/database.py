"""SQLite persistence layer for the encounter tracker.

Provides persistent storage for:
- Campaigns and their sort order
- Adventurers and monsters owned by a campaign
- Encounters and their rosters

Child rows are removed with ON DELETE CASCADE, so deleting a campaign
removes everything it owns and deleting a character removes its roster
memberships.

Storage location: ~/.trpg_encounter/trpg_encounter.db
"""

from __future__ import annotations

import sqlite3
from collections.abc import Iterable, Sequence
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING, Any, Generator, TypeVar
from uuid import UUID

import pydantic

from trpg_encounter.core.constants import UNNAMED_CAMPAIGN
from trpg_encounter.core.exceptions import StorageError, ValidationError
from trpg_encounter.core.logging import get_logger
from trpg_encounter.models.campaign import Campaign, Encounter
from trpg_encounter.models.characters import Adventurer, CharacterBase, Monster
from trpg_encounter.models.ordering import move_items, renumber


if TYPE_CHECKING:
    from trpg_encounter.core.config import StorageSettings

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


# =============================================================================
# Schema
# =============================================================================

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS schema_version (
        version INTEGER PRIMARY KEY
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS campaigns (
        id TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        created_at TEXT NOT NULL,
        sort_order INTEGER NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS adventurers (
        id TEXT PRIMARY KEY,
        campaign_id TEXT NOT NULL REFERENCES campaigns(id) ON DELETE CASCADE,
        name TEXT NOT NULL,
        initiative INTEGER NOT NULL,
        max_hp INTEGER NOT NULL,
        current_hp INTEGER NOT NULL,
        armor_class INTEGER NOT NULL,
        portrait TEXT NOT NULL,
        sort_order INTEGER NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS monsters (
        id TEXT PRIMARY KEY,
        campaign_id TEXT NOT NULL REFERENCES campaigns(id) ON DELETE CASCADE,
        name TEXT NOT NULL,
        initiative INTEGER NOT NULL,
        max_hp INTEGER NOT NULL,
        current_hp INTEGER NOT NULL,
        armor_class INTEGER NOT NULL,
        sort_order INTEGER NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS encounters (
        id TEXT PRIMARY KEY,
        campaign_id TEXT NOT NULL REFERENCES campaigns(id) ON DELETE CASCADE,
        name TEXT NOT NULL,
        sort_order INTEGER NOT NULL DEFAULT 0
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS encounter_adventurers (
        encounter_id TEXT NOT NULL REFERENCES encounters(id) ON DELETE CASCADE,
        adventurer_id TEXT NOT NULL REFERENCES adventurers(id) ON DELETE CASCADE,
        position INTEGER NOT NULL,
        PRIMARY KEY (encounter_id, adventurer_id)
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS encounter_monsters (
        encounter_id TEXT NOT NULL REFERENCES encounters(id) ON DELETE CASCADE,
        monster_id TEXT NOT NULL REFERENCES monsters(id) ON DELETE CASCADE,
        position INTEGER NOT NULL,
        PRIMARY KEY (encounter_id, monster_id)
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_adventurers_campaign ON adventurers(campaign_id)",
    "CREATE INDEX IF NOT EXISTS idx_monsters_campaign ON monsters(campaign_id)",
    "CREATE INDEX IF NOT EXISTS idx_encounters_campaign ON encounters(campaign_id)",
)

_UPSERT_CAMPAIGN = """
    INSERT INTO campaigns (id, name, created_at, sort_order)
    VALUES (?, ?, ?, ?)
    ON CONFLICT(id) DO UPDATE SET
        name = excluded.name,
        created_at = excluded.created_at,
        sort_order = excluded.sort_order
"""

_UPSERT_ADVENTURER = """
    INSERT INTO adventurers
    (id, campaign_id, name, initiative, max_hp, current_hp, armor_class, portrait, sort_order)
    VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
    ON CONFLICT(id) DO UPDATE SET
        campaign_id = excluded.campaign_id,
        name = excluded.name,
        initiative = excluded.initiative,
        max_hp = excluded.max_hp,
        current_hp = excluded.current_hp,
        armor_class = excluded.armor_class,
        portrait = excluded.portrait,
        sort_order = excluded.sort_order
"""

_UPSERT_MONSTER = """
    INSERT INTO monsters
    (id, campaign_id, name, initiative, max_hp, current_hp, armor_class, sort_order)
    VALUES (?, ?, ?, ?, ?, ?, ?, ?)
    ON CONFLICT(id) DO UPDATE SET
        campaign_id = excluded.campaign_id,
        name = excluded.name,
        initiative = excluded.initiative,
        max_hp = excluded.max_hp,
        current_hp = excluded.current_hp,
        armor_class = excluded.armor_class,
        sort_order = excluded.sort_order
"""

_UPSERT_ENCOUNTER = """
    INSERT INTO encounters (id, campaign_id, name, sort_order)
    VALUES (?, ?, ?, ?)
    ON CONFLICT(id) DO UPDATE SET
        campaign_id = excluded.campaign_id,
        name = excluded.name,
        sort_order = excluded.sort_order
"""


# =============================================================================
# Row Conversion
# =============================================================================


def _to_model(
    model: type[ModelT],
    row: sqlite3.Row,
    record_type: str,
    **extra: Any,
) -> ModelT:
    """Build a model from a row, reporting rows that cannot be loaded.

    Stored values pass through the model's clamping validators again, so a
    row edited outside the application still loads as a valid entity.

    Raises:
        ValidationError: If the row cannot be turned into ``model``.
    """
    data = {**dict(row), **extra}
    try:
        return model.model_validate(data)
    except pydantic.ValidationError as exc:
        first = exc.errors()[0]
        raise ValidationError(
            f"Stored {record_type} could not be loaded",
            field_name=".".join(str(part) for part in first["loc"]),
            details={"record_type": record_type, "record_id": data.get("id")},
        ) from exc


def _character_params(character: CharacterBase, campaign_id: UUID) -> tuple[Any, ...]:
    return (
        str(character.id),
        str(campaign_id),
        character.name,
        character.initiative,
        character.max_hp,
        character.current_hp,
        character.armor_class,
    )


# =============================================================================
# Database Class
# =============================================================================


class Database:
    """SQLite database for campaign persistence.

    Each public method opens its own connection and commits on success.
    SQLite failures surface as StorageError.

    Example:
        >>> db = Database(tmp_path / "test.db")
        >>> campaign = db.add_campaign()
        >>> campaign.name
        'New Campaign 1'
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str | Path | None = None) -> None:
        """Initialize database.

        Args:
            db_path: Path to database file. If None, uses default location.

        Raises:
            StorageError: If the database file or schema cannot be created.
        """
        self.db_path = self._get_default_path() if db_path is None else Path(db_path)

        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(
                f"Cannot create database directory: {exc}",
                details={"path": str(self.db_path)},
            ) from exc

        self._init_schema()
        logger.info("Database initialized", path=str(self.db_path))

    @classmethod
    def from_settings(cls, settings: StorageSettings) -> "Database":
        return cls(settings.database_path)

    @staticmethod
    def _get_default_path() -> Path:
        """Get default database path."""
        return Path.home() / ".trpg_encounter" / "trpg_encounter.db"

    @contextmanager
    def _get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection with foreign keys enforced."""
        try:
            conn = sqlite3.connect(str(self.db_path))
        except sqlite3.Error as exc:
            raise StorageError(
                f"Cannot open database: {exc}",
                details={"path": str(self.db_path)},
            ) from exc

        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA foreign_keys = ON")
            yield conn
            conn.commit()
        except sqlite3.Error as exc:
            conn.rollback()
            raise StorageError(f"Database operation failed: {exc}") from exc
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            for statement in _SCHEMA:
                conn.execute(statement)
            conn.execute(
                "INSERT OR REPLACE INTO schema_version (version) VALUES (?)",
                (self.SCHEMA_VERSION,),
            )

    # =========================================================================
    # Campaign Operations
    # =========================================================================

    def save_campaign(self, campaign: Campaign) -> Campaign:
        """Save a campaign and everything it owns.

        The stored characters, encounters and rosters are replaced by the
        ones on ``campaign``.

        Args:
            campaign: Campaign to save.

        Returns:
            The same campaign.
        """
        with self._get_connection() as conn:
            conn.execute(
                _UPSERT_CAMPAIGN,
                (str(campaign.id), campaign.name, campaign.created_at.isoformat(), campaign.sort_order),
            )
            for table in ("adventurers", "monsters", "encounters"):
                conn.execute(f"DELETE FROM {table} WHERE campaign_id = ?", (str(campaign.id),))

            for adventurer in campaign.adventurers:
                self._write_adventurer(conn, campaign.id, adventurer)
            for monster in campaign.monsters:
                self._write_monster(conn, campaign.id, monster)
            for encounter in campaign.encounters:
                encounter.campaign_id = campaign.id
                self._write_encounter(
                    conn,
                    encounter,
                    adventurer_ids=[a.id for a in campaign.roster_adventurers(encounter)],
                    monster_ids=[m.id for m in campaign.roster_monsters(encounter)],
                )

        logger.info(
            "Saved campaign",
            campaign=campaign.name,
            campaign_id=str(campaign.id),
            adventurers=len(campaign.adventurers),
            monsters=len(campaign.monsters),
            encounters=len(campaign.encounters),
        )
        return campaign

    def get_campaign(self, campaign_id: UUID) -> Campaign | None:
        """Load a campaign with its characters and encounters.

        Args:
            campaign_id: Campaign ID.

        Returns:
            The campaign if found, None otherwise.
        """
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT id, name, created_at, sort_order FROM campaigns WHERE id = ?",
                (str(campaign_id),),
            ).fetchone()
            if row is None:
                return None
            return self._load_campaign(conn, row)

    def get_all_campaigns(self) -> list[Campaign]:
        """Get all campaigns ordered by sort order.

        Returns:
            List of fully loaded campaigns.
        """
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT id, name, created_at, sort_order FROM campaigns "
                "ORDER BY sort_order, created_at"
            ).fetchall()
            return [self._load_campaign(conn, row) for row in rows]

    def delete_campaign(self, campaign_id: UUID) -> bool:
        """Delete a campaign and, by cascade, everything it owns.

        Returns:
            True if deleted, False if not found.
        """
        deleted = self._delete("campaigns", campaign_id)
        if deleted:
            logger.info("Deleted campaign", campaign_id=str(campaign_id))
        return deleted

    def add_campaign(self, name: str | None = None) -> Campaign:
        """Create a campaign at the end of the campaign list.

        Args:
            name: Campaign name. Defaults to 'New Campaign {n+1}'.

        Returns:
            The stored campaign.
        """
        with self._get_connection() as conn:
            count, last_order = conn.execute(
                "SELECT COUNT(*), MAX(sort_order) FROM campaigns"
            ).fetchone()
            campaign = Campaign(
                name=name if name and name.strip() else f"{UNNAMED_CAMPAIGN} {count + 1}",
                sort_order=0 if last_order is None else last_order + 1,
            )
            conn.execute(
                _UPSERT_CAMPAIGN,
                (str(campaign.id), campaign.name, campaign.created_at.isoformat(), campaign.sort_order),
            )

        logger.info("Added campaign", campaign=campaign.name, sort_order=campaign.sort_order)
        return campaign

    def duplicate_campaign(self, campaign_id: UUID) -> Campaign | None:
        """Copy a stored campaign and append the copy to the campaign list.

        Args:
            campaign_id: Campaign to copy.

        Returns:
            The stored copy, or None if the campaign was not found.
        """
        original = self.get_campaign(campaign_id)
        if original is None:
            return None

        copy = original.duplicate()
        with self._get_connection() as conn:
            (last_order,) = conn.execute("SELECT MAX(sort_order) FROM campaigns").fetchone()
        copy.sort_order = last_order + 1
        self.save_campaign(copy)

        logger.info("Duplicated campaign", campaign=original.name, copy_id=str(copy.id))
        return copy

    def move_campaigns(self, source: Iterable[int], destination: int) -> list[Campaign]:
        """Move campaigns within the sorted list and store dense sort orders.

        Args:
            source: Positions being moved, in the current order.
            destination: Insertion position in the current order.

        Returns:
            Campaigns in their new order.
        """
        campaigns = move_items(self.get_all_campaigns(), source, destination)
        renumber(campaigns)
        self._write_campaign_order(campaigns)
        return campaigns

    def reorder_campaigns(self, campaign_ids: Sequence[UUID]) -> None:
        """Store the given order as sort orders 0..n-1.

        Campaigns missing from ``campaign_ids`` keep their relative order
        after the listed ones.
        """
        by_id = {c.id: c for c in self.get_all_campaigns()}
        ordered = [by_id.pop(cid) for cid in campaign_ids if cid in by_id]
        ordered.extend(by_id.values())
        renumber(ordered)
        self._write_campaign_order(ordered)

    def _write_campaign_order(self, campaigns: Sequence[Campaign]) -> None:
        with self._get_connection() as conn:
            conn.executemany(
                "UPDATE campaigns SET sort_order = ? WHERE id = ?",
                [(c.sort_order, str(c.id)) for c in campaigns],
            )
        logger.debug("Campaign order stored", count=len(campaigns))

    def _load_campaign(self, conn: sqlite3.Connection, row: sqlite3.Row) -> Campaign:
        campaign_id = row["id"]
        adventurers = [
            _to_model(Adventurer, r, "adventurer")
            for r in conn.execute(
                "SELECT * FROM adventurers WHERE campaign_id = ? ORDER BY sort_order",
                (campaign_id,),
            ).fetchall()
        ]
        monsters = [
            _to_model(Monster, r, "monster")
            for r in conn.execute(
                "SELECT * FROM monsters WHERE campaign_id = ? ORDER BY sort_order",
                (campaign_id,),
            ).fetchall()
        ]
        encounters = [
            self._load_encounter(conn, r)
            for r in conn.execute(
                "SELECT * FROM encounters WHERE campaign_id = ? ORDER BY sort_order",
                (campaign_id,),
            ).fetchall()
        ]
        return _to_model(
            Campaign,
            row,
            "campaign",
            adventurers=adventurers,
            monsters=monsters,
            encounters=encounters,
        )

    # =========================================================================
    # Character Operations
    # =========================================================================

    def save_adventurer(self, campaign_id: UUID, adventurer: Adventurer) -> Adventurer:
        """Insert or update an adventurer of a stored campaign."""
        with self._get_connection() as conn:
            self._write_adventurer(conn, campaign_id, adventurer)
        logger.info("Saved adventurer", adventurer=adventurer.name, campaign_id=str(campaign_id))
        return adventurer

    def get_adventurer(self, adventurer_id: UUID) -> Adventurer | None:
        row = self._fetch_row("adventurers", adventurer_id)
        return _to_model(Adventurer, row, "adventurer") if row else None

    def delete_adventurer(self, adventurer_id: UUID) -> bool:
        """Delete an adventurer and its roster memberships."""
        deleted = self._delete("adventurers", adventurer_id)
        if deleted:
            logger.info("Deleted adventurer", adventurer_id=str(adventurer_id))
        return deleted

    def save_monster(self, campaign_id: UUID, monster: Monster) -> Monster:
        """Insert or update a monster of a stored campaign."""
        with self._get_connection() as conn:
            self._write_monster(conn, campaign_id, monster)
        logger.info("Saved monster", monster=monster.name, campaign_id=str(campaign_id))
        return monster

    def get_monster(self, monster_id: UUID) -> Monster | None:
        row = self._fetch_row("monsters", monster_id)
        return _to_model(Monster, row, "monster") if row else None

    def delete_monster(self, monster_id: UUID) -> bool:
        """Delete a monster and its roster memberships."""
        deleted = self._delete("monsters", monster_id)
        if deleted:
            logger.info("Deleted monster", monster_id=str(monster_id))
        return deleted

    @staticmethod
    def _write_adventurer(conn: sqlite3.Connection, campaign_id: UUID, adventurer: Adventurer) -> None:
        conn.execute(
            _UPSERT_ADVENTURER,
            (*_character_params(adventurer, campaign_id), adventurer.portrait, adventurer.sort_order),
        )

    @staticmethod
    def _write_monster(conn: sqlite3.Connection, campaign_id: UUID, monster: Monster) -> None:
        conn.execute(_UPSERT_MONSTER, (*_character_params(monster, campaign_id), monster.sort_order))

    # =========================================================================
    # Encounter Operations
    # =========================================================================

    def save_encounter(self, encounter: Encounter) -> Encounter:
        """Insert or update an encounter and replace its roster.

        Raises:
            StorageError: If the encounter has no campaign, or its roster
                names characters that are not stored.
        """
        if encounter.campaign_id is None:
            raise StorageError(
                "Encounter does not belong to a campaign",
                record_type="encounter",
                record_id=str(encounter.id),
            )
        with self._get_connection() as conn:
            self._write_encounter(
                conn,
                encounter,
                adventurer_ids=encounter.adventurer_ids,
                monster_ids=encounter.monster_ids,
            )
        logger.info("Saved encounter", encounter=encounter.name, encounter_id=str(encounter.id))
        return encounter

    def get_encounter(self, encounter_id: UUID) -> Encounter | None:
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM encounters WHERE id = ?", (str(encounter_id),)
            ).fetchone()
            return self._load_encounter(conn, row) if row else None

    def delete_encounter(self, encounter_id: UUID) -> bool:
        deleted = self._delete("encounters", encounter_id)
        if deleted:
            logger.info("Deleted encounter", encounter_id=str(encounter_id))
        return deleted

    @staticmethod
    def _write_encounter(
        conn: sqlite3.Connection,
        encounter: Encounter,
        *,
        adventurer_ids: Sequence[UUID],
        monster_ids: Sequence[UUID],
    ) -> None:
        eid = str(encounter.id)
        conn.execute(
            _UPSERT_ENCOUNTER,
            (eid, str(encounter.campaign_id), encounter.name, encounter.sort_order),
        )
        conn.execute("DELETE FROM encounter_adventurers WHERE encounter_id = ?", (eid,))
        conn.execute("DELETE FROM encounter_monsters WHERE encounter_id = ?", (eid,))
        conn.executemany(
            "INSERT INTO encounter_adventurers (encounter_id, adventurer_id, position) VALUES (?, ?, ?)",
            [(eid, str(uid), pos) for pos, uid in enumerate(adventurer_ids)],
        )
        conn.executemany(
            "INSERT INTO encounter_monsters (encounter_id, monster_id, position) VALUES (?, ?, ?)",
            [(eid, str(uid), pos) for pos, uid in enumerate(monster_ids)],
        )

    @staticmethod
    def _load_encounter(conn: sqlite3.Connection, row: sqlite3.Row) -> Encounter:
        eid = row["id"]
        adventurer_ids = [
            r[0]
            for r in conn.execute(
                "SELECT adventurer_id FROM encounter_adventurers WHERE encounter_id = ? ORDER BY position",
                (eid,),
            ).fetchall()
        ]
        monster_ids = [
            r[0]
            for r in conn.execute(
                "SELECT monster_id FROM encounter_monsters WHERE encounter_id = ? ORDER BY position",
                (eid,),
            ).fetchall()
        ]
        return _to_model(
            Encounter,
            row,
            "encounter",
            adventurer_ids=adventurer_ids,
            monster_ids=monster_ids,
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    def _fetch_row(self, table: str, record_id: UUID) -> sqlite3.Row | None:
        with self._get_connection() as conn:
            return conn.execute(f"SELECT * FROM {table} WHERE id = ?", (str(record_id),)).fetchone()

    def _delete(self, table: str, record_id: UUID) -> bool:
        with self._get_connection() as conn:
            cursor = conn.execute(f"DELETE FROM {table} WHERE id = ?", (str(record_id),))
            return cursor.rowcount > 0

    def get_campaign_count(self) -> int:
        """Get total number of stored campaigns."""
        with self._get_connection() as conn:
            return conn.execute("SELECT COUNT(*) FROM campaigns").fetchone()[0]


__all__ = [
    "Database",
]
