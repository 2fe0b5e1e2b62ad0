"""
PostgreSQL repository adapter - Implements RegistryRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Storage Layout:
---------------
- registry_meta:   single row (id = 1) with administrative owner and counters
- domain_records:  one row per claimed domain ID, including the claim flag
                   and the identity recorded in the name -> owner table
- holding_counts:  identity -> holding count (may be negative)

Every name in the name -> owner table belongs to exactly one record, and
every claim flag belongs to an existing record, so both tables fold into
domain_records without loss.

save() upserts the meta row plus whichever record and holder rows the
snapshot carries, inside one transaction. Callers pass an excerpt holding
only the rows an operation touched, so a save costs the same however many
domains exist. Name, offer fields and claimed_by are fixed at claim time and
are never rewritten by an upsert.
"""

import logging
from pathlib import Path

from psycopg_pool import ConnectionPool

from src.domain.ports import OfferState
from src.domain.records import DomainRecord, RegistrySnapshot

logger = logging.getLogger(__name__)


class PostgresRegistryRepository:
    """
    Implements RegistryRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, pool: ConnectionPool) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
        """
        self._pool = pool

    def load(self) -> RegistrySnapshot | None:
        """
        Load the saved registry state.

        Returns:
            RegistrySnapshot, or None if the registry has never been saved
        """
        meta_sql = """
            SELECT administrative_owner, next_id, total_claimed
            FROM registry_meta
            WHERE id = 1
        """
        records_sql = """
            SELECT domain_id, name, offer_state, offer_price, holder, claimed_by, claimed
            FROM domain_records
            ORDER BY domain_id
        """
        counts_sql = "SELECT identity, count FROM holding_counts"

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(meta_sql)
            meta = cursor.fetchone()
            if meta is None:
                return None

            snapshot = RegistrySnapshot(
                administrative_owner=meta[0],
                next_id=meta[1],
                total_claimed=meta[2],
            )

            cursor.execute(records_sql)
            for domain_id, name, offer_state, offer_price, holder, claimed_by, claimed in cursor:
                snapshot.records[domain_id] = DomainRecord(
                    name=name,
                    offer_state=OfferState(offer_state),
                    # NUMERIC comes back as Decimal
                    offer_price=int(offer_price),
                    holder=holder,
                )
                snapshot.name_owner[name] = claimed_by
                snapshot.claimed[domain_id] = claimed

            cursor.execute(counts_sql)
            for identity, count in cursor:
                snapshot.holding_count[identity] = count

        logger.info(
            "Loaded registry state: %d record(s), next id %d",
            len(snapshot.records),
            snapshot.next_id,
        )
        return snapshot

    def save(self, snapshot: RegistrySnapshot) -> None:
        """
        Upsert the counters and every row carried by the snapshot.

        Rows absent from the snapshot are left untouched.

        Args:
            snapshot: Full registry state or an excerpt of touched rows
        """
        meta_sql = """
            INSERT INTO registry_meta (id, administrative_owner, next_id, total_claimed)
            VALUES (1, %s, %s, %s)
            ON CONFLICT (id) DO UPDATE
            SET administrative_owner = EXCLUDED.administrative_owner,
                next_id = EXCLUDED.next_id,
                total_claimed = EXCLUDED.total_claimed
        """
        record_sql = """
            INSERT INTO domain_records
                (domain_id, name, offer_state, offer_price, holder, claimed_by, claimed)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            ON CONFLICT (domain_id) DO UPDATE
            SET holder = EXCLUDED.holder,
                claimed = EXCLUDED.claimed
        """
        count_sql = """
            INSERT INTO holding_counts (identity, count)
            VALUES (%s, %s)
            ON CONFLICT (identity) DO UPDATE
            SET count = EXCLUDED.count
        """

        record_rows = [
            (
                domain_id,
                record.name,
                record.offer_state.value,
                record.offer_price,
                record.holder,
                snapshot.name_owner.get(record.name, record.holder),
                snapshot.claimed.get(domain_id, False),
            )
            for domain_id, record in sorted(snapshot.records.items())
        ]
        count_rows = list(snapshot.holding_count.items())

        with self._pool.connection() as conn, conn.cursor() as cursor:
            cursor.execute(
                meta_sql,
                (snapshot.administrative_owner, snapshot.next_id, snapshot.total_claimed),
            )
            if record_rows:
                cursor.executemany(record_sql, record_rows)
            if count_rows:
                cursor.executemany(count_sql, count_rows)
            conn.commit()


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            sql_content = sql_file.read_text()

            with pool.connection() as conn:
                conn.execute(sql_content)

            logger.info("Migration complete: %s", sql_file.name)
        except Exception as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
