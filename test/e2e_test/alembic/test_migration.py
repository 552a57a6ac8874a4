"""
End-to-end tests for the Alembic migration scripts.

The initial revision is executed against a throwaway SQLite database through
Alembic's migration context, then the resulting schema is compared with the
ORM metadata and the seeded settings are read back.
"""

import importlib.util
import json
from pathlib import Path
from types import ModuleType

import pytest
import sqlalchemy as sa
from alembic.migration import MigrationContext
from alembic.operations import Operations
from sqlalchemy import inspect

import teestore.core.database.entities  # noqa: F401
from teestore.core.database.base import Base

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent
VERSIONS_DIR = PROJECT_ROOT / "alembic" / "versions"

REQUIRED_TABLES = [
    "users",
    "categories",
    "products",
    "designs",
    "cart_items",
    "wishlist_items",
    "orders",
    "order_items",
    "coupons",
    "coupon_usages",
    "reviews",
    "reward_transactions",
    "settings",
]


def _load_revision() -> ModuleType:
    path = next(VERSIONS_DIR.glob("*_initial_schema_and_seed_data.py"))
    spec = importlib.util.spec_from_file_location("initial_schema", path)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _run(engine: sa.Engine, step: str) -> None:
    revision = _load_revision()
    with engine.begin() as conn:
        context = MigrationContext.configure(conn)
        with Operations.context(context):
            getattr(revision, step)()


@pytest.fixture
def engine(tmp_path):
    engine = sa.create_engine(f"sqlite:///{tmp_path / 'migration.db'}")
    yield engine
    engine.dispose()


@pytest.fixture
def migrated(engine):
    _run(engine, "upgrade")
    return engine


class TestRevisionMetadata:
    def test_initial_revision(self):
        revision = _load_revision()

        assert revision.revision == "20260301_000000"
        assert revision.down_revision is None


class TestMigrationExecution:
    """Test actual migration execution against a database."""

    def test_creates_all_tables(self, migrated):
        tables = inspect(migrated).get_table_names()

        for table in REQUIRED_TABLES:
            assert table in tables, f"Table {table} not found in database"

    def test_tables_match_orm_metadata(self, migrated):
        inspector = inspect(migrated)

        assert set(inspector.get_table_names()) == set(Base.metadata.tables)
        for name, table in Base.metadata.tables.items():
            columns = {column["name"] for column in inspector.get_columns(name)}
            assert columns == {column.name for column in table.columns}, name

    def test_unique_indexes(self, migrated):
        inspector = inspect(migrated)

        unique = {
            index["name"]
            for table in ("users", "categories", "designs", "coupons", "settings")
            for index in inspector.get_indexes(table)
            if index["unique"]
        }
        assert {
            "ix_users_email",
            "ix_categories_slug",
            "ix_designs_slug",
            "ix_coupons_code",
            "ix_settings_key",
        } <= unique

    def test_seeds_default_settings(self, migrated):
        with migrated.connect() as conn:
            rows = dict(conn.execute(sa.text("SELECT key, value FROM settings")).all())

        assert set(rows) == {"quantity_discounts", "free_shipping", "loyalty_multipliers", "reviews_enabled"}
        free_shipping = json.loads(rows["free_shipping"])
        assert free_shipping["threshold"] == 999
        assert [tier["min_quantity"] for tier in json.loads(rows["quantity_discounts"])["tiers"]] == [3, 5, 8]
        assert json.loads(rows["reviews_enabled"]) is True

    def test_downgrade_drops_everything(self, migrated):
        _run(migrated, "downgrade")

        assert inspect(migrated).get_table_names() == []

    def test_downgrade_then_upgrade(self, migrated):
        _run(migrated, "downgrade")
        _run(migrated, "upgrade")

        assert set(REQUIRED_TABLES) <= set(inspect(migrated).get_table_names())
