"""
Data source factory settings.

One DataSourceFactoryConfig describes one data source. Named data sources
use prefixed settings (``orders.jdbc.url``, ``inventory.jdbc.url``); a single
data source may use the unprefixed ones (``jdbc.url``).
"""

from enum import Enum
from typing import Optional

from forage.config.core import Config, literal
from forage.core.exceptions import ConfigurationError

JDBC_PREFIX_PATTERN = r"(.+)\.jdbc\..*"


class DbKind(Enum):
    """Supported database kinds; the value is the name of the provider to select."""
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    MARIADB = "mariadb"
    ORACLE = "oracle"
    DB2 = "db2"
    MSSQL = "mssql"
    H2 = "h2"
    HSQLDB = "hsqldb"

    @classmethod
    def from_value(cls, value: str, setting: str = "jdbc.db.kind") -> "DbKind":
        try:
            return cls(value.strip().lower())
        except ValueError:
            raise ConfigurationError(
                setting, value,
                f"unsupported database kind, supported kinds are: {', '.join(k.value for k in cls)}"
            )

    @property
    def provider_name(self) -> str:
        return self.value


class DataSourceFactoryConfig(Config):
    """Connection, pool and repository settings of a data source."""

    component_name = "forage-jdbc"

    ENTRIES = {
        "jdbc.url": None,
        "jdbc.username": None,
        "jdbc.password": None,
        "jdbc.db.kind": None,
        "jdbc.pool.initial.size": literal("5"),
        "jdbc.pool.min.size": literal("2"),
        "jdbc.pool.max.size": literal("20"),
        "jdbc.transaction.enabled": literal("false"),
        "jdbc.idempotent.repository.enabled": literal("false"),
        "jdbc.idempotent.repository.table.name": literal("CAMEL_MESSAGEPROCESSED"),
        "jdbc.aggregation.repository.name": None,
    }

    def url(self) -> str:
        return self.require("jdbc.url", "Missing JDBC url")

    def username(self) -> Optional[str]:
        return self.get("jdbc.username")

    def password(self) -> Optional[str]:
        return self.get("jdbc.password")

    def db_kind(self) -> DbKind:
        return DbKind.from_value(self.require("jdbc.db.kind", "Missing database kind"),
                                 self.key("jdbc.db.kind").property_name())

    def pool_initial_size(self) -> int:
        return self.get_int("jdbc.pool.initial.size")

    def pool_min_size(self) -> int:
        return self.get_int("jdbc.pool.min.size")

    def pool_max_size(self) -> int:
        return self.get_int("jdbc.pool.max.size")

    def transaction_enabled(self) -> bool:
        return self.get_bool("jdbc.transaction.enabled")

    def idempotent_repository_enabled(self) -> bool:
        return self.get_bool("jdbc.idempotent.repository.enabled")

    def idempotent_repository_table_name(self) -> str:
        return self.get("jdbc.idempotent.repository.table.name")

    def aggregation_repository_name(self) -> Optional[str]:
        return self.get("jdbc.aggregation.repository.name")
