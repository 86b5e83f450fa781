"""Schema management for SQL-backed storefront deployments.

The in-memory provider needs none of this; both functions skip it.
"""

from protean.domain import Domain
from sqlalchemy import create_engine

SQL_PROVIDERS = ("sqlite", "postgresql")


def _sql_providers(domain: Domain):
    for _, provider in domain.providers.items():
        if provider.conn_info["provider"] in SQL_PROVIDERS:
            yield provider


def _persisted_elements(domain: Domain):
    registry = domain.registry
    for records in (registry.aggregates, registry.entities):
        for _, record in records.items():
            yield record.cls


def setup_db(domain: Domain) -> None:
    """Create the tables of every aggregate and entity stored in a SQL database."""
    with domain.domain_context():
        for provider in _sql_providers(domain):
            # Touching a repository's DAO registers its table on the provider's metadata
            for element in _persisted_elements(domain):
                if element.meta_.provider == provider.name:
                    domain.repository_for(element)._dao  # noqa: B018

            provider._metadata.create_all(create_engine(provider.conn_info["database_uri"]))


def drop_db(domain: Domain) -> None:
    with domain.domain_context():
        for provider in _sql_providers(domain):
            provider._metadata.drop_all(create_engine(provider.conn_info["database_uri"]))
