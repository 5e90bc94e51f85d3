"""Shared FastAPI dependencies."""

from __future__ import annotations

from datetime import date
from functools import lru_cache

from roomgate.infra.reservations_client import ReservationsClient
from roomgate.infra.settings import Settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache(maxsize=1)
def _default_client() -> ReservationsClient:
    return ReservationsClient.from_settings(get_settings())


def get_reservations_client() -> ReservationsClient:
    """Reservation backend client; overridden in tests."""
    return _default_client()


def get_today() -> date:
    """Calendar date used for past-check-in validation; overridden in tests."""
    return date.today()
