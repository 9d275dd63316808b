"""Accessors for the per-app services built in create_app()."""
from __future__ import annotations

from flask import current_app

from models.db_storage import DBStorage
from utils.metrics import HitCounter
from utils.sessions import SessionManager


def get_storage() -> DBStorage:
    return current_app.extensions["storage"]


def get_sessions() -> SessionManager:
    return current_app.extensions["sessions"]


def get_hit_counter() -> HitCounter:
    return current_app.extensions["hit_counter"]
