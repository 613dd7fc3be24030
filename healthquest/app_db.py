# -*- coding: utf-8 -*-
"""App database (users / food logs / insights) — SQLite helpers."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


def connect(db_path: Path) -> sqlite3.Connection:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path), check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON;")
    return conn


def init_app_db(db_path: Path) -> None:
    conn = connect(db_path)
    try:
        cur = conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS users (
                id TEXT PRIMARY KEY,
                email TEXT NOT NULL UNIQUE,
                password_hash TEXT NOT NULL,
                profile_name TEXT NOT NULL,
                avatar TEXT NOT NULL,
                full_name TEXT NOT NULL DEFAULT '',
                age INTEGER,
                gender TEXT NOT NULL DEFAULT '',
                height_cm REAL,
                weight_kg REAL,
                primary_goal TEXT,
                activity_level TEXT,
                average_sleep REAL,
                water_intake REAL,
                meal_frequency TEXT,
                diet_type TEXT,
                allergies_json TEXT NOT NULL DEFAULT '[]',
                dietary_notes TEXT NOT NULL DEFAULT '',
                username TEXT UNIQUE,
                target_weight REAL,
                bmi REAL,
                start_date TEXT NOT NULL,
                last_login TEXT NOT NULL,
                created_at TEXT NOT NULL
            );
            """
        )
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS food_logs (
                id TEXT PRIMARY KEY,
                user_id TEXT NOT NULL,
                date TEXT NOT NULL,
                calories REAL NOT NULL DEFAULT 0,
                protein REAL NOT NULL DEFAULT 0,
                carbs REAL NOT NULL DEFAULT 0,
                fat REAL NOT NULL DEFAULT 0,
                meals_json TEXT NOT NULL DEFAULT '[]',
                created_at TEXT NOT NULL,
                FOREIGN KEY(user_id) REFERENCES users(id) ON DELETE CASCADE
            );
            """
        )
        cur.execute("CREATE INDEX IF NOT EXISTS idx_food_logs_user_date ON food_logs(user_id, date);")
        cur.execute("CREATE INDEX IF NOT EXISTS idx_food_logs_date ON food_logs(date);")
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS insights (
                id TEXT PRIMARY KEY,
                user_email TEXT NOT NULL,
                date TEXT,
                metric TEXT NOT NULL,
                value_json TEXT,
                created_at TEXT NOT NULL
            );
            """
        )
        cur.execute(
            "CREATE INDEX IF NOT EXISTS idx_insights_user_created ON insights(user_email, created_at DESC);"
        )
        conn.commit()
    finally:
        conn.close()


@contextmanager
def db_conn(db_path: Path) -> Iterator[sqlite3.Connection]:
    conn = connect(db_path)
    try:
        yield conn
        conn.commit()
    finally:
        conn.close()
