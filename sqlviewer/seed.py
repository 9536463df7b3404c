"""
Demo content for the default database.
"""

import logging
import sqlite3

logger = logging.getLogger(__name__)

DEMO_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    email TEXT UNIQUE NOT NULL,
    role TEXT DEFAULT 'user',
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);

CREATE TABLE IF NOT EXISTS orders (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id INTEGER,
    amount DECIMAL(10, 2),
    status TEXT CHECK(status IN ('pending', 'completed', 'cancelled')),
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY(user_id) REFERENCES users(id)
);
"""

DEMO_USERS = [
    ("Alice Johnson", "alice@example.com", "admin"),
    ("Bob Smith", "bob@example.com", "user"),
    ("Charlie Brown", "charlie@example.com", "user"),
    ("Diana Prince", "diana@example.com", "user"),
]

DEMO_ORDERS = [
    (1, 99.99, "completed"),
    (2, 49.50, "pending"),
    (1, 150.00, "completed"),
    (3, 25.00, "cancelled"),
]


def seed(connection: sqlite3.Connection) -> bool:
    """Create the demo tables and fill them when ``users`` is empty.

    Returns True if rows were inserted.
    """
    connection.executescript(DEMO_SCHEMA)

    user_count = connection.execute("SELECT count(*) FROM users").fetchone()[0]
    if user_count:
        return False

    logger.info("Seeding database...")
    connection.executemany(
        "INSERT INTO users (name, email, role) VALUES (?, ?, ?)", DEMO_USERS
    )
    connection.executemany(
        "INSERT INTO orders (user_id, amount, status) VALUES (?, ?, ?)", DEMO_ORDERS
    )
    logger.info("Database seeded!")
    return True
