"""
Authentication Service
=======================

Handles:
- Password hashing with bcrypt
- User registration
- Credential checks for login
"""

import sqlite3
from datetime import datetime
from typing import Dict, Optional

import bcrypt

from src.database.tour_store import SQLiteTourStore
from src.tours.errors import ValidationError
from src.tours.models import new_id


# ============================================================
# PASSWORD HASHING (using bcrypt directly)
# ============================================================

def hash_password(password: str) -> str:
    """Hash a password using bcrypt"""
    password_bytes = password.encode('utf-8')
    salt = bcrypt.gensalt(rounds=12)
    return bcrypt.hashpw(password_bytes, salt).decode('utf-8')


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash"""
    try:
        return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))
    except ValueError:
        # Malformed stored hash
        return False


# ============================================================
# USERS
# ============================================================

def register_user(store: SQLiteTourStore, email: str, password: str) -> Dict:
    """
    Create a user account.

    Raises:
        ValidationError: if the email is already registered
    """
    email = email.strip().lower()
    user = {
        'user_id': new_id(),
        'email': email,
        'created_at': datetime.now().isoformat(),
    }

    conn = store.get_connection()
    try:
        conn.execute(
            "INSERT INTO users (user_id, email, password_hash, created_at) VALUES (?, ?, ?, ?)",
            (user['user_id'], email, hash_password(password), user['created_at']),
        )
        conn.commit()
    except sqlite3.IntegrityError:
        raise ValidationError("An account with this email already exists")
    finally:
        conn.close()

    return user


def authenticate_user(store: SQLiteTourStore, email: str, password: str) -> Optional[Dict]:
    """Return the user dict for valid credentials, None otherwise."""
    conn = store.get_connection()
    try:
        row = conn.execute(
            "SELECT user_id, email, password_hash, created_at FROM users WHERE email = ?",
            (email.strip().lower(),),
        ).fetchone()
    finally:
        conn.close()

    if row is None or not verify_password(password, row['password_hash']):
        return None

    return {'user_id': row['user_id'], 'email': row['email'], 'created_at': row['created_at']}
