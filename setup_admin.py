"""
Setup Admin User Script
Run this script once to create the initial admin user

Usage: python setup_admin.py
"""

import getpass
import logging
import sys

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from config import get_settings, load_env
from models.user import User, UserRole
from utils.passwords import PasswordHasher
from utils.validators import validate_email, validate_password, validate_phone

logger = logging.getLogger("setup_admin")


def create_admin(users_collection, hasher: PasswordHasher, full_name: str, email: str,
                 phone_number: str, password: str):
    """
    Insert an admin user.
    Returns (user, error_message); user is None when nothing was created.
    """
    email = email.strip().lower()
    is_valid, error = validate_email(email)
    if not is_valid:
        return None, error

    is_valid, errors = validate_password(password)
    if not is_valid:
        return None, errors[0]

    is_valid, error = validate_phone(phone_number)
    if not is_valid:
        return None, error

    if not full_name.strip():
        return None, "Full name is required"

    if users_collection.find_one({'email': email}):
        return None, f"User with email {email} already exists"

    admin = User(
        full_name=full_name.strip(),
        email=email,
        phone_number=phone_number.strip(),
        password_hash=hasher.hash(password),
        role=UserRole.ADMIN,
    )
    result = users_collection.insert_one(admin.to_dict(include_password=True))
    admin._id = str(result.inserted_id)
    return admin, None


def main() -> bool:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    load_env()
    settings = get_settings()

    if not settings.mongodb_uri:
        logger.error("MONGODB_URI not set in environment, set up your .env file first")
        return False

    try:
        client = MongoClient(settings.mongodb_uri, serverSelectionTimeoutMS=5000)
        users_collection = client[settings.mongodb_db]['users']

        existing_admin = users_collection.find_one({'role': UserRole.ADMIN.value})
        if existing_admin:
            logger.info("Admin user already exists: %s", existing_admin['email'])
            return True

        print("\n=== Create Admin User ===\n")
        full_name = input("Full Name: ")
        email = input("Admin Email: ")
        phone_number = input("Phone Number: ")
        password = getpass.getpass("Password (min 8 chars): ")
        if password != getpass.getpass("Confirm Password: "):
            logger.error("Passwords do not match")
            return False

        admin, error = create_admin(
            users_collection,
            PasswordHasher(rounds=settings.bcrypt_rounds),
            full_name,
            email,
            phone_number,
            password,
        )
        if error:
            logger.error(error)
            return False

        logger.info("Admin user created: %s (%s)", admin.email, admin._id)
        return True

    except PyMongoError as e:
        logger.error("Database error: %s", e)
        return False


if __name__ == "__main__":
    sys.exit(0 if main() else 1)
