import os
import secrets
from dotenv import load_dotenv
load_dotenv()

BASE_DIR = os.path.abspath(os.path.dirname(__file__))


class Config:
    SECRET_KEY = os.getenv("FLASK_SECRET_KEY") or secrets.token_hex(32)

    # Flat-file storage
    DATA_DIR = os.getenv("DATA_DIR") or os.path.join(BASE_DIR, "data")
    CREDENTIALS_PATH = os.getenv("CREDENTIALS_PATH") or os.path.join(BASE_DIR, "users.yml")

    # Shared secret handed out to people allowed to create an account
    REGISTRATION_CODE = os.getenv("REGISTRATION_CODE", "inside")

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class TestConfig(Config):
    TESTING = True
    DATA_DIR = os.path.join(BASE_DIR, "tests", "data")
    CREDENTIALS_PATH = os.path.join(BASE_DIR, "tests", "users.yml")


def get_config():
    """Pick the config class from APP_ENV ("test" selects the test storage roots)."""
    if os.getenv("APP_ENV") == "test":
        return TestConfig
    return Config
