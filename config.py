# config.py
import os
from datetime import timedelta


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")
    JWT_SECRET_KEY = os.environ.get("JWT_SECRET_KEY", "dev-jwt-secret-change-me")

    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL",
        "mysql+pymysql://root:@localhost/wellness"
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # JWT config
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_NAME = "Authorization"
    JWT_HEADER_TYPE = "Bearer"
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=15)
    JWT_REFRESH_TOKEN_EXPIRES = timedelta(days=7)

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # "today" is local midnight in this zone
    WELLNESS_TIMEZONE = os.environ.get("WELLNESS_TIMEZONE", "UTC")
    # callable returning an aware datetime; None means wall clock
    CLOCK = None

    STREAK_LOOKBACK_DAYS = int(os.environ.get("STREAK_LOOKBACK_DAYS", 7))
    TREND_DAYS = 7


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-bytes-for-hs256"
    LOG_LEVEL = "WARNING"
