import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()

class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "default-secret")
    FLASK_ENV = os.getenv("FLASK_ENV", "development")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Database
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///coursehub.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Auth token: cookie "token", JSON body "token" or "Authorization: Bearer"
    JWT_SECRET_KEY = os.getenv("JWT_SECRET", "jwt-secret")
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=int(os.getenv("JWT_EXPIRES_HOURS", 24)))
    JWT_TOKEN_LOCATION = ["cookies", "json", "headers"]
    JWT_ACCESS_COOKIE_NAME = "token"
    JWT_JSON_KEY = "token"
    JWT_COOKIE_CSRF_PROTECT = False
    JWT_COOKIE_SECURE = os.getenv("JWT_COOKIE_SECURE", "False").lower() in ("true", "1", "yes")

    # Mail Configuration
    MAIL_SERVER = os.getenv("MAIL_SERVER", "smtp.gmail.com")
    MAIL_PORT = int(os.getenv("MAIL_PORT", 587))
    MAIL_USE_TLS = os.getenv("MAIL_USE_TLS", "True").lower() in ("true", "1", "yes")
    MAIL_USE_SSL = os.getenv("MAIL_USE_SSL", "False").lower() in ("true", "1", "yes")
    MAIL_USERNAME = os.getenv("MAIL_USERNAME")
    MAIL_PASSWORD = os.getenv("MAIL_PASSWORD")
    MAIL_DEFAULT_SENDER = (
        os.getenv("MAIL_SENDER_NAME", "CourseHub"),
        os.getenv("MAIL_SENDER_ADDRESS", "no-reply@coursehub.dev"),
    )

    # Payment Gateway
    RAZORPAY_KEY_ID = os.getenv("RAZORPAY_KEY")
    RAZORPAY_SECRET = os.getenv("RAZORPAY_SECRET")
    RAZORPAY_BASE_URL = os.getenv("RAZORPAY_BASE_URL", "https://api.razorpay.com/v1")
    RAZORPAY_TIMEOUT = int(os.getenv("RAZORPAY_TIMEOUT", 10))
    PAYMENT_CURRENCY = os.getenv("PAYMENT_CURRENCY", "INR")


class TestConfig(Config):
    TESTING = True
    LOG_LEVEL = "WARNING"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    JWT_SECRET_KEY = "test-jwt-secret-with-enough-length-for-hs256"
    MAIL_SUPPRESS_SEND = True
    RAZORPAY_KEY_ID = "rzp_test_key"
    RAZORPAY_SECRET = "test-razorpay-secret"
