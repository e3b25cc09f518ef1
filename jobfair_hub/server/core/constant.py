"""Server-wide constants."""

PROJECT_NAME = "Job Fair Hub"
API_V1_STR = "/api/v1"
VERSION = "1.0.0"
SCHEMA_VERSION = "v1"

SESSION_COOKIE_NAME = "session_token"
LOGIN_PATH = "/login"
DASHBOARD_PATH = "/dashboard"
