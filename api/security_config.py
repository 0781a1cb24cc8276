"""
Security Configuration for Record Catalog API
Centralizes settings for CORS and Trusted Hosts
"""

# CORS Configuration
ALLOWED_ORIGINS = [
    "https://records.example.com",
    "https://app.records.example.com",
]

# Trusted Host Configuration
ALLOWED_HOSTS = [
    "records.example.com",
    "*.records.example.com",
    "localhost",
    "127.0.0.1",
]

# Response Headers to Expose
EXPOSE_HEADERS = ["X-Trace-Id", "X-Process-Time"]


# Development overrides
def get_allowed_origins(production: bool) -> list[str]:
    """Get allowed origins based on environment"""
    if production:
        return ALLOWED_ORIGINS
    return ["http://localhost:3000", "http://localhost:8080", "http://127.0.0.1:3000"]


def get_allowed_hosts(production: bool) -> list[str]:
    """Get allowed hosts based on environment"""
    if production:
        return ALLOWED_HOSTS
    return ["localhost", "127.0.0.1", "testserver"]
