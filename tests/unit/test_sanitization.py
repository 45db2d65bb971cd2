from utils.logger import sanitize_log_data

def test_password_redaction():
    data = {"email": "user@example.com", "password": "supersecret123"}
    sanitized = sanitize_log_data(data)

    assert sanitized["email"] == "user@example.com"
    assert sanitized["password"] == "***REDACTED***"


def test_refresh_token_partial_redaction():
    data = {"refresh_token": "0b9d3f1e-5c4a-4f8e-9a61-6f7c2b1d9e00.very_secret_part"}
    sanitized = sanitize_log_data(data)

    assert len(sanitized["refresh_token"]) == 11
    assert sanitized["refresh_token"].startswith(data["refresh_token"][:8])
    assert sanitized["refresh_token"].endswith("...")
    assert "very_secret_part" not in sanitized["refresh_token"]


def test_fingerprint_and_header_redaction():
    data = {"refresh_hash": "ab" * 32, "Authorization": "Bearer eyJ..."}
    sanitized = sanitize_log_data(data)

    assert sanitized["refresh_hash"] == "***REDACTED***"
    assert sanitized["Authorization"] == "***REDACTED***"


def test_nested_dict_sanitization():
    data = {
        "user": {
            "email": "user@example.com",
            "password": "secret123"
        }
    }
    sanitized = sanitize_log_data(data)

    assert sanitized["user"]["email"] == data["user"]["email"]
    assert sanitized["user"]["password"] == "***REDACTED***"


def test_non_sensitive_data_unchanged():
    data = {"user_id": "1f2e", "email": "test@example.com", "status_code": 200}
    sanitized = sanitize_log_data(data)

    assert sanitized == data
