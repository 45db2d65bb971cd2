import logging


def records_for(caplog, path):
    return [record for record in caplog.records if getattr(record, "path", None) == path]


async def test_request_log_redacts_token_query_params(client, caplog):
    with caplog.at_level(logging.INFO):
        response = await client.get("/health", params={"token": "abcdefghijklmnop", "page": "2"})

    assert response.status_code == 200

    record = records_for(caplog, "/health")[-1]
    assert record.query_params == {"token": "abcdefgh...", "page": "2"}
    assert "abcdefghijklmnop" not in caplog.text


async def test_auth_error_log_redacts_secrets(client, caplog):
    with caplog.at_level(logging.WARNING):
        response = await client.get("/v1/me", params={"access_token": "eyJhbGciOiJIUzI1NiJ9.secret-part"})

    assert response.status_code == 401

    warnings = [record for record in records_for(caplog, "/v1/me") if hasattr(record, "query_params")]
    assert warnings
    for record in warnings:
        assert record.query_params == {"access_token": "eyJhbGci..."}
    assert "secret-part" not in caplog.text
