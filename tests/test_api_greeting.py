import pytest


@pytest.mark.parametrize("method", ["get", "post"])
def test_greeting_is_fixed_text(client, method):
    response = getattr(client, method)("/api/AuthByCpf", data="ignored")
    assert response.status_code == 200
    assert response.get_data(as_text=True) == "Welcome to Azure Functions!"
    assert response.content_type.startswith("text/plain")


def test_greeting_makes_no_outbound_calls(client, http_stub):
    client.get("/api/AuthByCpf")
    assert http_stub.calls == []
