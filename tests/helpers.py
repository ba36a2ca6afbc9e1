from fastapi.testclient import TestClient


TEST_USER_EMAIL = "a@b.com"
TEST_USER_PASSWORD = "Strong123!"


def run_graphql(client: TestClient, query: str, variables: dict | None = None, **kwargs) -> dict:
    response = client.post("/graphql", json={"query": query, "variables": variables or {}}, **kwargs)
    assert response.status_code == 200
    return response.json()


def tamper_signature(token: str) -> str:
    """Change the first character of the JWT signature segment."""
    header, payload, signature = token.split(".")
    replacement = "A" if signature[0] != "A" else "B"
    return ".".join([header, payload, replacement + signature[1:]])
