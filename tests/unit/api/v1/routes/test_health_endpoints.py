class TestHealthEndpoints:
    async def test_health_check(self, client):
        response = await client.get("/api/v1/health/")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    async def test_healthz(self, client):
        response = await client.get("/healthz")

        assert response.json() == {"status": "ok"}
