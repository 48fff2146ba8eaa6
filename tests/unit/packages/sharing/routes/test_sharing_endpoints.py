from common.providers.sheets.models import ScriptResponse


class TestSharingEndpoints:
    async def test_share_both(self, client, auth_headers, logged_in_session, sample_documents):
        logged_in_session.state.add_documents(sample_documents)

        response = await client.post(
            "/api/v1/sharing/share",
            headers=auth_headers,
            json={
                "shareType": "both",
                "documentIds": ["doc-1", "doc-2"],
                "recipientName": "Raj",
                "email": "raj@example.com",
                "whatsapp": "+919999999999",
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["completed"] is True
        assert data["emailSent"] is True
        assert data["whatsappUrl"].startswith("https://wa.me/?text=")
        assert data["closeAfterSeconds"] == 1.5
        assert len(data["history"]) == 4

        history = await client.get("/api/v1/sharing/history", headers=auth_headers)
        assert history.json()["totalCount"] == 4
        assert {h["sharedVia"] for h in history.json()["history"]} == {"Email", "WhatsApp"}

    async def test_failed_email(
        self, client, auth_headers, logged_in_session, sample_documents, mock_backend
    ):
        logged_in_session.state.add_documents(sample_documents)
        mock_backend.send_email.return_value = ScriptResponse(
            success=False, error="Mailbox full"
        )

        response = await client.post(
            "/api/v1/sharing/share",
            headers=auth_headers,
            json={"shareType": "email", "documentIds": ["doc-1"], "email": "a@b.test"},
        )

        assert response.status_code == 200
        assert response.json()["completed"] is False
        assert response.json()["emailError"] == "Mailbox full"
        assert logged_in_session.state.share_history == ()

    async def test_unknown_document(self, client, auth_headers):
        response = await client.post(
            "/api/v1/sharing/share",
            headers=auth_headers,
            json={"shareType": "whatsapp", "documentIds": ["missing"]},
        )

        assert response.status_code == 404

    async def test_missing_email(self, client, auth_headers, logged_in_session, sample_documents):
        logged_in_session.state.add_documents(sample_documents)

        response = await client.post(
            "/api/v1/sharing/share",
            headers=auth_headers,
            json={"shareType": "email", "documentIds": ["doc-1"]},
        )

        assert response.status_code == 400

    async def test_empty_selection_rejected(self, client, auth_headers):
        response = await client.post(
            "/api/v1/sharing/share",
            headers=auth_headers,
            json={"shareType": "email", "documentIds": []},
        )

        assert response.status_code == 422
