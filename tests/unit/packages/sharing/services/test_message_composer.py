from datetime import date

import pytest

from packages.documents.models.domain.document import DocumentItem
from packages.sharing.models.domain.share import ShareRequest, ShareType
from packages.sharing.services.message_composer import MessageComposer, document_fields


@pytest.fixture
def composer():
    return MessageComposer(expiry_days=7, today=lambda: date(2025, 1, 10))


def make_request(documents, **kwargs):
    return ShareRequest(share_type=ShareType.BOTH, documents=documents, **kwargs)


class TestDocumentFields:
    def test_only_present_fields(self, sample_documents):
        assert document_fields(sample_documents[1]) == [
            ("Serial No", "SN-002"),
            ("Category", "Personal"),
            ("Company", "Jane Doe"),
            ("Type", "Identity"),
        ]

    def test_renewal_date_displayed(self, sample_documents):
        assert ("Renewal Date", "31/03/2025") in document_fields(sample_documents[0])

    def test_bare_document_has_no_fields(self):
        assert document_fields(DocumentItem(document_name="x", serial_no="")) == []


class TestDefaults:
    def test_subjects(self, composer, sample_documents):
        assert composer.default_subject(sample_documents[:1]) == (
            "Sharing Document: Trade License"
        )
        assert composer.default_subject(sample_documents) == "Sharing 2 Documents"

    def test_messages(self, composer, sample_documents):
        assert composer.default_message(sample_documents[:1]) == (
            "Please find the link for the shared document: Trade License. "
            "This link will expire in 7 days."
        )
        assert "2 shared documents" in composer.default_message(sample_documents)

    def test_explicit_empty_message_kept(self, composer, sample_documents):
        request = make_request(sample_documents[:1], message="")

        assert composer.resolve_message(request) == ""

    def test_expiry_date(self, composer):
        assert composer.expiry_date() == "17/01/2025"


class TestEmailHtml:
    def test_single_document(self, composer, sample_documents):
        html = composer.email_html(make_request(sample_documents[:1], recipient_name="Raj"))

        assert "Document Shared: Trade License" in html
        assert "https://drive.google.com/file/d/file1/preview" in html
        assert "Renewal Date" in html
        assert "17/01/2025" in html
        assert "Shared by: Raj" in html
        assert "This link will expire in 7 days." in html

    def test_missing_fields_omitted(self, composer, sample_documents):
        html = composer.email_html(make_request(sample_documents[1:]))

        assert "Renewal Date" not in html
        assert "Document Link" not in html
        assert "Shared by: System User" in html

    def test_batch(self, composer, sample_documents):
        html = composer.email_html(make_request(sample_documents))

        assert "Shared 2 Documents" in html
        assert "Document 1: Trade License" in html
        assert "Document 2: PAN Card" in html

    def test_values_escaped(self, composer):
        document = DocumentItem(document_name="<script>x</script>", category="A&B")

        html = composer.email_html(make_request([document], message="<b>hi</b>"))

        assert "<script>" not in html
        assert "&lt;script&gt;" in html
        assert "A&amp;B" in html
        assert "&lt;b&gt;hi&lt;/b&gt;" in html


class TestWhatsappText:
    def test_single_document(self, composer, sample_documents):
        text = composer.whatsapp_text(make_request(sample_documents[:1], message="See attached"))

        assert text.startswith("📄 *Document Shared:* Trade License\n\n")
        assert "📋 *Serial No:* SN-001" in text
        assert "💬 *Message:* See attached" in text
        assert "🔗 *Document Link:* https://drive.google.com/file/d/file1/preview" in text
        assert text.endswith(
            "⏰ *Link Expiry:* This link will expire on 17/01/2025 (7 days from now)"
        )

    def test_batch_lists_each_document(self, composer, sample_documents):
        text = composer.whatsapp_text(make_request(sample_documents))

        assert text.startswith("📄 *Shared 2 Documents*\n\n")
        assert "*1. Trade License*" in text
        assert "*2. PAN Card*" in text
        assert "🔗 Link: https://drive.google.com/file/d/file1/preview" in text
        assert "Message" not in text
