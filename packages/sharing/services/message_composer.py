"""
Builds the email (HTML) and WhatsApp (markdown-ish text) bodies for a share.

Only fields a document actually has are rendered; missing ones are left out
rather than shown blank. Both bodies end with a link expiry notice.
"""

from datetime import date, timedelta
from html import escape
from typing import Callable, List, Tuple

from packages.documents.models.domain.document import DocumentItem
from packages.sharing.models.domain.share import ShareRequest
from packages.sharing.utils.links import (
    format_date_string,
    format_display_date,
    get_preview_url,
)

ROW_STYLE_SINGLE = "padding: 8px 0; border-bottom: 1px solid #e5e7eb;"
ROW_STYLE_BATCH = "padding: 6px 0; border-bottom: 1px solid #e5e7eb;"

_EMOJI = {
    "Serial No": "📋",
    "Category": "🏷️",
    "Company": "🏢",
    "Type": "📄",
    "Renewal Date": "📅",
}


def document_fields(document: DocumentItem) -> List[Tuple[str, str]]:
    """(label, value) pairs for the fields present on a document, in display order."""
    fields = []
    if document.serial_no:
        fields.append(("Serial No", document.serial_no))
    if document.category:
        fields.append(("Category", document.category))
    if document.name:
        fields.append(("Company", document.name))
    if document.document_type:
        fields.append(("Type", document.document_type))
    if document.renewal_date:
        fields.append(("Renewal Date", format_date_string(document.renewal_date)))
    return fields


class MessageComposer:
    def __init__(self, expiry_days: int = 7, today: Callable[[], date] = date.today):
        self.expiry_days = expiry_days
        self._today = today

    def expiry_date(self) -> str:
        return format_display_date(self._today() + timedelta(days=self.expiry_days))

    def default_subject(self, documents: List[DocumentItem]) -> str:
        if len(documents) > 1:
            return f"Sharing {len(documents)} Documents"
        return f"Sharing Document: {documents[0].document_name}"

    def default_message(self, documents: List[DocumentItem]) -> str:
        if len(documents) > 1:
            return (
                f"Please find the links for {len(documents)} shared documents. "
                f"This link will expire in {self.expiry_days} days."
            )
        return (
            f"Please find the link for the shared document: {documents[0].document_name}. "
            f"This link will expire in {self.expiry_days} days."
        )

    def resolve_message(self, request: ShareRequest) -> str:
        if request.message is None:
            return self.default_message(request.documents)
        return request.message

    def email_html(self, request: ShareRequest) -> str:
        documents = request.documents
        message = self.resolve_message(request)
        parts = [
            '<div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto; '
            'padding: 20px; border: 1px solid #e0e0e0; border-radius: 8px;">'
        ]

        if request.is_batch:
            parts.append(
                '<h2 style="color: #4f46e5; border-bottom: 2px solid #4f46e5; '
                'padding-bottom: 10px; margin-bottom: 20px;">'
                f"Shared {len(documents)} Documents</h2>"
            )
            for index, document in enumerate(documents, start=1):
                parts.append(self._batch_document_html(index, document))
        else:
            document = documents[0]
            parts.append(
                '<h2 style="color: #4f46e5; border-bottom: 2px solid #4f46e5; '
                'padding-bottom: 10px; margin-bottom: 20px;">'
                f"Document Shared: {escape(document.document_name)}</h2>"
            )
            parts.append(self._single_document_html(document))

        if message:
            parts.append(
                '<div style="background: #f0f9ff; border-left: 4px solid #0ea5e9; '
                'padding: 15px; border-radius: 4px; margin-bottom: 20px;">'
                f'<p style="margin: 0; color: #0369a1;"><strong>Message:</strong> {escape(message)}</p>'
                "</div>"
            )

        parts.append(
            '<div style="background: #fffbeb; border-left: 4px solid #f59e0b; padding: 12px; '
            'border-radius: 4px; margin-bottom: 20px;">'
            '<p style="margin: 0; color: #92400e; font-size: 14px;">'
            f"<strong>⚠️ Important:</strong> This shared link will expire in "
            f"{self.expiry_days} days ({self.expiry_date()})."
            "</p></div>"
        )
        parts.append(
            '<div style="margin-top: 30px; padding-top: 20px; border-top: 1px solid #e5e7eb; '
            'color: #6b7280; font-size: 14px;">'
            "<p>This document was shared via Document Management System</p>"
            f"<p>Shared by: {escape(request.recipient_name or 'System User')}</p>"
            "</div>"
        )
        parts.append("</div>")
        return "".join(parts)

    @staticmethod
    def _rows_html(document: DocumentItem, style: str) -> str:
        rows = [
            f'<tr><td style="{style}"><strong>{label}:</strong></td>'
            f'<td style="{style}">{escape(value)}</td></tr>'
            for label, value in document_fields(document)
        ]
        return '<table style="width: 100%; border-collapse: collapse;">' + "".join(rows) + "</table>"

    def _single_document_html(self, document: DocumentItem) -> str:
        html = (
            '<div style="background: #f9fafb; padding: 15px; border-radius: 6px; margin-bottom: 20px;">'
            '<h3 style="margin-top: 0; color: #374151;">Document Details:</h3>'
            f"{self._rows_html(document, ROW_STYLE_SINGLE)}"
            "</div>"
        )
        preview_url = get_preview_url(document.file_url)
        if preview_url:
            html += (
                '<div style="margin: 25px 0; padding: 15px; background: #f8fafc; '
                'border: 1px dashed #cbd5e1; border-radius: 8px;">'
                '<strong style="display: block; margin-bottom: 8px; color: #334155;">Document Link:</strong>'
                f'<a href="{escape(preview_url)}" style="color: #2563eb; text-decoration: underline; '
                f'word-break: break-all; font-family: monospace; font-size: 14px;">{escape(preview_url)}</a>'
                '<p style="color: #64748b; font-size: 12px; margin-top: 10px; font-style: italic;">'
                "Click the link above to view the document</p>"
                "</div>"
            )
        return html

    def _batch_document_html(self, index: int, document: DocumentItem) -> str:
        html = (
            '<div style="background: #f9fafb; padding: 15px; border-radius: 6px; '
            'margin-bottom: 15px; border-left: 4px solid #4f46e5;">'
            f'<h3 style="margin-top: 0; color: #374151;">Document {index}: '
            f"{escape(document.document_name)}</h3>"
            f"{self._rows_html(document, ROW_STYLE_BATCH)}"
        )
        preview_url = get_preview_url(document.file_url)
        if preview_url:
            html += (
                '<div style="margin-top: 10px;">'
                '<strong style="display: block; margin-bottom: 5px; color: #4b5563; font-size: 13px;">'
                "Document Link:</strong>"
                f'<a href="{escape(preview_url)}" style="color: #4f46e5; text-decoration: underline; '
                f'word-break: break-all; font-size: 13px;">{escape(preview_url)}</a>'
                "</div>"
            )
        return html + "</div>"

    def whatsapp_text(self, request: ShareRequest) -> str:
        documents = request.documents
        if request.is_batch:
            text = f"📄 *Shared {len(documents)} Documents*\n\n"
            for index, document in enumerate(documents, start=1):
                text += f"*{index}. {document.document_name}*\n"
                for label, value in document_fields(document):
                    text += f"{_EMOJI[label]} {label}: {value}\n"
                preview_url = get_preview_url(document.file_url)
                if preview_url:
                    text += f"🔗 Link: {preview_url}\n"
                text += "\n"
        else:
            document = documents[0]
            text = f"📄 *Document Shared:* {document.document_name}\n\n"
            for label, value in document_fields(document):
                text += f"{_EMOJI[label]} *{label}:* {value}\n"

            message = self.resolve_message(request)
            if message:
                text += f"\n💬 *Message:* {message}\n"

            preview_url = get_preview_url(document.file_url)
            if preview_url:
                text += f"\n🔗 *Document Link:* {preview_url}"

        text += (
            f"\n\n⏰ *Link Expiry:* This link will expire on {self.expiry_date()} "
            f"({self.expiry_days} days from now)"
        )
        return text

