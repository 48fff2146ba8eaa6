# Test data and fixtures

CREDENTIALS_HEADER = ["Name", "Username", "Password", "Role", "Permissions", "Status"]

DOCUMENTS_HEADER = [
    "Timestamp",
    "Serial No",
    "Document name",
    "Document Type",
    "Category",
    "Name",
    "Need Renewal",
    "Renewal Date",
    "Image",
    "Status",
    "Planned1",
    "Actual1",
    "Issue date",
    "Concern Person Name",
    "Concern Person Mobile",
    "Concern Person Department",
    "Company Name",
]

MASTER_HEADER = ["Company Name", "Document Type", "Category"]

# "hello world"
SAMPLE_FILE_BASE64 = "aGVsbG8gd29ybGQ="
SAMPLE_FILE_CONTENT = b"hello world"
