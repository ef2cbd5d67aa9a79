"""Database schema for the document store."""

SCHEMA = """
-- Documents table: one row per uploaded file
CREATE TABLE IF NOT EXISTS documents (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    file_name TEXT NOT NULL,
    file_size INTEGER NOT NULL DEFAULT 0,
    file_type TEXT,
    num_pages INTEGER,           -- NULL when the format has no pages
    text TEXT NOT NULL DEFAULT '',
    total_tokens INTEGER NOT NULL DEFAULT 0,
    metadata TEXT,               -- JSON object
    type TEXT NOT NULL DEFAULT 'document',
    upload_date TEXT NOT NULL
);

-- Chunks table: token-bounded sentence runs of each document
CREATE TABLE IF NOT EXISTS chunks (
    document_id INTEGER NOT NULL,
    chunk_index INTEGER NOT NULL,
    text TEXT NOT NULL,
    tokens INTEGER NOT NULL,
    sentences INTEGER NOT NULL,
    PRIMARY KEY (document_id, chunk_index),
    FOREIGN KEY (document_id) REFERENCES documents(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_documents_file_name ON documents(file_name);
CREATE INDEX IF NOT EXISTS idx_documents_type ON documents(type);
"""
