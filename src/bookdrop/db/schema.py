# ABOUTME: SQL DDL statements for the Bookdrop library database schema.
# ABOUTME: Defines the books and history tables with their indexes.

SCHEMA_V1 = """
-- Ingested books, keyed naturally by their source file path
CREATE TABLE books (
    id              INTEGER PRIMARY KEY AUTOINCREMENT,
    title           TEXT NOT NULL,
    author          TEXT,
    author_resource TEXT,
    description     TEXT,
    text_path       TEXT NOT NULL DEFAULT '',
    scroll_index    INTEGER NOT NULL DEFAULT 0,
    scroll_offset   INTEGER NOT NULL DEFAULT 0,
    progress        REAL NOT NULL DEFAULT 0,
    file_path       TEXT NOT NULL,
    last_opened     TEXT,
    category        TEXT NOT NULL,
    cover_image     BLOB,
    cover_format    TEXT,
    date_added      TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

CREATE UNIQUE INDEX idx_books_file_path ON books(file_path);
CREATE INDEX idx_books_title ON books(title COLLATE NOCASE);

-- One row per time a book was opened
CREATE TABLE history (
    id      INTEGER PRIMARY KEY AUTOINCREMENT,
    book_id INTEGER NOT NULL REFERENCES books(id) ON DELETE CASCADE,
    time    TEXT NOT NULL
);

CREATE INDEX idx_history_book_id ON history(book_id);

CREATE TABLE schema_version (
    version    INTEGER NOT NULL,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%S', 'now'))
);

INSERT INTO schema_version (version) VALUES (1);
"""
