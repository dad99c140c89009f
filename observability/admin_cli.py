"""Lightweight CLI helpers for inspecting the SQLite-backed stores."""
from __future__ import annotations

import argparse
import json
import sqlite3
from typing import Iterator, Tuple

from config.settings import settings
from session_reports import SessionReportStore
from storage import REPORTS, SqliteStore


def _rows(namespace: str, limit: int) -> Iterator[Tuple[str, dict]]:
    conn = sqlite3.connect(settings.DB_PATH)
    try:
        cursor = conn.cursor()
        cursor.execute(
            """
            SELECT key, value
            FROM kv_entries
            WHERE namespace = ?
            ORDER BY rowid DESC
            LIMIT ?
            """,
            (namespace, limit),
        )
        for key, value in cursor.fetchall():
            yield key, json.loads(value)
    finally:
        conn.close()


def tail_sessions(limit: int = 20) -> None:
    for key, data in _rows("sessions", limit):
        print(
            f"[{data.get('startedAt')}] {key} domain={data.get('domain')} "
            f"index={data.get('questionIndex')} status={data.get('status')} email={data.get('email')}"
        )


def tail_reports(limit: int = 20) -> None:
    for stored in SessionReportStore(SqliteStore(REPORTS, settings.DB_PATH)).list_reports()[:limit]:
        print(
            f"[{stored.createdAt}] {stored.sessionId} domain={stored.domain} "
            f"overall={stored.report.overall_score_100}/100 integrity={stored.report.integrity}"
        )


def list_domains(limit: int = 100) -> None:
    for key, chunks in _rows("chunks", limit):
        print(f"{key}: {len(chunks)} chunks")


def main() -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--tail-sessions", type=int, help="Show the latest live sessions")
    parser.add_argument("--tail-reports", type=int, help="Show the latest scoring reports")
    parser.add_argument("--domains", action="store_true", help="List domains with uploaded chunks")
    args = parser.parse_args()

    if args.tail_sessions:
        tail_sessions(args.tail_sessions)
    if args.tail_reports:
        tail_reports(args.tail_reports)
    if args.domains:
        list_domains()


if __name__ == "__main__":
    main()
