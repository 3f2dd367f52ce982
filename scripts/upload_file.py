"""
Upload a local CSV/JSON file into a document collection from the CLI.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from app.repositories.document_repository import SQLAlchemyDocumentStore
from app.services.upload_orchestrator_service import build_upload_orchestrator
from app.services.validation_report import format_validation_errors
from db.session import SessionLocal


def main() -> int:
    parser = argparse.ArgumentParser(description="Validate and upload a file into a collection.")
    parser.add_argument("path", help="CSV or JSON file to upload.")
    parser.add_argument(
        "--collection",
        dest="collection",
        required=True,
        help="Target collection; must already hold documents to infer from.",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Print a readable validation report instead of the JSON result.",
    )
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")

    path = Path(args.path)
    try:
        content = path.read_bytes()
    except OSError as exc:
        print(f"Cannot read {path}: {exc}", file=sys.stderr)
        return 2

    with SessionLocal() as db:
        orchestrator = build_upload_orchestrator(SQLAlchemyDocumentStore(db))
        result = orchestrator.upload(file_name=path.name, content=content, collection_id=args.collection)

    if args.report and result.validation_errors:
        print(result.message)
        print(format_validation_errors(result.validation_errors))
    else:
        print(json.dumps(result.to_dict(), indent=2, default=str))
    return 0 if result.success else 1


if __name__ == "__main__":
    raise SystemExit(main())
