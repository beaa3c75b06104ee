import argparse
from pathlib import Path

from rag_chat.services.ingestion import ingest_pdf


def main():
    parser = argparse.ArgumentParser(description="Chunk a PDF, embed it and load it into Supabase.")
    parser.add_argument("pdf", type=Path)
    parser.add_argument("--source", help="metadata.source label (defaults to SOURCE_FILTER)")
    parser.add_argument("--chunk-tokens", type=int, default=None)
    parser.add_argument("--overlap", type=int, default=None)
    parser.add_argument("--dry-run", action="store_true", help="only build chunks, no embedding or insert")
    args = parser.parse_args()

    count = ingest_pdf(
        args.pdf.read_bytes(),
        source=args.source,
        chunk_tokens=args.chunk_tokens,
        overlap=args.overlap,
        dry_run=args.dry_run,
    )
    action = "Built" if args.dry_run else "Indexed"
    print(f"{action} {count} chunks from {args.pdf}")


if __name__ == "__main__":
    main()
