import argparse
import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonlines
from tqdm import tqdm

from extraction.metadata_builder import build_layout_stats, build_run_metadata

from .config import LayoutConfig, parse_checkpoints
from .visual_pipeline import DocumentInput, TransformResult, build_extractor, transform_document

logger = logging.getLogger(__name__)


def load_documents(path: Path) -> List[DocumentInput]:
    if path.suffix == ".jsonl":
        with jsonlines.open(path) as reader:
            rows = [row for row in reader if isinstance(row, dict)]
    else:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        rows = data if isinstance(data, list) else [data]
    return [DocumentInput.from_dict(row) for row in rows if isinstance(row, dict)]


def write_jsonl(path: Path, rows: List[Dict]) -> None:
    with jsonlines.open(path, mode="w") as writer:
        writer.write_all(rows)


def write_json(path: Path, payload: Dict) -> None:
    with path.open("w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)


def build_output_row(document: DocumentInput, result: TransformResult) -> Dict[str, Any]:
    return {
        "title": document.title,
        "layout": result.layout(),
        "extraction_metadata": result.metadata,
    }


async def transform_all(
    documents: List[DocumentInput],
    config: LayoutConfig,
    extract: bool,
    concurrency: int,
) -> List[TransformResult]:
    extractor = build_extractor(config) if extract else None
    semaphore = asyncio.Semaphore(max(1, concurrency))
    progress = tqdm(total=len(documents), desc="Transforming documents", unit="doc")

    async def _one(document: DocumentInput) -> TransformResult:
        async with semaphore:
            result = await transform_document(document, extractor=extractor, config=config)
        progress.update(1)
        return result

    try:
        return await asyncio.gather(*(_one(doc) for doc in documents))
    finally:
        progress.close()


def run_pipeline(
    input_file: str,
    output_dir: str,
    config: LayoutConfig,
    extract: bool,
    concurrency: int,
    dry_run: bool,
    verbose: bool,
) -> Optional[Dict[str, Any]]:
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=log_level, format="%(asctime)s - %(levelname)s - %(message)s")

    input_path = Path(input_file)
    if not input_path.exists():
        raise FileNotFoundError(f"Input documents not found: {input_file}")

    documents = load_documents(input_path)
    logger.info(f"Loaded {len(documents)} documents from {input_path}")

    results = asyncio.run(transform_all(documents, config, extract=extract, concurrency=concurrency))
    rows = [build_output_row(doc, res) for doc, res in zip(documents, results)]

    all_components: List[Dict[str, Any]] = []
    for res in results:
        all_components.extend(res.component_dicts())
    stats = build_run_metadata(str(input_path), len(documents), config.extractor_model if extract else "none")
    stats["layout"] = build_layout_stats(all_components)

    if dry_run:
        logger.info("Dry run enabled; outputs will not be written")
        return stats

    output_path = Path(output_dir)
    output_path.mkdir(parents=True, exist_ok=True)
    write_jsonl(output_path / "layouts.jsonl", rows)
    logger.info(f"Wrote layouts.jsonl ({len(rows)} documents)")
    write_json(output_path / "layout_stats.json", stats)
    logger.info("Wrote layout_stats.json")
    return stats


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Transform articles into paced visual layouts")
    parser.add_argument("--input", required=True, help="Path to a .json document (or list) or a .jsonl file")
    parser.add_argument("--output-dir", default="data/layouts", help="Output directory for layouts and stats")
    parser.add_argument("--model", default=None, help="Chat model used for entity extraction")
    parser.add_argument("--timeout", type=float, default=None, help="Extractor timeout in seconds")
    parser.add_argument("--checkpoints", default=None, help="Pacing schedule, e.g. '2:process,4:quote,6:timeline'")
    parser.add_argument("--include-secondary", action="store_true", help="Append bullet/numbered lists and ungrouped stats")
    parser.add_argument("--no-extract", action="store_true", help="Skip entity extraction (text-only layouts)")
    parser.add_argument("--concurrency", type=int, default=4, help="Documents transformed concurrently")
    parser.add_argument("--dry-run", action="store_true", help="Run without writing outputs")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    config = LayoutConfig.from_env(
        extractor_model=args.model,
        extractor_timeout=args.timeout,
        checkpoints=parse_checkpoints(args.checkpoints) if args.checkpoints else None,
        include_secondary=True if args.include_secondary else None,
    )
    run_pipeline(
        input_file=args.input,
        output_dir=args.output_dir,
        config=config,
        extract=not args.no_extract,
        concurrency=args.concurrency,
        dry_run=args.dry_run,
        verbose=args.verbose,
    )


if __name__ == "__main__":
    main()
