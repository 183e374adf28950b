import hashlib
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, Mapping

from .schemas import ExtractionResult


def sha256_file(path: str) -> str:
    h = hashlib.sha256()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            h.update(chunk)
    return h.hexdigest()


def build_extraction_metadata(extraction: ExtractionResult, content: str) -> Dict[str, Any]:
    return {
        "total_words": len(content.split()) if content else 0,
        "stat_count": len(extraction.stats),
        "quote_count": len(extraction.quotes),
        "list_count": len(extraction.lists),
        "process_count": len(extraction.processes),
        "has_timeline": extraction.timeline is not None,
        "has_checklist": any(lst.type == "checklist" for lst in extraction.lists),
    }


def build_layout_stats(components: Iterable[Mapping[str, Any]]) -> Dict[str, Any]:
    per_type: Dict[str, int] = {}
    total = 0
    for component in components:
        ctype = str(component.get("type", "Unknown"))
        per_type[ctype] = per_type.get(ctype, 0) + 1
        total += 1
    return {
        "total_components": total,
        "per_type": dict(sorted(per_type.items())),
    }


def build_run_metadata(input_path: str, document_count: int, model_name: str) -> Dict[str, Any]:
    return {
        "created_at": datetime.now(timezone.utc).isoformat(),
        "input_hash": sha256_file(input_path),
        "input_file": input_path,
        "document_count": document_count,
        "extractor_model": model_name,
    }
