"""Batch ingestion of Egyptian statutes.

Reads a JSON manifest describing the laws to ingest, extracts each source
file, builds an act and writes it as a seed document. A report with per-law
results and corpus totals is written next to the manifest.

Usage:
    python -m eglaw.ingestion.ingest <manifest.json> [--seed-dir DIR]
"""

import json
import logging
import time
from dataclasses import asdict, dataclass, replace
from pathlib import Path
from typing import Optional

from eglaw.config import settings
from eglaw.ingestion.acts import Act, BuildOptions, LawMetadata, build_act
from eglaw.ingestion.metadata import infer_law_number_year, infer_status, normalize_date
from eglaw.ingestion.parser import has_meaningful_text, parse_file

logger = logging.getLogger(__name__)

REPORT_FILE_NAME = "ingestion-report.json"

EXTRACTION_METHODS = ("pdftotext", "ocr")


@dataclass
class IngestResult:
    """Outcome of ingesting one manifest entry."""
    law: str                        # "136/2019"
    status: str                     # "ok" | "skipped" | "error"
    act_id: Optional[str] = None
    reason: Optional[str] = None
    provisions: int = 0
    definitions: int = 0
    extraction_method: Optional[str] = None


# ---------------------------------------------------------------------------
# Manifest
# ---------------------------------------------------------------------------

def load_manifest(manifest_path: str) -> list[dict]:
    """Load the list of law entries from a manifest file."""
    path = Path(manifest_path)
    if not path.is_file():
        raise FileNotFoundError(f"Manifest not found: {manifest_path}")

    with open(path, "r", encoding="utf-8") as f:
        entries = json.load(f)

    if not isinstance(entries, list):
        raise ValueError(f"Manifest must be a JSON list of laws: {manifest_path}")
    return entries


def metadata_from_entry(entry: dict) -> LawMetadata:
    """Build LawMetadata from a manifest entry.

    Missing law number/year are inferred from the Arabic title; dates and
    status labels are normalized.
    """
    law_number = str(entry.get("law_number") or "").strip()
    law_year = str(entry.get("law_year") or "").strip()

    if not (law_number and law_year):
        inferred = infer_law_number_year(entry.get("title_ar") or "")
        if inferred is None:
            raise ValueError("law_number/law_year missing and not inferable from title_ar")
        law_number, law_year = inferred

    return LawMetadata(
        law_number=law_number,
        law_year=law_year,
        title_en=entry.get("title_en"),
        title_ar=entry.get("title_ar"),
        short_name=entry.get("short_name"),
        status=infer_status(entry.get("status")),
        issued_date=normalize_date(entry.get("issued_date")),
        effective_date=normalize_date(entry.get("effective_date")),
        description=entry.get("description"),
        detail_url=entry.get("detail_url"),
    )


# ---------------------------------------------------------------------------
# Per-law processing
# ---------------------------------------------------------------------------

def process_entry(entry: dict, source_dir: Path) -> tuple[IngestResult, Optional[Act]]:
    """Extract and parse a single manifest entry. Does not write anything."""
    metadata = metadata_from_entry(entry)
    law_label = f"{metadata.law_number}/{metadata.law_year}"

    method = entry.get("extraction_method") or "pdftotext"
    if method not in EXTRACTION_METHODS:
        raise ValueError(f"Unknown extraction_method: {method}")

    source_file = entry.get("source_file")
    if not source_file:
        return IngestResult(law=law_label, status="skipped", reason="no source_file"), None

    source_path = Path(source_file)
    if not source_path.is_absolute():
        source_path = source_dir / source_path

    document = parse_file(str(source_path))
    if not has_meaningful_text(document.full_text):
        return IngestResult(
            law=law_label,
            status="skipped",
            reason="no meaningful text layer (needs OCR)",
            extraction_method=method,
        ), None

    is_ocr = method == "ocr"
    options = BuildOptions(
        permissive=is_ocr,
        prefer_canonical_title=not is_ocr,
        id_suffix=entry.get("id_suffix"),
    )
    act = build_act(metadata, document.full_text, str(source_path), options)
    if act is None:
        return IngestResult(
            law=law_label,
            status="skipped",
            reason="no parseable article sections found in extracted text",
            extraction_method=method,
        ), None

    return IngestResult(
        law=law_label,
        status="ok",
        act_id=act.id,
        provisions=len(act.provisions),
        definitions=len(act.definitions),
        extraction_method=method,
    ), act


def write_seed(act: Act, seed_dir: Path) -> Path:
    seed_path = seed_dir / f"{act.id}.json"
    with open(seed_path, "w", encoding="utf-8") as f:
        json.dump(act.to_dict(), f, ensure_ascii=False, indent=2)
    return seed_path


# ---------------------------------------------------------------------------
# Pipeline orchestrator
# ---------------------------------------------------------------------------

def run_ingestion(manifest_path: str, seed_dir: Optional[str] = None) -> dict:
    """Ingest every law listed in a manifest.

    Args:
        manifest_path: Path to the JSON manifest. Relative ``source_file``
            entries are resolved against the manifest's directory.
        seed_dir: Output directory for seed documents. Defaults to
            settings.SEED_DIR.

    Returns:
        The ingestion report (also written to ``ingestion-report.json``
        next to the manifest).
    """
    start_time = time.time()
    entries = load_manifest(manifest_path)
    source_dir = Path(manifest_path).resolve().parent
    seed_path = Path(seed_dir or settings.SEED_DIR)
    seed_path.mkdir(parents=True, exist_ok=True)

    logger.info(f"Ingesting {len(entries)} laws from {manifest_path}")

    results: list[IngestResult] = []
    acts: dict[str, Act] = {}
    written_urls: dict[str, str] = {}

    for i, entry in enumerate(entries, 1):
        progress = f"[{i}/{len(entries)}]"
        try:
            result, act = process_entry(entry, source_dir)
        except Exception as e:
            law = f"{entry.get('law_number')}/{entry.get('law_year')}"
            logger.error(f"{progress} Failed to ingest law {law}: {e}")
            results.append(IngestResult(law=law, status="error", reason=str(e)))
            continue

        if act is not None:
            # Same number/year but a different document: keep both.
            # Same URL: the later seed replaces the earlier one.
            if act.id in written_urls and written_urls[act.id] != act.url:
                act = replace(act, id=f"{act.id}-n{i}")
                result.act_id = act.id
            written_urls[act.id] = act.url
            write_seed(act, seed_path)
            acts[act.id] = act
            logger.info(
                f"{progress} OK: {act.id} ({result.provisions} provisions, "
                f"{result.extraction_method})"
            )
        else:
            logger.info(f"{progress} SKIP: law {result.law} ({result.reason})")

        results.append(result)

    report = {
        "generated_at": time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime()),
        "manifest": str(manifest_path),
        "totals": {
            "processed": len(results),
            "ingested": sum(1 for r in results if r.status == "ok"),
            "skipped": sum(1 for r in results if r.status == "skipped"),
            "errors": sum(1 for r in results if r.status == "error"),
            "documents": len(acts),
            "provisions": sum(len(a.provisions) for a in acts.values()),
            "definitions": sum(len(a.definitions) for a in acts.values()),
            "ocr_docs": sum(
                1 for r in results if r.status == "ok" and r.extraction_method == "ocr"
            ),
        },
        "elapsed_seconds": round(time.time() - start_time, 2),
        "results": [asdict(r) for r in results],
    }

    with open(source_dir / REPORT_FILE_NAME, "w", encoding="utf-8") as f:
        json.dump(report, f, ensure_ascii=False, indent=2)

    logger.info(f"Ingestion complete: {report['totals']}")
    return report


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import argparse

    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    parser = argparse.ArgumentParser(description="Ingest Egyptian statutes into seed documents")
    parser.add_argument("manifest", help="Path to the JSON manifest of laws")
    parser.add_argument("--seed-dir", default=None, help="Output directory for seed JSON")
    args = parser.parse_args()

    report = run_ingestion(args.manifest, args.seed_dir)

    print("\n=== Ingestion Complete ===")
    for key, value in report["totals"].items():
        print(f"  {key}: {value}")
