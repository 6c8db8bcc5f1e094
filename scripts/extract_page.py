#!/usr/bin/env python3
"""
Extract a job offer from a saved HTML page.

Usage:
    python scripts/extract_page.py page.html --url https://www.linkedin.com/jobs/view/123/ --pretty

Prints {"is_job_page": ..., "outcome": {...}} as JSON. Exits 0 when an
offer was extracted, 1 otherwise.
"""
import asyncio
import json
import logging
import os
import sys
from pathlib import Path

from bs4 import BeautifulSoup
from dotenv import load_dotenv

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from pipeline.extractor import Extractor  # noqa: E402

logger = logging.getLogger(__name__)


def run(html_path: Path, url: str, pretty: bool = False) -> int:
    try:
        html = html_path.read_text(encoding='utf-8', errors='replace')
    except OSError as e:
        logger.error(f"Could not read {html_path}: {e}")
        return 1

    soup = BeautifulSoup(html, 'lxml')
    extractor = Extractor()

    is_job = extractor.is_job_page(url, soup)
    outcome = asyncio.run(extractor.extract_from_html(html, url, soup=soup))

    print(json.dumps(
        {"is_job_page": is_job, "outcome": outcome.to_dict()},
        ensure_ascii=False,
        indent=2 if pretty else None,
    ))
    return 0 if outcome.is_success() else 1


if __name__ == '__main__':
    import argparse

    load_dotenv()
    logging.basicConfig(
        level=os.getenv('JOBCAPTURE_LOG_LEVEL', 'INFO').upper(),
        stream=sys.stderr,
    )

    parser = argparse.ArgumentParser(description='Extract a job offer from a saved HTML page')
    parser.add_argument('html_file', type=Path, help='Saved HTML page')
    parser.add_argument('--url', required=True, help='URL the page was captured from')
    parser.add_argument('--pretty', action='store_true', help='Indent the JSON output')

    args = parser.parse_args()
    sys.exit(run(args.html_file, args.url, pretty=args.pretty))
