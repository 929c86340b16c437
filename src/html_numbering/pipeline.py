"""Pipeline orchestrator: read HTML → render into a .docx → report.

Coordinates the conversion and provides the ``inspect`` shortcut that
summarizes the numbering part of an existing document.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path

from html_numbering.config import Config
from html_numbering.exceptions import ParseError
from html_numbering.generators.word_generator import (
    HtmlWordGenerator,
    open_document,
    save_document,
)
from html_numbering.numbering.report import NumberingReport
from html_numbering.numbering.store import NumberingStore

logger = logging.getLogger(__name__)


class Pipeline:
    """Orchestrates HTML → Word conversion."""

    def __init__(self, config: Config | None = None):
        self.config = config or Config.default()
        self.last_report: NumberingReport | None = None

    def convert(
        self,
        html_path: Path,
        output_path: Path,
        template_path: Path | None = None,
        save_report: bool = False,
        report_path: Path | None = None,
    ) -> Path:
        """Full pipeline: HTML → .docx.

        Args:
            html_path: Input HTML file.
            output_path: Output .docx file.
            template_path: Existing .docx to append to. Its numbering
                           definitions and instances are preserved.
            save_report: Whether to save a numbering report JSON.
            report_path: Custom path for report JSON. Defaults to {output_stem}.report.json.

        Returns:
            Path to the generated .docx file.
        """
        html_path = Path(html_path)
        output_path = Path(output_path)

        html = self.read_html(html_path)

        t0 = time.monotonic()
        logger.info("Generating %s", output_path)
        generator = HtmlWordGenerator(self.config)
        doc = generator.generate_document(html, open_document(template_path))
        result = save_document(doc, output_path)
        t1 = time.monotonic()

        report = NumberingReport.from_store(NumberingStore.from_document(doc), str(html_path))
        report.generate_time_seconds = t1 - t0
        self.last_report = report

        if save_report:
            if report_path is None:
                report_path = output_path.with_suffix(".report.json")
            Path(report_path).write_text(report.to_json(), encoding="utf-8")
            logger.info("Saved report to %s", report_path)

        return result

    def inspect(self, docx_path: Path) -> str:
        """Summarize the numbering part of a .docx as a JSON string.

        Args:
            docx_path: Word document to inspect.

        Returns:
            JSON string of the numbering report.
        """
        docx_path = Path(docx_path)
        if not docx_path.exists():
            raise ParseError(f"Word document not found: {docx_path}")

        logger.info("Inspecting %s", docx_path)
        doc = open_document(docx_path)
        return NumberingReport.from_store(NumberingStore.from_document(doc), str(docx_path)).to_json()

    @staticmethod
    def read_html(path: Path) -> str:
        """Read an HTML file as UTF-8 text."""
        path = Path(path)
        logger.info("Reading %s", path)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ParseError(f"HTML file not found: {path}")
        except UnicodeDecodeError as exc:
            raise ParseError(f"HTML file {path} is not valid UTF-8: {exc}") from exc
