"""Console entry point: launch the browser page or run a one-off detection."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path
from typing import Sequence

from .container import ApplicationContainer
from .crosscutting.config import load_settings
from .domain.categories import PlasticCategory
from .domain.image import SelectedImage
from .domain.state import ClientState, Outcome
from .infrastructure.preview_store import InMemoryPreviewStore
from .presentation.view_models import RECYCLABLE_NOTE, ResultsViewModel

PAGE_PATH = Path(__file__).resolve().parent / "presentation" / "streamlit_app.py"

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--service-url", default=None, help="Base URL of the detection service.")
    common.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds.")
    common.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, ...).")

    parser = argparse.ArgumentParser(
        prog="plastic-detect",
        description="Submit images to a detection service and report recyclable plastics",
    )
    subcommands = parser.add_subparsers(dest="command", required=True)

    ui = subcommands.add_parser("ui", parents=[common], help="Launch the browser interface.")
    ui.add_argument("--port", type=int, default=8501, help="Port for the Streamlit server.")

    detect = subcommands.add_parser("detect", parents=[common], help="Submit a single image and print the results.")
    detect.add_argument("image", type=Path, help="Path to the image file.")
    return parser


def run_ui(args: argparse.Namespace) -> int:
    from streamlit.web import cli as streamlit_cli

    # The page builds its own container, so settings travel through the environment.
    for name, value in (("SERVICE_URL", args.service_url), ("REQUEST_TIMEOUT", args.timeout), ("LOG_LEVEL", args.log_level)):
        if value is not None:
            os.environ[f"PDC_{name}"] = str(value)
    sys.argv = ["streamlit", "run", str(PAGE_PATH), "--server.port", str(args.port)]
    return streamlit_cli.main()


def format_report(state: ClientState) -> list[str]:
    lines = [state.status.text]
    results = ResultsViewModel.from_state(state)
    if not results.visible:
        return lines
    counts = ", ".join(f"{category.display_name}={state.counts.of(category)}" for category in PlasticCategory)
    lines.append(f"counts: {counts} total={results.total}")
    for row in results.rows:
        line = f"label={row.label} conf={row.confidence_text} bbox={row.bbox_text}"
        if row.recyclable:
            line = f"{line} {RECYCLABLE_NOTE}"
        lines.append(line)
    return lines


def run_detect(args: argparse.Namespace, container: ApplicationContainer) -> int:
    if not args.image.is_file():
        print(f"Image not found: {args.image}", file=sys.stderr)
        return EXIT_USAGE

    container.set_preview_store_factory(lambda _settings: InMemoryPreviewStore())
    with container.detection_client() as client:
        client.select_image(SelectedImage.from_path(args.image))
        state = client.submit()

    for line in format_report(state):
        print(line)
    return EXIT_FAILED if state.outcome is Outcome.FAILED else EXIT_OK


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    if args.command == "ui":
        return run_ui(args)

    settings = load_settings(
        service_url=args.service_url,
        request_timeout=args.timeout,
        log_level=args.log_level,
    )
    container = ApplicationContainer(settings)
    container.ensure_configured()
    try:
        return run_detect(args, container)
    finally:
        container.close()


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    raise SystemExit(main())
