import argparse
import os
from typing import List, Optional

from obd_sampler.controller.context import PipelineStage
from obd_sampler.controller.pipeline_controller import PipelineController
from obd_sampler.data_processing.comparison_overlay import OverlaySource
from obd_sampler.data_processing.exceptions import SamplerError
from obd_sampler.data_processing.sampler import validate_sample_rate
from obd_sampler.settings import DEFAULT_SAMPLE_RATE, PipelineConfig, default_storage_dir
from obd_sampler.utils.column_stats import format_number
from obd_sampler.utils.file_scanner import FileSystemScanner


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="OBD2 data sampler CLI")

    # Input/Output
    parser.add_argument("paths", nargs="*", help="CSV files or folders, consolidated in the given order")
    parser.add_argument("-r", "--sample-rate", default=str(DEFAULT_SAMPLE_RATE),
                        help="Keep 1 out of every N rows (default: %(default)s)")
    parser.add_argument("-o", "--output-dir", type=str, help="Write sampled-data.csv to this folder")

    # Chart
    parser.add_argument("-f", "--field", type=str, help="Field to chart (column name or index)")
    parser.add_argument("-p", "--plot", type=str, help="Save the chart of --field to this PNG file")
    parser.add_argument("--overlay", choices=["none"] + [s.value for s in OverlaySource], default="none",
                        help="Overlay the example or the cached dataset on the chart")

    # Cache
    parser.add_argument("--save-cache", action="store_true", help="Save the computed columns for later comparison")
    parser.add_argument("--clear-cache", action="store_true", help="Remove the cached columns")
    parser.add_argument("--storage-dir", type=str, default=None,
                        help=f"Local storage folder (default: {default_storage_dir()})")
    return parser


def resolve_field(controller: PipelineController, field: str) -> Optional[int]:
    """Match --field against the chartable columns by name, then by index."""
    fields = controller.eligible_fields()
    for index, name in fields:
        if name == field:
            return index
    if field.isdigit() and int(field) in dict(fields):
        return int(field)
    return None


def print_columns(controller: PipelineController) -> None:
    columns = controller.context.columns or {}
    print(f"[INFO] {len(columns)} columns, {len(controller.eligible_fields())} chartable")
    for index, name in controller.eligible_fields():
        column = columns[index]
        print(f"  {index:>3}  {name}: max {format_number(column.max)} | "
              f"avg {format_number(column.avg)} | min {format_number(column.min)}")


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    config = PipelineConfig()
    if args.storage_dir:
        config.storage_dir = args.storage_dir

    try:
        config.sample_rate = validate_sample_rate(args.sample_rate)
    except SamplerError as e:
        print(f"[ERROR] {e.message}")
        return 2

    controller = PipelineController(config)

    if args.clear_cache:
        controller.clear_cache()
        if not args.paths:
            return 0

    # -------------------------------------------------------------------------
    # 1. Collect Files
    # -------------------------------------------------------------------------
    missing = [p for p in args.paths if not os.path.exists(p)]
    if missing:
        print(f"[ERROR] Path not found: {', '.join(missing)}")
        return 1

    files = FileSystemScanner.collect(args.paths)
    if not files:
        print("[INFO] No files found to process.")
        return 1
    print(f"[INFO] Found {len(files)} file(s).")

    # -------------------------------------------------------------------------
    # 2. Run the pipeline
    # -------------------------------------------------------------------------
    if controller.load_paths(files):
        controller.run()
    if controller.context.stage != PipelineStage.READY:
        return 1

    print_columns(controller)

    if args.output_dir:
        controller.save_download(args.output_dir)

    if args.save_cache:
        controller.save_cache()

    # -------------------------------------------------------------------------
    # 3. Chart
    # -------------------------------------------------------------------------
    if args.field:
        index = resolve_field(controller, args.field)
        if index is None:
            print(f"[ERROR] Field '{args.field}' not found or has no integer values")
            return 1
        controller.select_field(index)
        if args.overlay != "none":
            if args.overlay == OverlaySource.CACHED.value and not controller.overlay.has_cached():
                print("[WARN] Nothing cached yet, run with --save-cache first")
            controller.set_overlay_source(OverlaySource(args.overlay))
            controller.set_overlay_enabled(True)

        primary = controller.primary_series()
        print(f"[INFO] {primary.name}: {len(primary.points)} points")
        overlay = controller.overlay_series()
        if controller.context.overlay_enabled and overlay is None:
            print(f"[WARN] No {args.overlay} column to compare with '{primary.name}'")

        if args.plot:
            controller.export_chart(args.plot)
    elif args.plot:
        print("[WARN] --plot needs --field")

    print("\n[INFO] Pipeline finished.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
