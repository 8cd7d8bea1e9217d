#!/usr/bin/env python3
"""
run_pipeline.py – Height-map stereoscopy pipeline

Synthesises the left-eye view of a base image from its height map by
depth-image-based rendering, then packs it side by side with the base image.
Either a single job is given on the command line, or every job listed in a
YAML configuration file is processed in turn.

Usage
-----
    python run_pipeline.py drawing.png height.png -o stereo.png
    python run_pipeline.py drawing.png height.png -o left.png -t L -s 12px
    python run_pipeline.py --config configs/default.yaml
    python run_pipeline.py drawing.png height.png -o out.png --diagnostics results
"""

import argparse
import os
import sys
import time

import yaml

# Ensure the project root is on the Python path when invoked directly
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from stereoshift.errors import DimensionMismatch, StereoError
from stereoshift.sizing.effect_size import parse_effect_size
from stereoshift.warping.dibr import infer_left_view
from stereoshift.packing.side_by_side import LAYOUTS, compose_output
from stereoshift.utils.image_io import (
    load_base_image,
    load_height_map,
    save_image,
    ensure_parent_dir,
    ensure_output_dirs,
)
from stereoshift.utils.visualization import save_warp_overview, save_shift_histogram

__version__ = "1.0.0"

DEFAULT_CONFIG = "configs/default.yaml"

DEFAULTS = {
    "size": "2%",
    "layout": "RL",
    "results_dir": "results",
    "diagnostics": False,
    "jobs": [],
}


# ──────────────────────────────────────────────────────────────────────────────
# Helpers
# ──────────────────────────────────────────────────────────────────────────────

def load_config(path) -> dict:
    """Read a YAML config and fill in missing keys from ``DEFAULTS``."""
    cfg = dict(DEFAULTS)
    if path is not None:
        with open(path, "r") as fh:
            loaded = yaml.safe_load(fh) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"config must be a mapping: {path}")
        cfg.update(loaded)
    return cfg


def banner(text: str) -> None:
    width = 60
    print("\n" + "─" * width)
    print(f"  {text}")
    print("─" * width)


# ──────────────────────────────────────────────────────────────────────────────
# Per-job pipeline
# ──────────────────────────────────────────────────────────────────────────────

def run_job(job: dict, results_dir=None) -> dict:
    """Execute the full pipeline for a single job and return summary metrics.

    *job* holds ``base``, ``map``, ``output``, ``size`` and ``layout`` (and
    optionally ``name``).  When *results_dir* is given, diagnostic figures
    are written under ``results_dir/<name>/``.
    """
    name = job.get("name") or os.path.splitext(os.path.basename(job["output"]))[0]
    banner(f"Job: {name}")

    # ── 1. Load images ────────────────────────────────────────────────────────
    base = load_base_image(job["base"])
    depth = load_height_map(job["map"])
    height, width = base.shape[:2]
    print(f"  Loaded base {width}×{height}  /  "
          f"height map {depth.shape[1]}×{depth.shape[0]}")

    if base.shape[:2] != depth.shape:
        raise DimensionMismatch("base/map images have different dimensions")

    # ── 2. Effect size ────────────────────────────────────────────────────────
    effect_size = parse_effect_size(str(job["size"]), width)
    print(f"  Stage 1 – Effect size {job['size']!s} → {effect_size}px")

    # ── 3. Warp ───────────────────────────────────────────────────────────────
    print("  Stage 2 – Depth-based warp")
    left_view, holes = infer_left_view(base, depth, effect_size, return_holes=True)
    n_holes = int(holes.sum())
    print(f"    {n_holes} disocclusion pixels filled")

    # ── 4. Pack ───────────────────────────────────────────────────────────────
    layout = job["layout"]
    print(f"  Stage 3 – Packing ({layout})")
    output_img = compose_output(base, left_view, layout)

    # ── 5. Save ───────────────────────────────────────────────────────────────
    ensure_parent_dir(job["output"])
    save_image(output_img, job["output"])
    print(f"  Saved output → {job['output']}  "
          f"({output_img.shape[1]}×{output_img.shape[0]})")

    if results_dir is not None:
        ensure_output_dirs([name], base=results_dir)
        save_warp_overview(base, depth, left_view, holes, name, results_dir)
        save_shift_histogram(depth, effect_size, name, results_dir)
        print(f"  Saved diagnostics → {results_dir}/{name}/")

    return {
        "name": name,
        "width": width,
        "height": height,
        "effect_size": effect_size,
        "holes": n_holes,
        "layout": layout,
        "output_shape": output_img.shape[:2],
    }


# ──────────────────────────────────────────────────────────────────────────────
# Entry point
# ──────────────────────────────────────────────────────────────────────────────

def parse_args(argv=None):
    p = argparse.ArgumentParser(
        description="Add height map-based stereoscopy to drawings"
    )
    p.add_argument("base", nargs="?", default=None, help="base image")
    p.add_argument("map", nargs="?", default=None, help="height map image")
    p.add_argument(
        "-o", "--output", default=None,
        help="output image (inferred left channel)",
    )
    p.add_argument(
        "-s", "--size", default=None,
        help="maximum displacement (px, or use %% for pct width; default: 2%%)",
    )
    p.add_argument(
        "-t", "--type", dest="layout", choices=LAYOUTS, default=None,
        help="output image channel layout (default: RL)",
    )
    p.add_argument(
        "--config", default=None,
        help=f"YAML configuration file (default: {DEFAULT_CONFIG} if present)",
    )
    p.add_argument(
        "--diagnostics", metavar="DIR", default=None,
        help="write diagnostic figures under DIR",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return p.parse_args(argv)


def build_jobs(args, cfg: dict) -> list:
    """Resolve the list of jobs from the command line and config."""
    size = args.size if args.size is not None else cfg["size"]
    layout = args.layout if args.layout is not None else cfg["layout"]

    if args.base is not None or args.map is not None:
        if args.base is None or args.map is None:
            raise ValueError("both a base image and a height map are required")
        if args.output is None:
            raise ValueError("the following arguments are required: -o/--output")
        return [{
            "base": args.base,
            "map": args.map,
            "output": args.output,
            "size": size,
            "layout": layout,
        }]

    jobs = []
    for entry in cfg.get("jobs") or []:
        if not isinstance(entry, dict):
            raise ValueError(f"job entries must be mappings, got {entry!r}")
        for key in ("base", "map", "output"):
            if key not in entry:
                raise ValueError(f"job {entry.get('name', '?')!r} is missing {key!r}")
        job = {"size": size, "layout": layout}
        job.update(entry)
        jobs.append(job)
    if not jobs:
        raise ValueError("no inputs given and no jobs found in config")
    return jobs


def main(argv=None):
    args = parse_args(argv)

    # Load configuration
    config_path = args.config
    if config_path is None and os.path.exists(DEFAULT_CONFIG):
        config_path = DEFAULT_CONFIG
    if config_path is not None and not os.path.exists(config_path):
        print(f"[ERROR] Config file not found: {config_path}")
        sys.exit(1)
    try:
        cfg = load_config(config_path)
        jobs = build_jobs(args, cfg)
    except (yaml.YAMLError, ValueError) as e:
        print(f"[ERROR] {e}")
        sys.exit(1)

    results_dir = args.diagnostics
    if results_dir is None and cfg.get("diagnostics"):
        results_dir = cfg["results_dir"]

    banner("Height-Map Stereoscopy Pipeline")
    print(f"  Config     : {config_path or '(built-in defaults)'}")
    print(f"  Jobs       : {len(jobs)}")
    print(f"  Diagnostics: {results_dir + '/' if results_dir else 'disabled'}")

    t0 = time.time()
    all_metrics = []

    for job in jobs:
        try:
            metrics = run_job(job, results_dir)
        except (StereoError, OSError) as e:
            print(f"[ERROR] {e}")
            sys.exit(1)
        all_metrics.append(metrics)

    # ── Summary table ──────────────────────────────────────────────────────
    if len(all_metrics) > 1:
        banner("Results Summary")
        header = f"{'Job':<16} {'Size':>11} {'Shift':>7} {'Holes':>9} {'Layout':>7} {'Output':>13}"
        print(header)
        print("─" * len(header))
        for m in all_metrics:
            dims = f"{m['output_shape'][1]}×{m['output_shape'][0]}"
            size = f"{m['width']}×{m['height']}"
            print(f"{m['name']:<16} {size:>11} {m['effect_size']:>7} "
                  f"{m['holes']:>9} {m['layout']:>7} {dims:>13}")

    elapsed = time.time() - t0
    print(f"\nPipeline complete in {elapsed:.1f}s")


if __name__ == "__main__":
    main()
