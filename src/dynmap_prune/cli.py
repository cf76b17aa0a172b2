# cli.py
import argparse
import logging
import sys
from pathlib import Path

from .config import PruneConfig, load_json
from .errors import MissingFileError, PruneError
from .logging_config import setup_logging
from .model.loader import MarkerDocumentLoader
from .model.models import PruneMode, PruneResult
from .prune.pruner import DocumentPruner
from .prune.report import summarize, write_manifest
from .visualizer2d.renderer import PlotRenderer, kept_positions

logger = logging.getLogger("dynmap_prune.cli")

LEGACY_POSITIONALS = ("markers", "selections", "output", "mode")


def parse_args(argv=None):
    p = argparse.ArgumentParser(
        prog="dynmap-prune",
        description="Remove Dynmap markers inside (inclusive) or outside (exclusive) selected regions/chunks.",
    )
    # legacy order: markers_path selections_path output_path prune_mode
    p.add_argument("pos_markers", nargs="?", metavar="markers")
    p.add_argument("pos_selections", nargs="?", metavar="selections")
    p.add_argument("pos_output", nargs="?", metavar="output")
    p.add_argument("pos_mode", nargs="?", metavar="mode", choices=[m.value for m in PruneMode])
    p.add_argument("--config", help="JSON file with default option values")
    p.add_argument("--markers", help="marker document (default markers.yml)")
    p.add_argument("--selections", help="';'-separated selection list (default selections.csv)")
    p.add_argument("--output", help="pruned document (default markers_pruned.yml)")
    p.add_argument("--mode", choices=[m.value for m in PruneMode], help="default exclusive")
    p.add_argument("--manifest", help="deleted marker list (default removed_marker_ids.txt)")
    p.add_argument("--world", help="world whose markers are governed (default 'world')")
    p.add_argument("--progress-every", type=int, help="progress line interval in markers (default 5)")
    p.add_argument("--dry-run", action="store_true", default=None, help="do not write the pruned document")
    p.add_argument("--plot", help="save a PNG preview of selections and markers")
    p.add_argument("--log-level", help="DEBUG, INFO, WARNING, ... (default INFO)")
    p.add_argument("--log-file", help="also write the log to this file")
    return p, p.parse_args(argv)


def build_config(parser, args) -> PruneConfig:
    try:
        cfg_dict = load_json(args.config)
    except ValueError as e:
        parser.error(f"cannot read config {args.config}: {e}")
    # JSON is the default, CLI overrides it
    for k, v in vars(args).items():
        if k == "config" or k.startswith("pos_"): continue
        if v is not None: cfg_dict[k] = v
    for name in LEGACY_POSITIONALS:
        v = getattr(args, f"pos_{name}")
        if v is not None: cfg_dict[name] = v
    try:
        return PruneConfig.from_dict(cfg_dict)
    except (TypeError, ValueError) as e:
        parser.error(str(e))


def run(cfg: PruneConfig, loader: MarkerDocumentLoader | None = None) -> PruneResult:
    """load -> filter pass -> removal pass -> save, for one configuration."""
    loader = loader or MarkerDocumentLoader()

    # check both inputs before reading anything
    for path, what in ((cfg.markers, "marker document"), (cfg.selections, "selection list")):
        if not Path(path).is_file():
            raise MissingFileError(path, what)

    doc = loader.load_markers(cfg.markers)
    selections = loader.load_selections(cfg.selections)

    pruner = DocumentPruner(
        selections, cfg.mode,
        target_world=cfg.world, progress_every=cfg.progress_every,
    )
    result = pruner.prune(doc)

    if cfg.dry_run:
        logger.info(f"Dry run: {cfg.output} not written")
    else:
        loader.save_markers(doc, cfg.output)
    write_manifest(result, cfg.manifest)

    if cfg.plot:
        PlotRenderer(selections).draw(kept_positions(doc, cfg.world), result, cfg.plot)

    logger.info(summarize(result))
    return result


def main(argv=None) -> int:
    parser, args = parse_args(argv)
    cfg_file_error = None
    try:
        cfg = build_config(parser, args)
    except MissingFileError as e:
        cfg, cfg_file_error = None, e

    try:
        setup_logging(cfg.log_level if cfg else "INFO", cfg.log_file if cfg else None)
    except ValueError as e:
        parser.error(str(e))
    if cfg_file_error is not None:
        logger.error(str(cfg_file_error))
        return cfg_file_error.exit_code

    try:
        run(cfg)
    except PruneError as e:
        logger.error(str(e))
        return e.exit_code
    logger.info("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
