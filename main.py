#!/usr/bin/env python3
"""
╔══════════════════════════════════════════════════════════════════╗
║        Graph Traversal Visualizer v1.0 — Entry Point             ║
║                                                                  ║
║  License : MIT                                                   ║
║  Run     : python main.py [--theme dark|light] [--speed MS]      ║
║                           [--log-level LEVEL]                    ║
║                                                                  ║
║  Architecture:                                                   ║
║    main.py ──► visualizer.TraversalWindow                        ║
║                  └── controller.GraphController                  ║
║                        ├── graph_model.Graph                     ║
║                        ├── traversal.bfs / dfs                   ║
║                        ├── animation.AnimationPlayer             ║
║                        └── matrix.build_matrix                   ║
║                                                                  ║
║  Dependencies:                                                   ║
║    • tkinter (standard library)                                  ║
║    • Pillow, reportlab, opencv-python / imageio (export)         ║
╚══════════════════════════════════════════════════════════════════╝
"""

import argparse
import logging
import sys

from settings import Settings, THEMES


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="graph-traversal-visualizer",
        description="Draw an undirected graph and animate BFS / DFS on it.")
    parser.add_argument("--theme", choices=sorted(THEMES),
                        help="colour theme (saved for next time)")
    parser.add_argument("--speed", type=int, metavar="MS",
                        help="milliseconds per animation step")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="console logging level (default: WARNING)")
    return parser.parse_args(argv)


def build_settings(args):
    """Load saved settings and apply command-line overrides."""
    settings = Settings()
    if args.theme:
        settings.theme = args.theme
    if args.speed is not None:
        if args.speed <= 0:
            raise SystemExit("--speed must be positive")
        settings.anim_speed = args.speed
    if args.theme or args.speed is not None:
        settings.save()
    return settings


def main(argv=None) -> None:
    """
    Application entry point.

    Flow:
      1. Parse command line and configure logging
      2. Load user settings from disk
      3. Open the visualizer window and enter the tkinter mainloop
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = build_settings(args)

    from visualizer import open_visualizer
    open_visualizer(settings=settings)


if __name__ == "__main__":
    main(sys.argv[1:])
