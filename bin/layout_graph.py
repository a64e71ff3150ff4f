#!/usr/bin/env python3
"""
Graph Layout CLI

Loads a graph document, runs the enabled analyses and advances the
force-directed layout for a number of ticks, then reports the result.

Modes:
    --components  component colouring (SCCs when the graph is directed)
    --bridges     bridges and cut vertices (undirected only)
    --tree        DFS tree layering with back edges (undirected only)
    --lock        freeze the physics (drag and boundary correction only)

Usage:
    python bin/layout_graph.py graph.json --bridges --ticks 300
    python bin/layout_graph.py graph.yaml --tree -o out/layout.json --png out/layout.png
    python bin/layout_graph.py graph.json --directed --components --json
"""
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import argparse
import logging

from graphcanvas.application.container import Container, Settings
from graphcanvas.adapters.inbound.graph_loader import load_graph
from graphcanvas.adapters.outbound.json_exporter import JsonSnapshotExporter
from graphcanvas.application.services.session import LayoutSnapshot
from graphcanvas.domain.config.display import DisplaySettings, DEFAULT_NODE_RADIUS


# ---------------------------------------------------------------------------
# CLI Argument Parsing
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with clear grouping."""
    parser = argparse.ArgumentParser(
        prog="layout_graph",
        description="Analyse a graph and run its force-directed layout.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  %(prog)s graph.json --bridges            Mark bridges and cut vertices
  %(prog)s graph.json --tree --ticks 600   Layer the DFS forest
  %(prog)s graph.json -o layout.json       Export the final snapshot
""",
    )
    parser.add_argument("graph", help="Graph document (.json, .yaml, .yml)")

    # --- Modes ---
    modes = parser.add_argument_group("Modes")
    modes.add_argument("--directed", action="store_true",
                       help="Treat the graph as directed (overrides the document)")
    modes.add_argument("--components", action="store_true", help="Compute components")
    modes.add_argument("--bridges", action="store_true", help="Compute bridges and cut vertices")
    modes.add_argument("--tree", action="store_true", help="Tree layering with back edges")
    modes.add_argument("--lock", action="store_true", help="Lock node positions")

    # --- Simulation ---
    sim = parser.add_argument_group("Simulation")
    sim.add_argument("--ticks", type=int, default=300, help="Ticks to simulate (default: 300)")
    sim.add_argument("--width", type=float, default=None, help="Canvas width in pixels")
    sim.add_argument("--height", type=float, default=None, help="Canvas height in pixels")
    sim.add_argument("--radius", type=float, default=DEFAULT_NODE_RADIUS, help="Node radius")
    sim.add_argument("--seed", type=int, default=None, help="Seed for initial placement")
    sim.add_argument("--physics", metavar="FILE", help="YAML file overriding physics constants")
    sim.add_argument("--realtime", action="store_true",
                     help="Pace ticks at the configured frame rate")

    # --- Output ---
    output = parser.add_argument_group("Output")
    output.add_argument("--output", "-o", metavar="FILE", help="Export snapshot to JSON file")
    output.add_argument("--png", metavar="FILE", help="Render a PNG preview")
    output.add_argument("--dark", action="store_true", help="Dark palette for the preview")
    output.add_argument("--json", action="store_true", help="Print snapshot as JSON to stdout")
    output.add_argument("--quiet", "-q", action="store_true", help="Suppress console display")
    output.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


# ---------------------------------------------------------------------------
# Layout Logic
# ---------------------------------------------------------------------------

def run_layout(args: argparse.Namespace) -> LayoutSnapshot:
    """Build the session from parsed CLI arguments and advance the layout."""
    env = Settings.from_env()
    settings = Settings(
        width=args.width if args.width is not None else env.width,
        height=args.height if args.height is not None else env.height,
        fps=env.fps,
        seed=args.seed if args.seed is not None else env.seed,
        physics_path=args.physics or env.physics_path,
    )
    display = DisplaySettings(
        show_components=args.components,
        show_bridges=args.bridges,
        tree_mode=args.tree,
        lock_mode=args.lock,
        node_radius=args.radius,
    ).validate()

    container = Container.from_settings(settings, display)
    graph, directed = load_graph(args.graph)

    session = container.session()
    session.update_directed(directed or args.directed)
    session.update_graph(graph)

    if args.realtime:
        container.animation_loop().run(max_frames=args.ticks)
    else:
        for _ in range(args.ticks):
            session.tick()

    return session.snapshot()


# ---------------------------------------------------------------------------
# Output Helpers
# ---------------------------------------------------------------------------

def display_summary(snapshot: LayoutSnapshot) -> None:
    analysis = snapshot.analysis
    print(f"\nGraph: {len(snapshot.graph.nodes)} nodes, {len(snapshot.graph.edges)} edges "
          f"({'directed' if snapshot.directed else 'undirected'}), tick {snapshot.tick}")

    if analysis.components is not None:
        print(f"  Components : {analysis.component_count}")
    if analysis.cut_vertices is not None:
        cut = [u for u, flag in analysis.cut_vertices.items() if flag]
        print(f"  Cut verts  : {', '.join(cut) or '-'}")
    if analysis.bridges is not None:
        bridges = [k for k, flag in analysis.bridges.items() if flag]
        print(f"  Bridges    : {', '.join(bridges) or '-'}")
    if analysis.backedges is not None:
        back = [k for k, flag in analysis.backedges.items() if flag]
        print(f"  Back edges : {', '.join(back) or '-'}")

    print("\n  Positions:")
    for u, (x, y) in snapshot.positions.items():
        print(f"    {u:<12} x={x:8.1f}  y={y:8.1f}")


# ---------------------------------------------------------------------------
# Entry Point
# ---------------------------------------------------------------------------

def main() -> int:
    parser = build_parser()
    args = parser.parse_args()

    # Logging setup
    log_level = (
        logging.DEBUG if args.verbose
        else logging.WARNING if args.quiet
        else logging.INFO
    )
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )

    try:
        snapshot = run_layout(args)
        exporter = JsonSnapshotExporter()

        if args.output:
            exporter.export_json(snapshot, args.output)
            if not args.quiet:
                print(f"\n✓ Snapshot exported to: {args.output}")

        if args.png:
            from graphcanvas.adapters.outbound.snapshot_renderer import SnapshotRenderer
            SnapshotRenderer(dark_mode=args.dark).render(snapshot, args.png)
            if not args.quiet:
                print(f"✓ Preview rendered to: {args.png}")

        if args.json:
            print(exporter.dumps(snapshot))
        elif not args.quiet:
            display_summary(snapshot)

        return 0

    except Exception as exc:
        print(f"Error: {exc}", file=sys.stderr)
        if args.verbose:
            logging.exception("Layout failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
