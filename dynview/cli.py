#!/usr/bin/env python3
"""
Command-line interface for dynview.

Usage:
    python -m dynview info graph.dyn --geometry
    python -m dynview render graph.dyn -o graph.png
    python -m dynview export graph.dyn -o graph.graphml
"""

import argparse
import sys
from pathlib import Path

from .client import GraphLoader
from .config.settings import get_settings
from .exceptions import DynViewError
from .monitoring.logger import setup_logging
from .visualization import MatplotlibRenderer, write_graphml


def info_command(args):
    """Print a load summary, optionally with per-node geometry"""
    loader = GraphLoader()
    try:
        loader.load(args.path)
    except DynViewError as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"✅ {loader.status}")
    graph, layout = loader.graph, loader.layout
    if graph.name or graph.id:
        print(f"📄 Graph: {graph.name or '(unnamed)'} [{graph.id or 'no id'}]")
    print(f"🔭 View: origin ({graph.view.x:g}, {graph.view.y:g}), zoom {graph.view.zoom:g}")

    out_of_range = sum(1 for c in layout.connectors if not c.in_range)
    if out_of_range:
        print(f"⚠️ {out_of_range} connectors reference ports past the end of their node")

    if args.geometry:
        for node in graph.nodes:
            g = layout.nodes[node.id]
            print(f"  • {node.display_label or node.id} @ ({g.x:g}, {g.y:g}) "
                  f"size {g.width:g}x{g.height:g}, {len(node.inputs)} in / {len(node.outputs)} out")
    return 0


def render_command(args):
    """Render a document to an image file"""
    loader = GraphLoader()
    try:
        loader.load(args.path)
        output = args.output or _default_output(args.path, '.png')
        renderer = MatplotlibRenderer(layout_engine=loader.layout_engine, dpi=args.dpi)
        written = renderer.render(loader.graph, output, layout=loader.layout)
    except DynViewError as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"✅ {loader.status}")
    print(f"🖼️ Rendered to {written}")
    return 0


def export_command(args):
    """Export a document as GraphML"""
    loader = GraphLoader()
    try:
        loader.load(args.path)
        output = args.output or _default_output(args.path, '.graphml')
        written = write_graphml(loader.graph, output, layout=loader.layout)
    except DynViewError as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"✅ {loader.status}")
    print(f"📁 Exported to {written}")
    return 0


def _default_output(path: str, suffix: str) -> Path:
    return get_settings().output_dir / (Path(path).stem + suffix)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=get_settings().app_name,
        description='Normalize visual-programming graph documents and lay them out'
    )
    parser.add_argument('--log-level', help='Override the configured log level')

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # Info command
    info_parser = subparsers.add_parser('info', help='Summarize a graph document')
    info_parser.add_argument('path', help='Path to a .dyn or .json document')
    info_parser.add_argument('--geometry', action='store_true', help='Print position and size of every node')
    info_parser.set_defaults(func=info_command)

    # Render command
    render_parser = subparsers.add_parser('render', help='Render a graph document to PNG, SVG or PDF')
    render_parser.add_argument('path', help='Path to a .dyn or .json document')
    render_parser.add_argument('-o', '--output', help='Output file (default: <output_dir>/<name>.png)')
    render_parser.add_argument('--dpi', type=int, help='Raster resolution')
    render_parser.set_defaults(func=render_command)

    # Export command
    export_parser = subparsers.add_parser('export', help='Export a graph document as GraphML')
    export_parser.add_argument('path', help='Path to a .dyn or .json document')
    export_parser.add_argument('-o', '--output', help='Output file (default: <output_dir>/<name>.graphml)')
    export_parser.set_defaults(func=export_command)

    return parser


def main(argv=None):
    """Main CLI entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        if args.log_level:
            setup_logging(args.log_level.upper())
        return args.func(args)
    except DynViewError as e:
        print(f"❌ Error: {e}")
        return 1
    except KeyboardInterrupt:
        print("\n⚠️ Operation cancelled by user")
        return 1


if __name__ == "__main__":
    sys.exit(main())
